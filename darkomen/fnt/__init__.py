from darkomen.fnt.fnt import Font, Glyph, decode
from darkomen.fnt.fntstructs import GlyphType

__all__ = ["Font", "Glyph", "GlyphType", "decode"]
