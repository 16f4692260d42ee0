from enum import IntEnum

from construct import Bytes, Int8ul, Int16ul, Padding, Struct

FORMAT = b"FONT"

GLYPH_COUNT = 256
PALETTE_SIZE = 16


class GlyphType(IntEnum):
    NORMAL = 0
    EMPTY = 1 # width and height are 0, no pixel data


Header = Struct(
    "format"              / Bytes(4),
    "base_advance_width"  / Int16ul,
    "base_advance_height" / Int16ul,
    "height2"             / Int16ul,
    "unknown1"            / Int16ul,
    "glyph_data_offset"   / Int16ul,
    Padding(2),
)

# B, G, R, unused
Palette = Bytes(PALETTE_SIZE * 4)

GlyphHeader = Struct(
    "kind"          / Int8ul, # 0, 1 or 2, meaning unknown
    Padding(1),
    "unknown1"      / Int8ul, # this and unknown2 move the glyph vertically
    "unknown2"      / Int8ul,
    "width"         / Int16ul,
    "advance_width" / Int16ul,
    "height"        / Int16ul,
    Padding(2),
    "data_offset"   / Int16ul,
    Padding(2),
)
