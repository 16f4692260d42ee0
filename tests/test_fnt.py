import pytest

from darkomen import fnt
from darkomen.binary import Color
from darkomen.errors import FormatError, TruncatedError
from darkomen.fnt import GlyphType
from darkomen.fnt.fntstructs import GLYPH_COUNT, GlyphHeader, Header

PALETTE1 = [(i * 16, i * 8, i, 0) for i in range(16)]
PALETTE2 = [(0, 0, 0, 0)] * 16


def glyph_header(width=0, height=0, data_offset=0, advance_width=0):
    return GlyphHeader.build(dict(
        kind=0, unknown1=1, unknown2=2, width=width, advance_width=advance_width,
        height=height, data_offset=data_offset,
    ))


def build_font(glyphs, data, count=GLYPH_COUNT):
    headers = glyphs + [glyph_header()] * (count - len(glyphs))
    palettes = b"".join(bytes([b, g, r, x]) for r, g, b, x in PALETTE1 + PALETTE2)
    table = b"".join(headers)
    glyph_data_offset = Header.sizeof() + len(palettes) + len(table)
    return Header.build(dict(
        format=b"FONT", base_advance_width=1, base_advance_height=2, height2=12,
        unknown1=0, glyph_data_offset=glyph_data_offset,
    )) + palettes + table + data


def test_decode():
    font = fnt.decode(build_font(
        [glyph_header(), glyph_header(width=2, height=2, data_offset=1, advance_width=3)],
        b"\xff\x21\x43",
    ))
    assert (font.base_advance_width, font.base_advance_height, font.height2) == (1, 2, 12)
    assert font.line_height == 14
    assert len(font.glyphs) == GLYPH_COUNT
    assert font.palettes[0][1] == Color(16, 8, 1, 255)
    assert len(font.palettes[1]) == 16

    empty, g = font.glyphs[:2]
    assert empty.type == GlyphType.EMPTY
    assert empty.image is None

    assert g.type == GlyphType.NORMAL
    assert g.advance_width == 3
    assert (g.unknown1, g.unknown2) == (1, 2)
    # low nibble first: 1, 2, 3, 4
    assert [g.image.getpixel((x, y))[:3] for y in range(2) for x in range(2)] == [
        PALETTE1[i][:3] for i in (1, 2, 3, 4)
    ]


def test_odd_pixel_count_leaves_last_pixel_transparent():
    font = fnt.decode(build_font([glyph_header(width=3, height=1)], b"\x21"))
    img = font.glyphs[0].image
    assert img.getpixel((1, 0))[:3] == PALETTE1[2][:3]
    assert img.getpixel((2, 0)) == (0, 0, 0, 0)


def test_bad_magic():
    with pytest.raises(FormatError):
        fnt.decode(b"TNOF" + bytes(200))


def test_not_enough_glyph_headers():
    with pytest.raises(TruncatedError, match="while reading index 10") as exc:
        fnt.decode(build_font([], b"", count=10))
    assert exc.value.expected == GLYPH_COUNT


def test_glyph_data_past_eof():
    with pytest.raises(TruncatedError, match="glyph 0"):
        fnt.decode(build_font([glyph_header(width=4, height=4)], b"\x00"))
