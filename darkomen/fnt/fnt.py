"""Decoder for .FNT bitmap fonts.

A 16 byte header, two 16 color palettes, a table of exactly 256 glyph
headers and the glyph pixels, packed two 4-bit palette indexes per
byte with the low nibble first. Glyphs are drawn with the first palette.
"""

import logging
from collections import namedtuple

import numpy as np
from PIL import Image

from darkomen.binary import Color, check_magic, parse_at, read_source
from darkomen.errors import TruncatedError
from darkomen.fnt.fntstructs import (
    FORMAT, GLYPH_COUNT, GlyphHeader, GlyphType, Header, Palette,
)

logger = logging.getLogger(__name__)


class Font(namedtuple("Font", """
    palettes
    base_advance_width
    base_advance_height
    height2
    unknown1
    glyphs
""")):
    """
    base_advance_width is added to every glyph's own advance width.
    base_advance_height is the distance between lines; at 0 the bottom
    of one line touches the top of the next.
    """

    __slots__ = ()

    @property
    def line_height(self):
        return self.base_advance_height + self.height2


# advance_width is the x offset from this glyph's origin to the next one
Glyph = namedtuple("Glyph", "type image advance_width unknown1 unknown2")


def read_palette(data, pos):
    buf = parse_at(Palette, data, pos, "color table at %d" % pos)
    bgrx = np.frombuffer(buf, dtype=np.uint8).reshape(-1, 4)
    rgba = np.empty_like(bgrx)
    rgba[:, 0] = bgrx[:, 2]
    rgba[:, 1] = bgrx[:, 1]
    rgba[:, 2] = bgrx[:, 0]
    rgba[:, 3] = 255
    return rgba, pos + Palette.sizeof()


def read_glyph_headers(data, pos):
    headers = []
    for i in range(GLYPH_COUNT):
        buf = data[pos:pos + GlyphHeader.sizeof()]
        if len(buf) != GlyphHeader.sizeof():
            raise TruncatedError(
                "not enough glyph headers, expected to find %d, but got EOF while reading index %d"
                % (GLYPH_COUNT, i), expected=GLYPH_COUNT, index=i)
        headers.append(GlyphHeader.parse(buf))
        pos += GlyphHeader.sizeof()
    return headers, pos


def read_glyph(data, hdr, gh, palette, i):
    if gh.width == 0 and gh.height == 0:
        return Glyph(GlyphType.EMPTY, None, gh.advance_width, gh.unknown1, gh.unknown2)

    count = gh.width * gh.height
    size = count // 2
    start = hdr.glyph_data_offset + gh.data_offset
    raw = data[start:start + size]
    if len(raw) != size:
        raise TruncatedError("glyph %d: data at offset %d is %d byte(s), expected %d"
                             % (i, start, len(raw), size), index=i)

    packed = np.frombuffer(raw, dtype=np.uint8)
    nibbles = np.empty(size * 2, dtype=np.uint8)
    nibbles[0::2] = packed & 0x0F
    nibbles[1::2] = packed >> 4

    # an odd pixel count leaves the last pixel without data
    pixels = np.zeros((count, 4), dtype=np.uint8)
    pixels[:len(nibbles)] = palette[nibbles]

    image = Image.frombytes("RGBA", (gh.width, gh.height), pixels.tobytes())
    return Glyph(GlyphType.NORMAL, image, gh.advance_width, gh.unknown1, gh.unknown2)


def decode(src):
    """Decode a font from a bytes-like object or a binary file."""
    data = read_source(src)

    hdr = parse_at(Header, data, 0, "font header")
    check_magic("font", hdr.format, FORMAT)
    pos = Header.sizeof()

    palette1, pos = read_palette(data, pos)
    palette2, pos = read_palette(data, pos)
    headers, pos = read_glyph_headers(data, pos)
    logger.debug("glyph data starts at %d", hdr.glyph_data_offset)

    glyphs = tuple(read_glyph(data, hdr, gh, palette1, i) for i, gh in enumerate(headers))
    palettes = tuple(tuple(Color(*map(int, c)) for c in p) for p in (palette1, palette2))

    return Font(palettes, hdr.base_advance_width, hdr.base_advance_height,
                hdr.height2, hdr.unknown1, glyphs)
