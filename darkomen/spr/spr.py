"""Decoder for .SPR sprite files.

Layout: a 32 byte header, a table of 32 byte frame headers, a shared
color table and the (optionally compressed) frame pixel data. Pixels are
indexes into the color table, offset by the frame's own color table
offset, so one table can be sliced between frames.

Every color is decoded as fully opaque.
"""

import logging
from collections import namedtuple

import numpy as np
from PIL import Image

from darkomen.binary import check_magic, parse_at, read_source
from darkomen.errors import DecodeError, TruncatedError, UnsupportedError
from darkomen.spr.rle import unpack_bits, zero_runs
from darkomen.spr.sprstructs import (
    COLOR_SIZE, FORMAT, Compression, FrameHeader, FrameType, Header,
)

logger = logging.getLogger(__name__)

Sprite = namedtuple("Sprite", "format frames")

# `image` is an RGBA PIL image, or None for empty frames
Frame = namedtuple("Frame", "type x y width height image")


def read_frame_headers(data, hdr):
    headers = []
    for i in range(hdr.frame_count):
        offset = hdr.frame_header_offset + i * FrameHeader.sizeof()
        buf = data[offset:offset + FrameHeader.sizeof()]
        if len(buf) != FrameHeader.sizeof():
            raise TruncatedError(
                "sprite does not contain enough frame headers, expected to find %d, "
                "but got EOF while reading frame at index %d" % (hdr.frame_count, i),
                expected=hdr.frame_count, index=i)
        headers.append(FrameHeader.parse(buf))
    return headers


def read_palette(data, hdr):
    """Color table as an (n, 4) array of RGBA rows."""
    size = hdr.color_table_entries * COLOR_SIZE
    buf = data[hdr.color_table_offset:hdr.color_table_offset + size]
    if len(buf) != size:
        raise TruncatedError("could not read color table at offset %d: read %d byte(s), expected %d"
                             % (hdr.color_table_offset, len(buf), size))
    bgrx = np.frombuffer(buf, dtype=np.uint8).reshape(-1, COLOR_SIZE)
    rgba = np.empty_like(bgrx)
    rgba[:, 0] = bgrx[:, 2]
    rgba[:, 1] = bgrx[:, 1]
    rgba[:, 2] = bgrx[:, 0]
    rgba[:, 3] = 255
    return rgba


def read_indexes(data, hdr, fh, i):
    try:
        compression = Compression(fh.compression)
    except ValueError:
        raise UnsupportedError("compression type", fh.compression) from None

    start = hdr.frame_data_offset + fh.data_offset
    raw = data[start:start + fh.compressed_size]
    if len(raw) != fh.compressed_size:
        raise TruncatedError("frame %d: data at offset %d is %d byte(s), expected %d"
                             % (i, start, len(raw), fh.compressed_size), index=i)

    if compression == Compression.NONE:
        return bytes(raw)
    elif compression == Compression.PACKBITS:
        return unpack_bits(raw)
    elif compression == Compression.ZERO_RUNS:
        return zero_runs(raw)


def rasterize(indexes, palette, fh, i):
    count = fh.width * fh.height
    idx = np.frombuffer(indexes, dtype=np.uint8)
    if len(idx) != count:
        logger.warning("frame %d: %d pixel(s) of data for a %dx%d frame",
                       i, len(idx), fh.width, fh.height)

    n = min(count, len(idx))
    idx = idx[:n].astype(np.intp) + fh.color_table_offset
    if n and idx.max() >= len(palette):
        raise DecodeError("frame %d: color index %d is outside the %d entry color table"
                          % (i, idx.max(), len(palette)))

    # pixels without data stay transparent black
    pixels = np.zeros((count, 4), dtype=np.uint8)
    pixels[:n] = palette[idx]
    return pixels.reshape(fh.height, fh.width, 4)


def flip(pixels, frame_type):
    if frame_type == FrameType.FLIP_HORIZONTAL:
        return np.fliplr(pixels)
    elif frame_type == FrameType.FLIP_VERTICAL:
        return np.flipud(pixels)
    elif frame_type == FrameType.FLIP_BOTH:
        return np.flipud(np.fliplr(pixels))
    return pixels


def read_frames(data, hdr, headers, palette):
    frames = []
    last = None

    for i, fh in enumerate(headers):
        try:
            frame_type = FrameType(fh.type)
        except ValueError:
            raise UnsupportedError("frame type", fh.type) from None

        if frame_type == FrameType.EMPTY:
            image = None
        elif frame_type == FrameType.REPEAT:
            # no pixels of its own, shows the previous frame again
            image = last
        else:
            pixels = rasterize(read_indexes(data, hdr, fh, i), palette, fh, i)
            pixels = flip(pixels, frame_type)
            image = Image.frombytes("RGBA", (fh.width, fh.height), pixels.tobytes())
            last = image

        frames.append(Frame(frame_type, fh.x, fh.y, fh.width, fh.height, image))

    return tuple(frames)


def decode(src):
    """Decode a sprite from a bytes-like object or a binary file."""
    data = read_source(src)

    hdr = parse_at(Header, data, 0, "sprite header")
    check_magic("sprite", hdr.format, FORMAT)
    logger.debug("sprite with %d frame(s), %d color(s)", hdr.frame_count, hdr.color_table_entries)

    headers = read_frame_headers(data, hdr)
    if not headers:
        return Sprite(FORMAT.decode(), ())

    palette = read_palette(data, hdr)
    return Sprite(FORMAT.decode(), read_frames(data, hdr, headers, palette))
