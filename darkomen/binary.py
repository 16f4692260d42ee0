"""Shared primitives for the little-endian record layouts used by every format."""

from collections import namedtuple
from io import BytesIO

from construct import Adapter, Bytes, Float32l, StreamError, Struct

from darkomen.errors import FormatError, TruncatedError

Vector = namedtuple("Vector", "x y z")
Color = namedtuple("Color", "r g b a")


def cstring(data):
    """Return the text of a NUL-terminated byte field.

    Everything after the first NUL is ignored. A field without a NUL runs
    to its full width.
    """
    data = bytes(data)
    end = data.find(b"\x00")
    if end != -1:
        data = data[:end]
    return data.decode("latin-1")


class FixedCString(Adapter):
    """A C string stored in a fixed-width field.

    The game's exporters don't clear their buffers, so the bytes after
    the terminator are often garbage and must not be decoded.
    """

    def __init__(self, length):
        super().__init__(Bytes(length))
        self.length = length

    def _decode(self, obj, context, path):
        return cstring(obj)

    def _encode(self, obj, context, path):
        return obj.encode("latin-1")[:self.length].ljust(self.length, b"\x00")


class VectorAdapter(Adapter):
    def _decode(self, obj, context, path):
        return Vector(obj.x, obj.y, obj.z)

    def _encode(self, obj, context, path):
        return dict(x=obj[0], y=obj[1], z=obj[2])


Vector3f = VectorAdapter(Struct(
    "x" / Float32l,
    "y" / Float32l,
    "z" / Float32l,
))


def read_source(src):
    """Random-access view of a bytes-like object or a binary file."""
    if hasattr(src, "read"):
        return memoryview(src.read())
    return memoryview(src)


def read_stream(src):
    """Sequential reader over a bytes-like object or a binary file."""
    if hasattr(src, "read"):
        return src
    return BytesIO(src)


def check_magic(kind, got, expected):
    if bytes(got) != expected:
        raise FormatError(kind, bytes(got), expected)


def parse_at(fmt, data, offset, what):
    """Parse the fixed-size record `fmt` found at `offset` in `data`."""
    size = fmt.sizeof()
    buf = data[offset:offset + size] if offset >= 0 else b""
    if len(buf) != size:
        raise TruncatedError("could not read %s at offset %d: read %d byte(s), expected %d"
                             % (what, offset, len(buf), size))
    return fmt.parse(buf)


def parse_stream(fmt, fd, what):
    try:
        return fmt.parse_stream(fd)
    except StreamError as e:
        raise TruncatedError("could not read %s: unexpected EOF" % what) from e


def read_exact(fd, size, what):
    buf = fd.read(size)
    if len(buf) != size:
        raise TruncatedError("could not read %s: read %d byte(s), expected %d"
                             % (what, len(buf), size))
    return buf
