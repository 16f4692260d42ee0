"""Run-length schemes used by compressed sprite frames.

Both are driven by a signed control byte. A non-negative code copies
the next code + 1 bytes verbatim. A negative code is a run: PackBits
repeats the following byte 1 - code times, zero-runs writes -code zero
bytes without reading a fill value. Running out of input on a control
byte ends the data; running out anywhere else is an error.
"""

import io
from struct import unpack

from darkomen.errors import TruncatedError


def _reader(src):
    if isinstance(src, (bytes, bytearray, memoryview)):
        return io.BytesIO(src)
    if isinstance(src, io.RawIOBase):
        # runs always end at EOF, so take the bytes and leave the stream alone
        return io.BytesIO(src.read())
    return src


def _read(fd, n, what):
    buf = fd.read(n)
    if len(buf) != n:
        raise TruncatedError("unexpected EOF reading %s: read %d byte(s), expected %d"
                             % (what, len(buf), n))
    return buf


def unpack_bits(src):
    """Decode PackBits data from a bytes-like object or a binary stream."""
    fd = _reader(src)
    out = bytearray()

    while True:
        b = fd.read(1)
        if not b:
            return bytes(out)
        code, = unpack("b", b)
        if code >= 0:
            out += _read(fd, code + 1, "literal run")
        elif code == -128:
            pass # no-op
        else:
            fill = _read(fd, 1, "repeated byte")
            out += fill * (1 - code)


def zero_runs(src):
    """Decode zero-run data from a bytes-like object or a binary stream."""
    fd = _reader(src)
    out = bytearray()

    while True:
        b = fd.read(1)
        if not b:
            return bytes(out)
        code, = unpack("b", b)
        if code >= 0:
            out += _read(fd, code + 1, "literal run")
        else:
            out += bytes(-code)
