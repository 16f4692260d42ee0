class DecodeError(Exception):
    """A file could not be decoded. No partial result is available."""


class FormatError(DecodeError):
    """The magic bytes at the start of a file or block are not the expected ones."""

    def __init__(self, kind, got, expected):
        self.kind = kind
        self.got = got
        self.expected = expected
        super().__init__("unknown %s format %r, expected %r" % (kind, got, expected))


class TruncatedError(DecodeError):
    """Unexpected EOF while reading a fixed-size section.

    `expected` is the declared number of records and `index` the record
    being read when the input ran out, where that applies.
    """

    def __init__(self, message, expected=None, index=None):
        self.expected = expected
        self.index = index
        super().__init__(message)


class UnsupportedError(DecodeError):
    """A variant tag (compression type, frame type) has no known meaning."""

    def __init__(self, what, tag):
        self.tag = tag
        super().__init__("unsupported %s %d" % (what, tag))


class EncodeError(Exception):
    """A decoded stream cannot be written back in its file layout."""
