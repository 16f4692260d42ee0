"""Decoders for the binary asset formats of Warhammer: Dark Omen."""

from darkomen.errors import (
    DecodeError, EncodeError, FormatError, TruncatedError, UnsupportedError,
)

__all__ = [
    "DecodeError", "EncodeError", "FormatError", "TruncatedError",
    "UnsupportedError",
]
