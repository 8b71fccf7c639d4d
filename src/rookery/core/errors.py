"""Exceptions raised by the core and the save codec."""

from __future__ import annotations


class CoordinateError(ValueError):
    """Raised when a coordinate falls outside the 8x8 board."""


class LoadError(Exception):
    """Base class for rejected save data."""


class TooShortError(LoadError):
    """Input ended before a complete record could be read."""


class ChecksumMismatchError(LoadError):
    """Stored CRC32 does not match the bytes it protects."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Checksum mismatch: stored {expected:#010x}, computed {actual:#010x}"
        )
        self.expected = expected
        self.actual = actual


class UnknownPieceTagError(LoadError):
    """A piece record carries a kind tag outside the known enumeration."""

    def __init__(self, tag: int) -> None:
        super().__init__(f"Unknown piece tag: {tag}")
        self.tag = tag


class CorruptPayloadError(LoadError):
    """Checksums matched but the record structure is invalid."""
