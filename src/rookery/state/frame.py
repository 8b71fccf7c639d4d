"""Checksum framing primitives shared by every persisted record.

A frame is ``[u32 crc32(payload)][payload]``.  All integers, checksums
included, are big-endian.
"""

from __future__ import annotations

import struct
import zlib

from rookery.core.errors import ChecksumMismatchError, CorruptPayloadError, TooShortError

_U8 = struct.Struct(">B")
_U32 = struct.Struct(">I")
_I64 = struct.Struct(">q")

CHECKSUM_SIZE = _U32.size


def checksum(payload: bytes) -> int:
    """Unsigned CRC32 of *payload*."""
    return zlib.crc32(payload) & 0xFFFFFFFF


def wrap_frame(payload: bytes) -> bytes:
    return _U32.pack(checksum(payload)) + payload


def unwrap_frame(frame: bytes) -> bytes:
    """Verify and strip the leading checksum, returning the payload."""
    if len(frame) < CHECKSUM_SIZE:
        raise TooShortError(
            f"Frame of {len(frame)} bytes cannot hold a {CHECKSUM_SIZE}-byte checksum"
        )
    (stored,) = _U32.unpack_from(frame, 0)
    payload = bytes(frame[CHECKSUM_SIZE:])
    actual = checksum(payload)
    if stored != actual:
        raise ChecksumMismatchError(stored, actual)
    return payload


class FrameWriter:
    """Append-only big-endian byte builder."""

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[bytes] = []

    def write_u8(self, value: int) -> None:
        self._parts.append(_U8.pack(value))

    def write_bool(self, value: bool) -> None:
        self.write_u8(1 if value else 0)

    def write_u32(self, value: int) -> None:
        self._parts.append(_U32.pack(value))

    def write_i64(self, value: int) -> None:
        self._parts.append(_I64.pack(value))

    def write_frame(self, payload: bytes) -> None:
        """Write a length-prefixed, checksum-wrapped sub-frame."""
        frame = wrap_frame(payload)
        self.write_u32(len(frame))
        self._parts.append(frame)

    def getvalue(self) -> bytes:
        return b"".join(self._parts)


class FrameReader:
    """Sequential reader matching :class:`FrameWriter`.

    Running out of input raises :class:`TooShortError`.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, size: int) -> memoryview:
        if self.remaining < size:
            raise TooShortError(
                f"Needed {size} bytes at offset {self._pos}, {self.remaining} left"
            )
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def read_u8(self) -> int:
        return _U8.unpack(self._take(_U8.size))[0]

    def read_bool(self) -> bool:
        value = self.read_u8()
        if value not in (0, 1):
            raise CorruptPayloadError(f"Invalid boolean byte: {value}")
        return value == 1

    def read_u32(self) -> int:
        return _U32.unpack(self._take(_U32.size))[0]

    def read_i64(self) -> int:
        return _I64.unpack(self._take(_I64.size))[0]

    def read_frame(self) -> bytes:
        """Read a length-prefixed sub-frame and return its verified payload."""
        length = self.read_u32()
        return unwrap_frame(bytes(self._take(length)))

    def expect_end(self) -> None:
        if self.remaining:
            raise CorruptPayloadError(f"{self.remaining} unexpected trailing bytes")
