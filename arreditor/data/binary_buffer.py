"""
Byte cursors used by the ARR reader and writer.

BinaryReader walks a fixed buffer; BinaryWriter appends to a growable one.
Both advance an offset and know nothing about entries.
"""

import struct

from .errors import ArrEncodeError, ArrTruncatedError


# Every ARR field is little-endian
_U32 = struct.Struct('<I')
_I32 = struct.Struct('<i')


class BinaryReader:
    """Sequential reader over a complete byte buffer."""

    def __init__(self, data: bytes):
        self._data = memoryview(bytes(data))
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self.offset

    def _require(self, count: int, what: str) -> None:
        if count > self.remaining:
            raise ArrTruncatedError(
                f"Truncated {what}: need {count} bytes at offset {self.offset}, "
                f"{self.remaining} left",
                self.offset,
            )

    def read_u32(self) -> int:
        """Read an unsigned 32-bit integer and advance by 4."""
        self._require(4, "uint32")
        value = _U32.unpack_from(self._data, self.offset)[0]
        self.offset += 4
        return value

    def read_i32(self) -> int:
        """Read a signed 32-bit integer and advance by 4."""
        self._require(4, "int32")
        value = _I32.unpack_from(self._data, self.offset)[0]
        self.offset += 4
        return value

    def read_bytes(self, count: int) -> bytes:
        """Read `count` raw bytes and advance past them."""
        if count < 0:
            raise ValueError("count must not be negative")
        self._require(count, f"{count}-byte field")
        value = self._data[self.offset:self.offset + count].tobytes()
        self.offset += count
        return value


class BinaryWriter:
    """Appending writer over a growable byte buffer."""

    def __init__(self):
        self._buffer = bytearray()

    @property
    def offset(self) -> int:
        return len(self._buffer)

    def write_u32(self, value: int) -> None:
        try:
            self._buffer += _U32.pack(value)
        except struct.error as e:
            raise ArrEncodeError(f"Cannot write {value!r} as uint32: {e}") from e

    def write_i32(self, value: int) -> None:
        try:
            self._buffer += _I32.pack(value)
        except struct.error as e:
            raise ArrEncodeError(f"Cannot write {value!r} as int32: {e}") from e

    def write_bytes(self, data: bytes) -> None:
        self._buffer += data

    def getvalue(self) -> bytes:
        """Return a copy of everything written so far."""
        return bytes(self._buffer)
