"""Byte-exact reading of fixed-width words from a binary buffer."""

from __future__ import annotations

__all__ = ["BinaryReader", "ByteOrder"]

import struct
import typing as t

from plydecode.numeric import NumericKind

#: The :py:mod:`struct` byte order prefix, ``"<"`` (little-endian) or ``">"`` (big-endian).
ByteOrder: t.TypeAlias = t.Literal["<", ">"]


class BinaryReader:
    """A forward-only cursor over a byte buffer.

    Every read consumes exactly the width of the requested word, so the
    position always reflects the number of bytes decoded so far.
    """

    def __init__(self, data: bytes, byte_order: ByteOrder = "<") -> None:
        """Initialize the reader.

        :param data: The buffer to read from.
        :param byte_order: The byte order of multi-byte words. Default is little-endian.
        """
        if byte_order not in ("<", ">"):
            raise ValueError(f"Invalid byte order '{byte_order}'")

        self._data = memoryview(data)
        self._pos = 0
        self._byte_order = byte_order
        self._structs = {kind: struct.Struct(byte_order + kind.format_char) for kind in NumericKind}

    @property
    def byte_order(self) -> ByteOrder:
        """The byte order used for multi-byte words."""
        return self._byte_order  # type: ignore[return-value]

    @property
    def position(self) -> int:
        """The number of bytes consumed so far."""
        return self._pos

    @property
    def remaining(self) -> int:
        """The number of bytes left in the buffer."""
        return len(self._data) - self._pos

    def is_eof(self) -> bool:
        """Check whether the whole buffer has been consumed.

        :return: ``True`` if no bytes are left.
        """
        return self._pos >= len(self._data)

    def read_bytes(self, count: int) -> bytes:
        """Read a run of raw bytes.

        :param count: The number of bytes to read.
        :return: The bytes read.
        :raises EOFError: If fewer than ``count`` bytes are left.
        """
        self._require(count)
        result = bytes(self._data[self._pos : self._pos + count])
        self._pos += count
        return result

    def skip(self, count: int) -> None:
        """Advance the cursor without decoding.

        :param count: The number of bytes to skip.
        :raises EOFError: If fewer than ``count`` bytes are left.
        """
        self._require(count)
        self._pos += count

    def read(self, kind: NumericKind) -> int | float:
        """Read one word of the given numeric kind.

        :param kind: The numeric kind to decode.
        :return: The decoded value.
        :raises EOFError: If the buffer ends inside the word.
        """
        unpacker = self._structs[kind]
        self._require(unpacker.size)
        (value,) = unpacker.unpack_from(self._data, self._pos)
        self._pos += unpacker.size
        return value

    def reader_for(self, kind: NumericKind) -> t.Callable[[], int | float]:
        """Bind a zero-argument reader for a numeric kind.

        :param kind: The numeric kind to decode.
        :return: A callable that reads and returns the next word of that kind.
        """
        unpacker = self._structs[kind]
        size = unpacker.size

        def read_word() -> int | float:
            self._require(size)
            (value,) = unpacker.unpack_from(self._data, self._pos)
            self._pos += size
            return value

        return read_word

    def read_int8(self) -> int:
        """Read a signed 8-bit integer."""
        return t.cast(int, self.read(NumericKind.INT8))

    def read_uint8(self) -> int:
        """Read an unsigned 8-bit integer."""
        return t.cast(int, self.read(NumericKind.UINT8))

    def read_int16(self) -> int:
        """Read a signed 16-bit integer."""
        return t.cast(int, self.read(NumericKind.INT16))

    def read_uint16(self) -> int:
        """Read an unsigned 16-bit integer."""
        return t.cast(int, self.read(NumericKind.UINT16))

    def read_int32(self) -> int:
        """Read a signed 32-bit integer."""
        return t.cast(int, self.read(NumericKind.INT32))

    def read_uint32(self) -> int:
        """Read an unsigned 32-bit integer."""
        return t.cast(int, self.read(NumericKind.UINT32))

    def read_float32(self) -> float:
        """Read an IEEE 754 single-precision float."""
        return t.cast(float, self.read(NumericKind.FLOAT32))

    def read_float64(self) -> float:
        """Read an IEEE 754 double-precision float."""
        return t.cast(float, self.read(NumericKind.FLOAT64))

    def _require(self, count: int) -> None:
        """Ensure that at least ``count`` bytes are left.

        :param count: The number of bytes needed.
        :raises EOFError: If the buffer is too short.
        """
        if self._pos + count > len(self._data):
            raise EOFError(f"Expected {count} bytes at offset {self._pos}, got {self.remaining}")
