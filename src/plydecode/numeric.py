"""Registry of the fixed-width numeric types a PLY header may declare."""

from __future__ import annotations

__all__ = ["NumericKind"]

import enum
import typing as t


class NumericKind(enum.Enum):
    """A fixed-width numeric type of a PLY property."""

    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @classmethod
    def from_token(cls, token: str) -> NumericKind:
        """Look up the numeric kind for a header type token.

        Both the legacy names (``char``, ``uchar``, ``short``, ...) and the
        sized names (``int8``, ``uint8``, ``int16``, ...) are accepted.

        :param token: The type token as written in the header.
        :return: The matching numeric kind.
        :raises ValueError: If the token names no known type.
        """
        try:
            return _TOKENS[token]
        except KeyError:
            raise ValueError(f"Unknown numeric type '{token}'") from None

    @property
    def width(self) -> int:
        """The size of one value in bytes."""
        return _WIDTHS[self]

    @property
    def format_char(self) -> str:
        """The :py:mod:`struct` format character for one value."""
        return _FORMAT_CHARS[self]

    @property
    def is_float(self) -> bool:
        """Whether the kind is a floating-point type."""
        return self in (NumericKind.FLOAT32, NumericKind.FLOAT64)

    @property
    def is_signed(self) -> bool:
        """Whether the kind can represent negative values."""
        return self not in (NumericKind.UINT8, NumericKind.UINT16, NumericKind.UINT32)


_TOKENS: t.Final[dict[str, NumericKind]] = {
    "char": NumericKind.INT8,
    "int8": NumericKind.INT8,
    "uchar": NumericKind.UINT8,
    "uint8": NumericKind.UINT8,
    "short": NumericKind.INT16,
    "int16": NumericKind.INT16,
    "ushort": NumericKind.UINT16,
    "uint16": NumericKind.UINT16,
    "int": NumericKind.INT32,
    "int32": NumericKind.INT32,
    "uint": NumericKind.UINT32,
    "uint32": NumericKind.UINT32,
    "float": NumericKind.FLOAT32,
    "float32": NumericKind.FLOAT32,
    "double": NumericKind.FLOAT64,
    "float64": NumericKind.FLOAT64,
}

_WIDTHS: t.Final[dict[NumericKind, int]] = {
    NumericKind.INT8: 1,
    NumericKind.UINT8: 1,
    NumericKind.INT16: 2,
    NumericKind.UINT16: 2,
    NumericKind.INT32: 4,
    NumericKind.UINT32: 4,
    NumericKind.FLOAT32: 4,
    NumericKind.FLOAT64: 8,
}

_FORMAT_CHARS: t.Final[dict[NumericKind, str]] = {
    NumericKind.INT8: "b",
    NumericKind.UINT8: "B",
    NumericKind.INT16: "h",
    NumericKind.UINT16: "H",
    NumericKind.INT32: "i",
    NumericKind.UINT32: "I",
    NumericKind.FLOAT32: "f",
    NumericKind.FLOAT64: "d",
}
