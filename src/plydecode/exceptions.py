"""Exceptions raised while decoding PLY files."""

from __future__ import annotations

__all__ = [
    "PLYError",
    "PLYFormatError",
    "PLYHeaderError",
    "PLYRecordError",
    "PLYSchemaError",
]


class PLYError(Exception):
    """Base class for all PLY decoding errors."""


class PLYFormatError(PLYError):
    """Raised when the magic marker or the ``format`` line is invalid."""


class PLYHeaderError(PLYError):
    """Raised when a header line violates the header grammar."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        """Initialize the error.

        :param message: The error description.
        :param line_number: The 1-based header line number, if known.
        """
        self.line_number = line_number
        if line_number is not None:
            message = f"Header line {line_number}: {message}"

        super().__init__(message)


class PLYSchemaError(PLYError):
    """Raised when the declared vertex properties cannot describe a point cloud."""


class PLYRecordError(PLYError):
    """Raised when a data record cannot be decoded."""

    def __init__(self, message: str, record: int | None = None, element: str | None = None) -> None:
        """Initialize the error.

        :param message: The error description.
        :param record: The 0-based index of the failing record, if known.
        :param element: The element kind of the failing record, if known.
        """
        self.record = record
        self.element = element
        if element is not None and record is not None:
            message = f"{element.capitalize()} {record}: {message}"

        super().__init__(message)
