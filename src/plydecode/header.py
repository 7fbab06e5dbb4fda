"""Parsing of the PLY magic marker and header grammar."""

from __future__ import annotations

__all__ = ["HeaderParser", "check_magic", "parse_header"]

import logging
import typing as t

from plydecode.exceptions import PLYFormatError, PLYHeaderError
from plydecode.numeric import NumericKind
from plydecode.schema import Encoding, IndexListDescriptor, PropertyDescriptor, PropertyRole, Schema

if t.TYPE_CHECKING:
    ElementContext: t.TypeAlias = t.Literal["vertex", "face"] | None

logger = logging.getLogger(__name__)

#: The marker every PLY stream starts with.
MAGIC: t.Final[bytes] = b"ply"

#: The only format version this decoder understands.
SUPPORTED_VERSION: t.Final[str] = "1.0"

#: Face property names holding the vertex index list.
INDEX_LIST_NAMES: t.Final[tuple[str, ...]] = ("vertex_indices", "vertex_index")


class BinaryStream(t.Protocol):
    """A readable binary stream."""

    def read(self, size: int = -1, /) -> bytes: ...

    def readline(self, size: int = -1, /) -> bytes: ...


def check_magic(stream: BinaryStream) -> None:
    """Consume and verify the magic marker and its separator byte.

    :param stream: The input stream, positioned at its first byte.
    :raises PLYFormatError: If the stream does not start with ``ply``.
    """
    marker = stream.read(len(MAGIC) + 1)
    if len(marker) <= len(MAGIC) or marker[: len(MAGIC)] != MAGIC:
        raise PLYFormatError(f"Missing '{MAGIC.decode()}' marker at the start of the stream")


class HeaderParser:
    """Line-by-line parser of the header grammar.

    The parser keeps track of the element currently being described so that
    ``property`` lines can be attributed to it. Properties of elements other
    than ``vertex`` and ``face`` are checked for well-formedness and then
    dropped.
    """

    def __init__(self) -> None:
        """Initialize an empty parser state."""
        self._encoding: Encoding | None = None
        self._version = SUPPORTED_VERSION
        self._vertex_count = 0
        self._face_count = 0
        self._vertex_properties: list[PropertyDescriptor] = []
        self._face_properties: list[PropertyDescriptor] = []
        self._face_indices = IndexListDescriptor()
        self._comments: list[str] = []
        self._obj_info: list[str] = []
        self._element: ElementContext = None
        self._line_number = 0

    def parse(self, stream: BinaryStream) -> Schema:
        """Parse header lines up to and including ``end_header``.

        :param stream: The input stream, positioned right after the magic marker.
        :return: The schema declared by the header. It is not validated yet.
        :raises PLYFormatError: If the ``format`` line is missing or invalid.
        :raises PLYHeaderError: If any other header line is malformed.
        """
        while True:
            raw = stream.readline()
            if not raw:
                raise PLYHeaderError("Unexpected end of stream before 'end_header'")

            self._line_number += 1
            try:
                line = raw.decode("ascii").strip()
            except UnicodeDecodeError:
                raise PLYHeaderError("Header contains non-ASCII bytes", self._line_number) from None

            if not line:
                continue

            keyword, *rest = line.split(None, 1)
            trailer = rest[0] if rest else ""

            if keyword == "end_header":
                break

            handler = self._HANDLERS.get(keyword)
            if handler is None:
                logger.debug("Ignoring unknown header keyword '%s' on line %d", keyword, self._line_number)
                continue

            handler(self, trailer)

        return self._build()

    def _parse_format(self, trailer: str) -> None:
        tokens = trailer.split()
        if len(tokens) != 2:
            raise PLYFormatError(f"Malformed format line: 'format {trailer}'")

        token, version = tokens
        try:
            encoding = Encoding(token)
        except ValueError:
            raise PLYFormatError(f"Unsupported format '{token}'") from None

        if version != SUPPORTED_VERSION:
            raise PLYFormatError(f"Unsupported format version '{version}', expected '{SUPPORTED_VERSION}'")

        self._encoding = encoding
        self._version = version

    def _parse_element(self, trailer: str) -> None:
        tokens = trailer.split()
        if len(tokens) != 2:
            raise PLYHeaderError(f"Malformed element line: 'element {trailer}'", self._line_number)

        name, count_token = tokens
        try:
            count = int(count_token)
        except ValueError:
            raise PLYHeaderError(f"Invalid count '{count_token}' for element '{name}'", self._line_number) from None

        if count < 0:
            raise PLYHeaderError(f"Negative count {count} for element '{name}'", self._line_number)

        if name == "vertex":
            self._element = "vertex"
            self._vertex_count = count
        elif name == "face":
            self._element = "face"
            self._face_count = count
        else:
            logger.debug("Skipping properties of unsupported element '%s'", name)
            self._element = None

    def _parse_property(self, trailer: str) -> None:
        tokens = trailer.split()
        if tokens and tokens[0] == "list":
            if len(tokens) != 4:
                raise PLYHeaderError(f"Malformed list property: 'property {trailer}'", self._line_number)

            _, count_token, type_token, name = tokens
        else:
            if len(tokens) != 2:
                raise PLYHeaderError(f"Malformed property: 'property {trailer}'", self._line_number)

            count_token = None
            type_token, name = tokens

        if self._element is None:
            return

        kind = self._kind(type_token)
        count_kind = self._kind(count_token) if count_token is not None else None

        if self._element == "vertex":
            role = PropertyRole.from_name(name) if count_kind is None else PropertyRole.GENERIC
            self._vertex_properties.append(PropertyDescriptor(name, role, kind, count_kind))
        elif name in INDEX_LIST_NAMES:
            if count_kind is None:
                raise PLYHeaderError(f"Face property '{name}' must be a list", self._line_number)

            self._face_indices = IndexListDescriptor(count_kind, kind)
        else:
            self._face_properties.append(PropertyDescriptor(name, PropertyRole.GENERIC, kind, count_kind))

    def _parse_comment(self, trailer: str) -> None:
        self._comments.append(trailer.strip())

    def _parse_obj_info(self, trailer: str) -> None:
        self._obj_info.append(trailer.strip())

    def _kind(self, token: str) -> NumericKind:
        try:
            return NumericKind.from_token(token)
        except ValueError as e:
            raise PLYHeaderError(str(e), self._line_number) from None

    def _build(self) -> Schema:
        if self._encoding is None:
            raise PLYFormatError("Header does not declare a format")

        return Schema(
            encoding=self._encoding,
            vertex_count=self._vertex_count,
            face_count=self._face_count,
            vertex_properties=tuple(self._vertex_properties),
            face_properties=tuple(self._face_properties),
            face_indices=self._face_indices,
            version=self._version,
            comments=tuple(self._comments),
            obj_info=tuple(self._obj_info),
        )

    _HANDLERS: t.ClassVar[dict[str, t.Callable[[HeaderParser, str], None]]] = {
        "format": _parse_format,
        "element": _parse_element,
        "property": _parse_property,
        "comment": _parse_comment,
        "obj_info": _parse_obj_info,
    }


def parse_header(stream: BinaryStream) -> Schema:
    """Parse the header of a PLY stream.

    :param stream: The input stream, positioned right after the magic marker.
    :return: The schema declared by the header. It is not validated yet.
    :raises PLYFormatError: If the ``format`` line is missing or invalid.
    :raises PLYHeaderError: If any other header line is malformed.

    .. code-block:: python

        with open("model.ply", "rb") as f:
            check_magic(f)
            schema = parse_header(f)

    """
    return HeaderParser().parse(stream)
