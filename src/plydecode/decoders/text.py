"""Decoder for the ``ascii`` PLY encoding."""

from __future__ import annotations

__all__ = ["TextDataDecoder"]

import logging
import re
import typing as t

from plydecode.assembler import assemble_face, assemble_vertex
from plydecode.decoders.base import BaseDataDecoder, DecodeResult
from plydecode.exceptions import PLYRecordError
from plydecode.schema import PropertyRole

if t.TYPE_CHECKING:
    from plydecode.assembler import DecodedFace, DecodedVertex, RawRecord
    from plydecode.numeric import NumericKind
    from plydecode.schema import PropertyDescriptor

logger = logging.getLogger(__name__)

#: Reads one token starting at a position and returns its value and the position after it.
TokenReader: t.TypeAlias = t.Callable[[str, int], t.Tuple[float, int]]

_SIGNED = re.compile(r"[-+]?[0-9]+(?=\s|$)")
_UNSIGNED = re.compile(r"[0-9]+(?=\s|$)")
_REAL = re.compile(r"(?:[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?|(?i:[-+]?(?:nan|inf(?:inity)?)))(?=\s|$)")
_SPACE = re.compile(r"\s*")

#: A triangle line: the literal count 3 followed by three vertex indices.
_TRIANGLE = re.compile(r"^\s*3\s+([0-9]+)\s+([0-9]+)\s+([0-9]+)")


def _token_pattern(kind: NumericKind) -> re.Pattern[str]:
    if kind.is_float:
        return _REAL

    return _SIGNED if kind.is_signed else _UNSIGNED


def _scalar_reader(prop: PropertyDescriptor, kind: NumericKind) -> TokenReader:
    pattern = _token_pattern(kind)
    convert: t.Callable[[str], float] = float if kind.is_float else int

    def read(line: str, pos: int) -> tuple[float, int]:
        pos = _SPACE.match(line, pos).end()  # type: ignore[union-attr]
        match = pattern.match(line, pos)
        if match is None:
            raise ValueError(f"Expected {kind.value} for property '{prop.name}' at column {pos + 1}")

        return convert(match.group()), match.end()

    return read


def _list_reader(prop: PropertyDescriptor) -> TokenReader:
    assert prop.count_kind is not None
    read_count = _scalar_reader(prop, prop.count_kind)
    read_item = _scalar_reader(prop, prop.kind)

    def read(line: str, pos: int) -> tuple[float, int]:
        count, pos = read_count(line, pos)
        for _ in range(int(count)):
            _, pos = read_item(line, pos)

        return count, pos

    return read


class TextDataDecoder(BaseDataDecoder):
    """Decoder for whitespace-delimited ASCII records.

    Each vertex line holds one token per vertex property, in schema order.
    Each face line holds the literal count ``3`` followed by three vertex
    indices; other face properties are not read.
    """

    def decode(self, data: bytes) -> DecodeResult:
        """Decode the vertex and face lines of an ASCII data section.

        Face lines that are not triangles are skipped, as are triangles
        referencing vertices that do not exist.

        :param data: The bytes following the ``end_header`` line.
        :return: The decoded points, colors and faces.
        :raises PLYRecordError: If a vertex line does not match the schema.
        """
        try:
            text = data.decode("ascii")
        except UnicodeDecodeError as e:
            raise PLYRecordError(f"Data section contains non-ASCII bytes at offset {e.start}") from None

        lines = (line for line in text.splitlines() if line.strip())

        vertices = self._decode_vertices(lines)
        faces, skipped = self._decode_faces(lines)

        return DecodeResult.from_records(vertices, faces, skipped)

    def _decode_vertices(self, lines: t.Iterator[str]) -> list[DecodedVertex]:
        """Decode ``vertex_count`` vertex lines.

        :param lines: The remaining non-blank data lines.
        :return: The decoded vertices.
        :raises PLYRecordError: If a line is missing or a token does not match its property.
        """
        fields: list[tuple[PropertyRole, TokenReader]] = [
            (prop.role, _list_reader(prop) if prop.is_list else _scalar_reader(prop, prop.kind))
            for prop in self.schema.vertex_properties
        ]

        vertices: list[DecodedVertex] = []
        for index in range(self.schema.vertex_count):
            line = next(lines, None)
            if line is None:
                raise PLYRecordError(
                    f"Unexpected end of data, expected {self.schema.vertex_count} vertices", index, "vertex"
                )

            record: RawRecord = {}
            pos = 0
            for role, read in fields:
                try:
                    value, pos = read(line, pos)
                except ValueError as e:
                    raise PLYRecordError(str(e), index, "vertex") from None

                record[role] = value

            vertices.append(assemble_vertex(record, self.with_colors))

        return vertices

    def _decode_faces(self, lines: t.Iterator[str]) -> tuple[list[DecodedFace], int]:
        """Decode up to ``face_count`` face lines.

        :param lines: The remaining non-blank data lines.
        :return: The decoded faces and the number of skipped face lines.
        """
        vertex_count = self.schema.vertex_count
        faces: list[DecodedFace] = []
        skipped = 0
        read = 0

        for index in range(self.schema.face_count):
            line = next(lines, None)
            if line is None:
                break

            read += 1
            match = _TRIANGLE.match(line)
            if match is None:
                logger.debug("Skipping face %d: not a triangle: %r", index, line)
                skipped += 1
                continue

            indices = (int(match.group(1)), int(match.group(2)), int(match.group(3)))
            face = assemble_face(indices, vertex_count)
            if face is None:
                logger.debug("Skipping face %d: index out of range in %s", index, indices)
                skipped += 1
                continue

            faces.append(face)

        if read < self.schema.face_count:
            logger.warning("Data ended after %d of %d face lines", read, self.schema.face_count)

        return faces, skipped
