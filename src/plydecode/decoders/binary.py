"""Decoder for the ``binary_little_endian`` and ``binary_big_endian`` PLY encodings."""

from __future__ import annotations

__all__ = ["BinaryDataDecoder"]

import logging
import typing as t

from plydecode.assembler import assemble_face, assemble_vertex
from plydecode.binary import BinaryReader
from plydecode.decoders.base import BaseDataDecoder, DecodeResult
from plydecode.exceptions import PLYRecordError

if t.TYPE_CHECKING:
    from plydecode.assembler import DecodedFace, DecodedVertex, RawRecord
    from plydecode.schema import PropertyDescriptor, PropertyRole

logger = logging.getLogger(__name__)

#: Reads the next value of a field, or skips it and returns ``None``.
FieldReader: t.TypeAlias = t.Callable[[], t.Union[int, float, None]]


def _read_count(reader: BinaryReader, prop: PropertyDescriptor) -> t.Callable[[], int]:
    assert prop.count_kind is not None
    read_word = reader.reader_for(prop.count_kind)

    def read() -> int:
        count = int(read_word())
        if count < 0:
            raise ValueError(f"Negative list length {count} for property '{prop.name}'")

        return count

    return read


def _list_skipper(reader: BinaryReader, prop: PropertyDescriptor) -> FieldReader:
    read_count = _read_count(reader, prop)
    width = prop.kind.width

    def skip() -> None:
        reader.skip(read_count() * width)

    return skip


def _scalar_skipper(reader: BinaryReader, prop: PropertyDescriptor) -> FieldReader:
    width = prop.kind.width

    def skip() -> None:
        reader.skip(width)

    return skip


class BinaryDataDecoder(BaseDataDecoder):
    """Decoder for fixed-width binary records.

    Binary records carry no delimiters: the width and order of the declared
    properties are the only structure, so every field is consumed exactly,
    including fields that are not used. A reader function is selected once
    per property before the first record is decoded.
    """

    def decode(self, data: bytes) -> DecodeResult:
        """Decode the vertex and face records of a binary data section.

        Faces whose index list is not a triangle are consumed and skipped, as
        are triangles referencing vertices that do not exist.

        :param data: The bytes following the ``end_header`` line.
        :return: The decoded points, colors and faces.
        :raises PLYRecordError: If the data ends inside a record.
        """
        reader = BinaryReader(data, self.schema.encoding.byte_order)

        vertices = self._decode_vertices(reader)
        faces, skipped = self._decode_faces(reader)

        if not reader.is_eof():
            logger.debug("Ignoring %d trailing bytes after the last face record", reader.remaining)

        return DecodeResult.from_records(vertices, faces, skipped)

    def _decode_vertices(self, reader: BinaryReader) -> list[DecodedVertex]:
        """Decode ``vertex_count`` vertex records.

        :param reader: The reader positioned at the first vertex record.
        :return: The decoded vertices.
        :raises PLYRecordError: If the data ends inside a vertex record.
        """
        fields: list[tuple[PropertyRole, FieldReader]] = []
        for prop in self.schema.vertex_properties:
            if prop.is_list:
                fields.append((prop.role, _list_skipper(reader, prop)))
            else:
                fields.append((prop.role, reader.reader_for(prop.kind)))

        vertices: list[DecodedVertex] = []
        for index in range(self.schema.vertex_count):
            record: RawRecord = {}
            try:
                for role, read in fields:
                    value = read()
                    if value is not None:
                        record[role] = float(value)
            except (EOFError, ValueError) as e:
                raise PLYRecordError(str(e), index, "vertex") from None

            vertices.append(assemble_vertex(record, self.with_colors))

        return vertices

    def _decode_faces(self, reader: BinaryReader) -> tuple[list[DecodedFace], int]:
        """Decode ``face_count`` face records.

        A face record starts with the vertex index list. Lists of length three
        yield a triangle; lists of any other length are read and discarded so
        that the following fields stay aligned. The remaining face properties
        are skipped according to their declared widths.

        :param reader: The reader positioned at the first face record.
        :return: The decoded faces and the number of skipped face records.
        :raises PLYRecordError: If the data ends inside a face record.
        """
        layout = self.schema.face_indices
        read_count = reader.reader_for(layout.count_kind)
        read_index = reader.reader_for(layout.index_kind)
        index_width = layout.index_kind.width

        skippers = [
            _list_skipper(reader, prop) if prop.is_list else _scalar_skipper(reader, prop)
            for prop in self.schema.face_properties
        ]

        vertex_count = self.schema.vertex_count
        faces: list[DecodedFace] = []
        skipped = 0

        for index in range(self.schema.face_count):
            try:
                count = int(read_count())
                if count < 0:
                    raise ValueError(f"Negative vertex index list length {count}")

                face = None
                if count == 3:
                    indices = (int(read_index()), int(read_index()), int(read_index()))
                    face = assemble_face(indices, vertex_count)
                    if face is None:
                        logger.debug("Skipping face %d: index out of range in %s", index, indices)
                else:
                    reader.skip(count * index_width)
                    logger.debug("Skipping face %d: %d vertex indices instead of 3", index, count)

                for skip in skippers:
                    skip()
            except (EOFError, ValueError) as e:
                raise PLYRecordError(str(e), index, "face") from None

            if face is None:
                skipped += 1
            else:
                faces.append(face)

        return faces, skipped
