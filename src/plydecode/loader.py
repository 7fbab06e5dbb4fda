"""Utilities for parsing and decoding PLY files."""

from __future__ import annotations

__all__ = ["PLYReader", "decode_ply", "load_ply"]

import contextlib
import io
import logging
import os
import typing as t

from plydecode.decoders import DecodeResult, get_decoder
from plydecode.exceptions import PLYError
from plydecode.header import check_magic, parse_header
from plydecode.material import Material, MaterialBinding
from plydecode.mesh import MeshKernel, PLYMesh
from plydecode.schema import Schema, validate_schema

if t.TYPE_CHECKING:
    from plydecode.header import BinaryStream
    from plydecode.mesh import MeshSink

logger = logging.getLogger(__name__)

#: Anything :py:func:`load_ply` accepts as input.
PLYSource: t.TypeAlias = t.Union[str, os.PathLike[str], bytes, t.BinaryIO]


@contextlib.contextmanager
def open_source(file: PLYSource) -> t.Iterator[BinaryStream]:
    """Open a PLY source as a binary stream.

    :param file: The path to the PLY file, raw bytes, or a binary file-like object.
    :return: A context manager yielding the stream. Only streams opened here are closed.
    """
    if isinstance(file, (bytes, bytearray)):
        yield io.BytesIO(file)
    elif isinstance(file, (str, os.PathLike)):
        with open(file, "rb") as f:
            yield f
    else:
        yield file


def wants_colors(schema: Schema, material: Material | None) -> bool:
    """Decide whether per-vertex colors should be decoded.

    The material itself is not modified; it is bound in :py:func:`commit`.

    :param schema: The validated schema.
    :param material: The material sink, if any.
    :return: ``True`` if a material is given and the schema carries colors.
    """
    return material is not None and schema.has_vertex_colors


def bind_material(material: Material, count: int) -> None:
    """Switch a material to per-vertex binding and reserve its colors.

    :param material: The material sink.
    :param count: The number of colors it is about to receive.
    """
    material.binding = MaterialBinding.PER_VERTEX
    material.reserve(count)


def decode_ply(stream: BinaryStream, material: Material | None = None) -> tuple[Schema, DecodeResult]:
    """Decode a PLY stream without committing the result to any sink.

    :param stream: The binary input stream, positioned at the magic marker.
    :param material: The material sink. If it is given and the file carries
        colors, colors are decoded. The material is not modified here.
    :return: A tuple containing the validated schema and the decoded records.
    :raises PLYFormatError: If the magic marker or the ``format`` line is invalid.
    :raises PLYHeaderError: If the header is malformed.
    :raises PLYSchemaError: If the vertex properties do not describe points.
    :raises PLYRecordError: If a data record cannot be decoded.
    """
    check_magic(stream)
    schema = parse_header(stream)
    validate_schema(schema)

    with_colors = wants_colors(schema, material)

    logger.debug(
        "Decoding %s data: %d vertices, %d faces",
        schema.encoding.value,
        schema.vertex_count,
        schema.face_count,
    )

    decoder = get_decoder(schema, with_colors)
    result = decoder.decode(stream.read())

    logger.info(
        "Decoded %d vertices and %d faces (%d skipped)",
        result.points.shape[0],
        result.faces.shape[0],
        result.skipped_faces,
    )

    return schema, result


def commit(result: DecodeResult, kernel: MeshSink, material: Material | None) -> None:
    """Hand decoded records to the sinks.

    :param result: The decoded records.
    :param kernel: The mesh sink, called exactly once.
    :param material: The material sink receiving per-vertex colors, if any.
    """
    if material is not None and result.colors.size > 0:
        bind_material(material, result.colors.shape[0])
        material.diffuse_colors.extend((float(r), float(g), float(b)) for r, g, b in result.colors)

    kernel.adopt(result.points, result.faces)


class PLYReader:
    """Reader that decodes PLY streams into a mesh sink.

    On failure the sink is left untouched and :py:meth:`load` returns ``False``.
    """

    #: The mesh sink receiving the decoded geometry.
    kernel: MeshSink

    #: The optional material sink receiving per-vertex colors.
    material: Material | None

    def __init__(self, kernel: MeshSink, material: Material | None = None) -> None:
        """Initialize the reader.

        :param kernel: The mesh sink receiving the decoded geometry.
        :param material: The optional material sink receiving per-vertex colors.
        """
        self.kernel = kernel
        self.material = material
        self.schema: Schema | None = None

    def load(self, file: PLYSource) -> bool:
        """Decode a PLY source into the sinks.

        :param file: The path to the PLY file, raw bytes, or a binary file-like object.
        :return: ``True`` if the whole file was decoded and committed, ``False`` otherwise.
        """
        try:
            with open_source(file) as stream:
                schema, result = decode_ply(stream, self.material)
        except PLYError as e:
            logger.error("Failed to decode PLY data: %s", e)
            return False
        except OSError as e:
            logger.error("Failed to read PLY source: %s", e)
            return False

        self.schema = schema
        commit(result, self.kernel, self.material)
        return True


def load_ply(file: PLYSource, material: Material | None = None) -> tuple[Schema, PLYMesh]:
    """Load a PLY file and decode its contents.

    :param file: The path to the PLY file, raw bytes, or a binary file-like object.
    :param material: The material sink receiving per-vertex colors. If
        ``None``, a private material is used so that colors still end up in
        the mesh.
    :return: A tuple containing the validated schema and the decoded mesh.
    :raises PLYFormatError: If the magic marker or the ``format`` line is invalid.
    :raises PLYHeaderError: If the header is malformed.
    :raises PLYSchemaError: If the vertex properties do not describe points.
    :raises PLYRecordError: If a data record cannot be decoded.

    .. code-block:: python

        schema, mesh = load_ply("model.ply")
        print(f"Encoding: {schema.encoding.value}")
        print(f"Loaded {len(mesh.vertices)} vertices and {len(mesh.faces)} faces.")

    """
    if material is None:
        material = Material()

    with open_source(file) as stream:
        schema, result = decode_ply(stream, material)

    kernel = MeshKernel()
    commit(result, kernel, material)

    return schema, kernel.to_mesh(result.colors if material.is_per_vertex else None)
