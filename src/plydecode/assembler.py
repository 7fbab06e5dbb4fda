"""Conversion of decoded raw records into points, colors and triangles."""

from __future__ import annotations

__all__ = ["DecodedFace", "DecodedVertex", "RawRecord", "assemble_face", "assemble_vertex"]

import dataclasses
import typing as t

from plydecode.schema import PropertyRole

#: Raw values of one record, keyed by the role of the property they were read from.
RawRecord: t.TypeAlias = t.Dict[PropertyRole, float]

#: The divisor mapping 8-bit color channels into ``[0, 1]``.
COLOR_SCALE: t.Final[float] = 255.0


@dataclasses.dataclass(frozen=True)
class DecodedVertex:
    """A decoded point with an optional normalized color."""

    #: The ``(x, y, z)`` position.
    position: tuple[float, float, float]

    #: The ``(r, g, b)`` color in ``[0, 1]``, or ``None`` if the vertex carries no color.
    color: tuple[float, float, float] | None = None


@dataclasses.dataclass(frozen=True)
class DecodedFace:
    """A triangle referencing three vertices by index."""

    #: The vertex indices of the triangle corners.
    indices: tuple[int, int, int]


def assemble_vertex(record: RawRecord, with_color: bool) -> DecodedVertex:
    """Build a vertex from a raw record.

    Color channels are divided by 255 without range checks, so values outside
    ``0..255`` produce channels outside ``[0, 1]``.

    :param record: The raw values of one vertex record.
    :param with_color: Whether to read the color channels.
    :return: The decoded vertex.
    """
    position = (record[PropertyRole.X], record[PropertyRole.Y], record[PropertyRole.Z])
    if not with_color:
        return DecodedVertex(position)

    color = (
        record.get(PropertyRole.RED, 0.0) / COLOR_SCALE,
        record.get(PropertyRole.GREEN, 0.0) / COLOR_SCALE,
        record.get(PropertyRole.BLUE, 0.0) / COLOR_SCALE,
    )
    return DecodedVertex(position, color)


def assemble_face(indices: tuple[int, int, int], vertex_count: int) -> DecodedFace | None:
    """Build a triangle if all of its indices reference declared vertices.

    :param indices: The three vertex indices.
    :param vertex_count: The declared number of vertices.
    :return: The decoded face, or ``None`` if any index is out of range.
    """
    if not all(0 <= index < vertex_count for index in indices):
        return None

    return DecodedFace(indices)
