"""Base data decoder definitions for PLY decoding."""

from __future__ import annotations

__all__ = ["BaseDataDecoder", "DecodeResult"]

import abc
import dataclasses
import typing as t

import numpy as np

if t.TYPE_CHECKING:
    import numpy.typing as npt

    from plydecode.assembler import DecodedFace, DecodedVertex
    from plydecode.schema import Schema


@dataclasses.dataclass(frozen=True)
class DecodeResult:
    """Result of decoding the data section of a PLY stream."""

    #: Vertex positions as (N, 3) float array.
    points: npt.NDArray[np.float32]

    #: Normalized per-vertex RGB colors as (N, 3) float array, or empty.
    colors: npt.NDArray[np.float32]

    #: Triangle vertex indices as (M, 3) integer array.
    faces: npt.NDArray[np.int64]

    #: The number of face records that did not yield a triangle.
    skipped_faces: int = 0

    @classmethod
    def from_records(
        cls,
        vertices: t.Sequence[DecodedVertex],
        faces: t.Sequence[DecodedFace],
        skipped_faces: int = 0,
    ) -> DecodeResult:
        """Pack decoded records into arrays.

        :param vertices: The decoded vertices, in file order.
        :param faces: The decoded faces, in file order.
        :param skipped_faces: The number of dropped face records.
        :return: The packed result.
        """
        points = np.array([v.position for v in vertices], dtype=np.float32).reshape(-1, 3)

        if vertices and vertices[0].color is not None:
            colors = np.array([v.color for v in vertices], dtype=np.float32).reshape(-1, 3)
        else:
            colors = np.empty((0, 3), dtype=np.float32)

        indices = np.array([f.indices for f in faces], dtype=np.int64).reshape(-1, 3)

        return cls(points=points, colors=colors, faces=indices, skipped_faces=skipped_faces)


class BaseDataDecoder(abc.ABC):
    """Abstract base class for PLY data section decoders."""

    #: The validated schema describing the record layout.
    schema: Schema

    #: Whether to assemble per-vertex colors.
    with_colors: bool

    def __init__(self, schema: Schema, with_colors: bool = False) -> None:
        """Initialize the decoder.

        :param schema: The validated schema describing the record layout.
        :param with_colors: Whether to assemble per-vertex colors. Default is ``False``.
        """
        self.schema = schema
        self.with_colors = with_colors

    @abc.abstractmethod
    def decode(self, data: bytes) -> DecodeResult:
        """Decode the vertex and face records of a data section.

        :param data: The bytes following the ``end_header`` line.
        :return: The decoded points, colors and faces.
        :raises PLYRecordError: If a record cannot be decoded.
        """
        pass
