"""Mesh data structures for decoded PLY content."""

from __future__ import annotations

__all__ = ["MeshKernel", "MeshSink", "PLYMesh"]

import dataclasses
import typing as t

import numpy as np

from plydecode.cleanup import facet_neighbours, point_facet_adjacency, remove_invalid_facets
from plydecode.export import ExportFormat, export_mesh

if t.TYPE_CHECKING:
    import os

    import numpy.typing as npt


@dataclasses.dataclass
class PLYMesh:
    """Decoded 3D triangle mesh."""

    #: Vertex positions as (N, 3) float array.
    vertices: npt.NDArray[np.floating]

    #: Face indices as (M, 3) integer array.
    faces: npt.NDArray[np.integer]

    #: Per-vertex RGB colors in ``[0, 1]`` as (N, 3) float array, or empty.
    vertex_colors: npt.NDArray[np.floating]

    #: For each vertex, the indices of the faces using it.
    point_facets: list[tuple[int, ...]] = dataclasses.field(default_factory=list)

    #: For each face edge, the index of the face across it, or ``-1`` as (M, 3) integer array.
    face_neighbours: npt.NDArray[np.integer] = dataclasses.field(
        default_factory=lambda: np.empty((0, 3), dtype=np.int64)
    )

    @property
    def num_faces(self) -> int:
        """Number of faces in the mesh."""
        return int(self.faces.shape[0])

    @property
    def num_vertices(self) -> int:
        """Number of vertices in the mesh."""
        return int(self.vertices.shape[0])

    @property
    def has_vertex_colors(self) -> bool:
        """Whether the mesh has per-vertex colors."""
        return self.vertex_colors.size > 0

    def export(
        self,
        output_path: str | os.PathLike[str],
        export_format: ExportFormat | None = None,
        *,
        binary: bool = True,
        include_colors: bool = True,
    ) -> None:
        """Export the mesh to a file.

        :param output_path: The output file path.
        :param export_format: The export format. If None, inferred from file extension.
        :param binary: Whether to use binary format (STL only). Default is ``True``.
        :param include_colors: Whether to include vertex colors if available (OBJ only). Default is ``True``.
        :raises ValueError: If the format is unsupported.
        """
        export_mesh(self, output_path, export_format, binary=binary, include_colors=include_colors)


class MeshSink(t.Protocol):
    """Receiver of the decoded geometry of one load."""

    def adopt(self, points: npt.NDArray[np.floating], facets: npt.NDArray[np.integer]) -> None:
        """Take ownership of the decoded points and triangles.

        :param points: Vertex positions as (N, 3) float array.
        :param facets: Triangle vertex indices as (M, 3) integer array.
        """
        ...


class MeshKernel:
    """Default mesh sink that cleans up and indexes the adopted geometry.

    Adopting replaces any previous content. Invalid, degenerate and duplicate
    facets are removed before the adjacency tables are computed.
    """

    #: Vertex positions as (N, 3) float array.
    points: npt.NDArray[np.float32]

    #: Face indices as (M, 3) integer array.
    facets: npt.NDArray[np.int64]

    #: For each point, the indices of the facets using it.
    point_facets: list[tuple[int, ...]]

    #: For each facet edge, the facet across it, or ``-1``.
    neighbours: npt.NDArray[np.int64]

    def __init__(self) -> None:
        """Initialize an empty kernel."""
        self.clear()

    def clear(self) -> None:
        """Remove all points and facets."""
        self.points = np.empty((0, 3), dtype=np.float32)
        self.facets = np.empty((0, 3), dtype=np.int64)
        self.point_facets = []
        self.neighbours = np.empty((0, 3), dtype=np.int64)

    def adopt(self, points: npt.NDArray[np.floating], facets: npt.NDArray[np.integer]) -> None:
        """Replace the kernel content with cleaned-up geometry.

        :param points: Vertex positions as (N, 3) float array.
        :param facets: Triangle vertex indices as (M, 3) integer array.
        """
        self.clear()

        points = np.asarray(points, dtype=np.float32).reshape(-1, 3)
        facets = remove_invalid_facets(facets, points.shape[0])

        self.points = points
        self.facets = facets
        self.point_facets = point_facet_adjacency(points.shape[0], facets)
        self.neighbours = facet_neighbours(facets)

    @property
    def num_points(self) -> int:
        """Number of points in the kernel."""
        return int(self.points.shape[0])

    @property
    def num_facets(self) -> int:
        """Number of facets in the kernel."""
        return int(self.facets.shape[0])

    def to_mesh(self, vertex_colors: npt.NDArray[np.floating] | None = None) -> PLYMesh:
        """Build a mesh from the kernel content.

        :param vertex_colors: Per-vertex colors as (N, 3) float array, if any.
        :return: The mesh.
        :raises ValueError: If the number of colors does not match the number of points.
        """
        if vertex_colors is None or vertex_colors.size == 0:
            vertex_colors = np.empty((0, 3), dtype=np.float32)
        elif vertex_colors.shape[0] != self.num_points:
            raise ValueError(f"Expected {self.num_points} vertex colors, got {vertex_colors.shape[0]}")

        return PLYMesh(
            vertices=self.points,
            faces=self.facets,
            vertex_colors=vertex_colors,
            point_facets=self.point_facets,
            face_neighbours=self.neighbours,
        )
