"""STL format exporter."""

from __future__ import annotations

__all__ = ["STLExporter"]

import struct
import typing as t
from pathlib import Path

import numpy as np

from plydecode.export.base import BaseExporter

if t.TYPE_CHECKING:
    import os

    import numpy.typing as npt

    from plydecode.mesh import PLYMesh

#: Layout of one binary STL triangle record.
_TRIANGLE_DTYPE: t.Final = np.dtype([
    ("normal", "<f4", (3,)),
    ("corners", "<f4", (3, 3)),
    ("attributes", "<u2"),
])


def face_normals(vertices: npt.NDArray[np.floating], faces: npt.NDArray[np.integer]) -> npt.NDArray[np.float32]:
    """Compute unit normal vectors for each face.

    :param vertices: The vertices of the mesh of shape (N, 3).
    :param faces: The face indices of shape (M, 3).
    :return: The normal vectors for each face of shape (M, 3). Degenerate faces get a zero normal.
    """
    corners = vertices[faces].astype(np.float64)
    normals = np.cross(corners[:, 1] - corners[:, 0], corners[:, 2] - corners[:, 0])

    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    normals /= np.maximum(lengths, 1e-12)

    return normals.astype(np.float32)


class STLExporter(BaseExporter):
    """Export meshes to STL format (geometry only)."""

    #: Whether to use binary STL format. If ``False``, ASCII STL will be used.
    binary: bool

    def __init__(self, binary: bool = True) -> None:
        """Initialize the STL exporter.

        :param binary: Whether to use binary STL format. Default is ``True``.
        """
        self.binary = binary

    def export(self, mesh: PLYMesh, output_path: str | os.PathLike[str]) -> None:
        """Export a mesh to STL format.

        :param mesh: The mesh to export.
        :param output_path: The output file path.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        faces = np.asarray(mesh.faces, dtype=np.int64).reshape(-1, 3)
        normals = face_normals(mesh.vertices, faces)

        if self.binary:
            self._export_binary(mesh, faces, normals, path)
        else:
            self._export_ascii(mesh, faces, normals, path)

    @staticmethod
    def _export_binary(
        mesh: PLYMesh,
        faces: npt.NDArray[np.int64],
        normals: npt.NDArray[np.float32],
        path: Path,
    ) -> None:
        records = np.zeros(faces.shape[0], dtype=_TRIANGLE_DTYPE)
        records["normal"] = normals
        records["corners"] = mesh.vertices[faces]

        with path.open("wb") as f:
            f.write(b"plydecode".ljust(80, b"\0"))
            f.write(struct.pack("<I", faces.shape[0]))
            f.write(records.tobytes())

    @staticmethod
    def _export_ascii(
        mesh: PLYMesh,
        faces: npt.NDArray[np.int64],
        normals: npt.NDArray[np.float32],
        path: Path,
    ) -> None:
        with path.open("w", encoding="ascii") as f:
            f.write(f"solid {path.stem}\n")

            for normal, face in zip(normals, faces):
                f.write(f"  facet normal {normal[0]:.6e} {normal[1]:.6e} {normal[2]:.6e}\n")
                f.write("    outer loop\n")
                for corner in mesh.vertices[face]:
                    f.write(f"      vertex {corner[0]:.6e} {corner[1]:.6e} {corner[2]:.6e}\n")
                f.write("    endloop\n")
                f.write("  endfacet\n")

            f.write(f"endsolid {path.stem}\n")
