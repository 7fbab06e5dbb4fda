"""OBJ format exporter."""

from __future__ import annotations

__all__ = ["OBJExporter"]

import typing as t
from pathlib import Path

from plydecode.export.base import BaseExporter

if t.TYPE_CHECKING:
    import os

    from plydecode.mesh import PLYMesh


class OBJExporter(BaseExporter):
    """Export meshes to Wavefront OBJ format with optional vertex colors."""

    #: Whether to include vertex colors if available.
    include_colors: bool

    def __init__(self, include_colors: bool = True) -> None:
        """Initialize the OBJ exporter.

        :param include_colors: Whether to include vertex colors if available. Default is ``True``.
        """
        self.include_colors = include_colors

    def export(self, mesh: PLYMesh, output_path: str | os.PathLike[str]) -> None:
        """Export a mesh to OBJ format.

        Vertex colors are written as the non-standard ``v x y z r g b``
        extension understood by most mesh viewers.

        :param mesh: The mesh to export.
        :param output_path: The output file path.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with_colors = mesh.has_vertex_colors and self.include_colors

        with path.open("w", encoding="utf-8") as f:
            f.write("# plydecode\n")

            for i, v in enumerate(mesh.vertices):
                if with_colors:
                    r, g, b = mesh.vertex_colors[i]
                    f.write(f"v {v[0]:.6f} {v[1]:.6f} {v[2]:.6f} {r:.4f} {g:.4f} {b:.4f}\n")
                else:
                    f.write(f"v {v[0]:.6f} {v[1]:.6f} {v[2]:.6f}\n")

            f.write("\n")

            # OBJ indices are 1-based
            for face in mesh.faces:
                f.write(f"f {face[0] + 1} {face[1] + 1} {face[2] + 1}\n")
