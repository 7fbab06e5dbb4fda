"""Export decoded PLY meshes to other 3D file formats."""

from __future__ import annotations

__all__ = ["ExportFormat", "export_mesh"]

import enum
import typing as t
from pathlib import Path

from plydecode.export.obj import OBJExporter
from plydecode.export.stl import STLExporter

if t.TYPE_CHECKING:
    import os

    from plydecode.export.base import BaseExporter
    from plydecode.mesh import PLYMesh


class ExportFormat(enum.Enum):
    """Supported export formats."""

    STL = "stl"
    OBJ = "obj"

    @classmethod
    def from_extension(cls, path: str | os.PathLike[str]) -> ExportFormat:
        """Determine export format from file extension.

        :param path: The file path.
        :return: The corresponding export format.
        :raises ValueError: If the extension is not supported.
        """
        ext = Path(path).suffix.lower().lstrip(".")
        try:
            return cls(ext)
        except ValueError:
            supported = ", ".join(f.value for f in cls)
            raise ValueError(f"Unsupported file extension '.{ext}'. Supported: {supported}") from None


def export_mesh(
    mesh: PLYMesh,
    output_path: str | os.PathLike[str],
    export_format: ExportFormat | None = None,
    *,
    binary: bool = True,
    include_colors: bool = True,
) -> None:
    """Export a decoded mesh to a file.

    :param mesh: The mesh to export.
    :param output_path: The output file path.
    :param export_format: The export format. If None, inferred from file extension.
    :param binary: Whether to use binary format (STL only). Default is ``True``.
    :param include_colors: Whether to include vertex colors if available (OBJ only). Default is ``True``.
    :raises ValueError: If the format is unsupported.
    """
    if export_format is None:
        export_format = ExportFormat.from_extension(output_path)

    exporter: BaseExporter
    if export_format == ExportFormat.STL:
        exporter = STLExporter(binary=binary)
    elif export_format == ExportFormat.OBJ:
        exporter = OBJExporter(include_colors=include_colors)
    else:
        raise ValueError(f"Unsupported export format: {export_format}")

    exporter.export(mesh, output_path)
