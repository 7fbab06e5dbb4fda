"""Export decoded PLY meshes to other 3D file formats."""

__all__ = ["ExportFormat", "export_mesh"]

from .export import ExportFormat, export_mesh
