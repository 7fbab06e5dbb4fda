"""A library for decoding PLY polygon files."""

__all__ = [
    "Encoding",
    "ExportFormat",
    "Material",
    "MaterialBinding",
    "MeshKernel",
    "NumericKind",
    "PLYError",
    "PLYFormatError",
    "PLYHeaderError",
    "PLYMesh",
    "PLYReader",
    "PLYRecordError",
    "PLYSchemaError",
    "PropertyRole",
    "Schema",
    "export_mesh",
    "load_ply",
]

from plydecode.exceptions import PLYError, PLYFormatError, PLYHeaderError, PLYRecordError, PLYSchemaError
from plydecode.export import ExportFormat, export_mesh
from plydecode.loader import PLYReader, load_ply
from plydecode.material import Material, MaterialBinding
from plydecode.mesh import MeshKernel, PLYMesh
from plydecode.numeric import NumericKind
from plydecode.schema import Encoding, PropertyRole, Schema
