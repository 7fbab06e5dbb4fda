import struct
from pathlib import Path

import pytest

from plydecode.export import ExportFormat, export_mesh
from plydecode.export.obj import OBJExporter
from plydecode.export.stl import STLExporter
from plydecode.mesh import PLYMesh


class TestSTLExporter:
    """Tests for the STL format exporter."""

    def test_binary_header_structure(self, simple_mesh: PLYMesh, tmp_path: Path) -> None:
        """Write 80-byte header and triangle count in binary format."""
        exporter = STLExporter(binary=True)
        output_path = tmp_path / "test.stl"

        exporter.export(simple_mesh, output_path)

        with output_path.open("rb") as f:
            header = f.read(80)
            num_triangles = struct.unpack("<I", f.read(4))[0]

        assert len(header) == 80
        assert num_triangles == 1
        assert output_path.stat().st_size == 84 + 50

    def test_binary_triangle_structure(self, simple_mesh: PLYMesh, tmp_path: Path) -> None:
        """Write the normal, corners and attribute bytes of a triangle."""
        exporter = STLExporter(binary=True)
        output_path = tmp_path / "test.stl"

        exporter.export(simple_mesh, output_path)

        with output_path.open("rb") as f:
            f.seek(84)
            normal = struct.unpack("<3f", f.read(12))
            v0 = struct.unpack("<3f", f.read(12))
            v1 = struct.unpack("<3f", f.read(12))
            v2 = struct.unpack("<3f", f.read(12))
            attr = f.read(2)

        assert normal == pytest.approx((0.0, 0.0, 1.0))
        assert v0 == pytest.approx((0.0, 0.0, 0.0))
        assert v1 == pytest.approx((1.0, 0.0, 0.0))
        assert v2 == pytest.approx((0.0, 1.0, 0.0))
        assert attr == b"\x00\x00"

    def test_ascii_format(self, simple_mesh: PLYMesh, tmp_path: Path) -> None:
        """Write valid ASCII STL with correct structure."""
        exporter = STLExporter(binary=False)
        output_path = tmp_path / "test.stl"

        exporter.export(simple_mesh, output_path)

        content = output_path.read_text()

        assert content.startswith("solid test")
        assert content.count("facet normal") == 1
        assert content.count("vertex ") == 3
        assert content.endswith("endsolid test\n")

    def test_empty_mesh(self, empty_mesh: PLYMesh, tmp_path: Path) -> None:
        """Write a binary STL without triangles."""
        output_path = tmp_path / "empty.stl"

        STLExporter().export(empty_mesh, output_path)

        assert output_path.stat().st_size == 84


class TestOBJExporter:
    """Tests for the OBJ format exporter."""

    def test_basic_geometry(self, simple_mesh: PLYMesh, tmp_path: Path) -> None:
        """Write vertices and 1-based faces in OBJ format."""
        exporter = OBJExporter(include_colors=False)
        output_path = tmp_path / "test.obj"

        exporter.export(simple_mesh, output_path)

        lines = output_path.read_text().splitlines()

        assert sum(1 for line in lines if line.startswith("v ")) == 3
        assert "f 1 2 3" in lines

    def test_vertex_colors(self, colored_mesh: PLYMesh, tmp_path: Path) -> None:
        """Write vertex lines with RGB color values."""
        exporter = OBJExporter(include_colors=True)
        output_path = tmp_path / "test.obj"

        exporter.export(colored_mesh, output_path)

        vertex_lines = [line for line in output_path.read_text().splitlines() if line.startswith("v ")]
        parts = vertex_lines[0].split()

        assert len(vertex_lines) == 3
        assert len(parts) == 7  # v x y z r g b
        assert parts[4:] == ["1.0000", "0.0000", "0.0000"]

    def test_colors_excluded(self, colored_mesh: PLYMesh, tmp_path: Path) -> None:
        """Omit colors when disabled."""
        output_path = tmp_path / "test.obj"

        OBJExporter(include_colors=False).export(colored_mesh, output_path)

        vertex_lines = [line for line in output_path.read_text().splitlines() if line.startswith("v ")]
        assert all(len(line.split()) == 4 for line in vertex_lines)


class TestExportFormat:
    """Tests for ExportFormat enum and extension parsing."""

    def test_from_extension_stl(self) -> None:
        """Recognize the ``.stl`` extension."""
        assert ExportFormat.from_extension("model.stl") == ExportFormat.STL

    def test_from_extension_obj(self) -> None:
        """Recognize the ``.obj`` extension."""
        assert ExportFormat.from_extension("model.obj") == ExportFormat.OBJ

    def test_from_extension_case_insensitive(self) -> None:
        """Handle uppercase extensions."""
        assert ExportFormat.from_extension("model.STL") == ExportFormat.STL

    def test_from_extension_ply_unsupported(self) -> None:
        """Refuse to write PLY files."""
        with pytest.raises(ValueError, match="Unsupported file extension '.ply'"):
            ExportFormat.from_extension("model.ply")

    def test_from_extension_path_object(self) -> None:
        """Accept :py:class:`pathlib.Path` objects."""
        assert ExportFormat.from_extension(Path("/tmp/model.obj")) == ExportFormat.OBJ


class TestExportMesh:
    """Tests for the export_mesh function."""

    def test_auto_detect_format(self, simple_mesh: PLYMesh, tmp_path: Path) -> None:
        """Detect format from file extension."""
        output_path = tmp_path / "test.stl"

        export_mesh(simple_mesh, output_path)

        assert output_path.exists()

    def test_explicit_format(self, simple_mesh: PLYMesh, tmp_path: Path) -> None:
        """Use explicit format parameter over extension."""
        output_path = tmp_path / "test.txt"

        export_mesh(simple_mesh, output_path, export_format=ExportFormat.OBJ)

        assert output_path.read_text().startswith("# plydecode")

    def test_export_method(self, colored_mesh: PLYMesh, tmp_path: Path) -> None:
        """Forward options through the mesh export method."""
        output_path = tmp_path / "nested" / "test.stl"

        colored_mesh.export(output_path, binary=False)

        assert output_path.read_text().startswith("solid test")
