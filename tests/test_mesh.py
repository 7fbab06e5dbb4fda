import numpy as np
import pytest

from plydecode.mesh import MeshKernel, PLYMesh


class TestPLYMesh:
    """Tests for the PLYMesh class."""

    def test_num_vertices(self, simple_mesh: PLYMesh) -> None:
        """Return vertex count."""
        assert simple_mesh.num_vertices == 3
        assert len(simple_mesh.vertices) == 3

    def test_num_faces(self, simple_mesh: PLYMesh) -> None:
        """Return face count."""
        assert simple_mesh.num_faces == 1
        assert len(simple_mesh.faces) == 1

    def test_has_vertex_colors_with_colors(self, colored_mesh: PLYMesh) -> None:
        """Return ``True`` when vertex colors present."""
        assert colored_mesh.has_vertex_colors

    def test_has_vertex_colors_without_colors(self, simple_mesh: PLYMesh) -> None:
        """Return ``False`` when vertex colors empty."""
        assert not simple_mesh.has_vertex_colors

    def test_empty_mesh(self, empty_mesh: PLYMesh) -> None:
        """Handle empty mesh with no geometry or attributes."""
        assert empty_mesh.num_vertices == 0
        assert empty_mesh.num_faces == 0
        assert not empty_mesh.has_vertex_colors
        assert empty_mesh.point_facets == []
        assert empty_mesh.face_neighbours.shape == (0, 3)


class TestMeshKernel:
    """Tests for the default mesh sink."""

    def test_adopt_cleans_and_indexes(self) -> None:
        """Remove invalid facets and compute adjacency on adoption."""
        kernel = MeshKernel()
        points = np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0], [1, 1, 0]], dtype=np.float32)
        facets = np.array([[0, 1, 2], [0, 2, 1], [2, 1, 3], [3, 3, 1]])

        kernel.adopt(points, facets)

        assert kernel.num_points == 4
        np.testing.assert_array_equal(kernel.facets, [[0, 1, 2], [2, 1, 3]])
        assert kernel.point_facets == [(0,), (0, 1), (0, 1), (1,)]
        np.testing.assert_array_equal(kernel.neighbours, [[-1, 1, -1], [0, -1, -1]])

    def test_adopt_replaces_content(self) -> None:
        """Discard previous content when adopting new geometry."""
        kernel = MeshKernel()
        kernel.adopt(np.zeros((3, 3)), np.array([[0, 1, 2]]))

        kernel.adopt(np.zeros((2, 3)), np.empty((0, 3), dtype=np.int64))

        assert kernel.num_points == 2
        assert kernel.num_facets == 0

    def test_to_mesh(self) -> None:
        """Build a mesh carrying the kernel content and colors."""
        kernel = MeshKernel()
        kernel.adopt(np.eye(3), np.array([[0, 1, 2]]))
        colors = np.full((3, 3), 0.5, dtype=np.float32)

        mesh = kernel.to_mesh(colors)

        assert mesh.num_vertices == 3
        assert mesh.num_faces == 1
        assert mesh.has_vertex_colors
        assert mesh.point_facets == [(0,), (0,), (0,)]

    def test_to_mesh_color_mismatch(self) -> None:
        """Reject color arrays that do not match the points."""
        kernel = MeshKernel()
        kernel.adopt(np.eye(3), np.empty((0, 3), dtype=np.int64))

        with pytest.raises(ValueError, match="Expected 3 vertex colors, got 2"):
            kernel.to_mesh(np.zeros((2, 3), dtype=np.float32))
