import pytest

from plydecode.assembler import DecodedFace, assemble_face, assemble_vertex
from plydecode.schema import PropertyRole


class TestAssembleVertex:
    """Tests for vertex assembly."""

    def test_position(self) -> None:
        """Take the position from the coordinate slots."""
        record = {PropertyRole.X: 1.0, PropertyRole.Y: 2.0, PropertyRole.Z: 3.0, PropertyRole.GENERIC: 9.0}

        vertex = assemble_vertex(record, with_color=False)

        assert vertex.position == (1.0, 2.0, 3.0)
        assert vertex.color is None

    def test_color_normalized(self) -> None:
        """Divide color channels by 255."""
        record = {
            PropertyRole.X: 0.0,
            PropertyRole.Y: 0.0,
            PropertyRole.Z: 0.0,
            PropertyRole.RED: 255.0,
            PropertyRole.GREEN: 0.0,
            PropertyRole.BLUE: 51.0,
        }

        vertex = assemble_vertex(record, with_color=True)

        assert vertex.color == pytest.approx((1.0, 0.0, 0.2))

    def test_color_not_range_checked(self) -> None:
        """Pass channels outside 0..255 through the division unchanged."""
        record = {
            PropertyRole.X: 0.0,
            PropertyRole.Y: 0.0,
            PropertyRole.Z: 0.0,
            PropertyRole.RED: 510.0,
            PropertyRole.GREEN: -255.0,
            PropertyRole.BLUE: 0.0,
        }

        vertex = assemble_vertex(record, with_color=True)

        assert vertex.color == pytest.approx((2.0, -1.0, 0.0))


class TestAssembleFace:
    """Tests for face assembly."""

    def test_in_range(self) -> None:
        """Build a face from valid indices."""
        assert assemble_face((0, 1, 2), 3) == DecodedFace((0, 1, 2))

    @pytest.mark.parametrize("indices", [(0, 1, 3), (3, 0, 1), (-1, 0, 1)])
    def test_out_of_range(self, indices: tuple[int, int, int]) -> None:
        """Drop faces with an index outside ``0..vertex_count-1``."""
        assert assemble_face(indices, 3) is None
