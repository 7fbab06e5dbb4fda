"""Material sink receiving per-vertex colors."""

from __future__ import annotations

__all__ = ["Material", "MaterialBinding"]

import dataclasses
import enum


class MaterialBinding(enum.Enum):
    """How colors are bound to the mesh."""

    OVERALL = "overall"
    PER_VERTEX = "per_vertex"


@dataclasses.dataclass
class Material:
    """Diffuse colors of a mesh and how they are bound."""

    #: The color binding. Set to :py:attr:`MaterialBinding.PER_VERTEX` by the loader when the file carries colors.
    binding: MaterialBinding = MaterialBinding.OVERALL

    #: The diffuse ``(r, g, b)`` colors in ``[0, 1]``, one per vertex when bound per vertex.
    diffuse_colors: list[tuple[float, float, float]] = dataclasses.field(default_factory=list)

    #: The number of colors the material expects to receive.
    capacity: int = 0

    @property
    def is_per_vertex(self) -> bool:
        """Whether colors are bound per vertex."""
        return self.binding is MaterialBinding.PER_VERTEX

    def reserve(self, count: int) -> None:
        """Discard previous colors and prepare for ``count`` new ones.

        :param count: The expected number of colors.
        """
        self.diffuse_colors = []
        self.capacity = count
