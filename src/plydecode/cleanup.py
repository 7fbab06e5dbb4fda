"""Facet cleanup and adjacency computation for decoded meshes."""

from __future__ import annotations

__all__ = ["facet_neighbours", "point_facet_adjacency", "remove_invalid_facets"]

import logging
import typing as t

import numpy as np

if t.TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

#: Marker for a facet edge without a neighbouring facet.
NO_NEIGHBOUR: t.Final[int] = -1


def remove_invalid_facets(facets: npt.NDArray[np.integer], num_points: int) -> npt.NDArray[np.int64]:
    """Remove facets that cannot be part of a valid triangle mesh.

    A facet is removed if it references a point that does not exist, if two
    of its corners are the same point, or if an earlier facet uses the same
    three points. Points are never removed, so per-vertex data stays aligned.

    :param facets: The facet indices of shape (M, 3).
    :param num_points: The number of points.
    :return: The remaining facets of shape (K, 3), in their original order.
    """
    facets = np.asarray(facets, dtype=np.int64).reshape(-1, 3)
    if facets.shape[0] == 0:
        return facets

    in_range = np.all((facets >= 0) & (facets < num_points), axis=1)
    non_degenerate = (
        (facets[:, 0] != facets[:, 1]) & (facets[:, 1] != facets[:, 2]) & (facets[:, 0] != facets[:, 2])
    )
    valid = facets[in_range & non_degenerate]
    if valid.shape[0] == 0:
        logger.debug("Removed all %d facets as invalid or degenerate", facets.shape[0])
        return valid

    _, first = np.unique(np.sort(valid, axis=1), axis=0, return_index=True)
    result = valid[np.sort(first)]

    removed = facets.shape[0] - result.shape[0]
    if removed:
        logger.debug("Removed %d invalid, degenerate or duplicate facets", removed)

    return result


def point_facet_adjacency(num_points: int, facets: npt.NDArray[np.integer]) -> list[tuple[int, ...]]:
    """Collect the facets incident to each point.

    :param num_points: The number of points.
    :param facets: The facet indices of shape (M, 3).
    :return: For each point, the ascending indices of the facets using it.
    """
    incident: list[list[int]] = [[] for _ in range(num_points)]
    for facet_idx, facet in enumerate(np.asarray(facets).reshape(-1, 3)):
        for point_idx in set(int(p) for p in facet):
            incident[point_idx].append(facet_idx)

    return [tuple(facet_ids) for facet_ids in incident]


def facet_neighbours(facets: npt.NDArray[np.integer]) -> npt.NDArray[np.int64]:
    """Find the facet across each edge of every facet.

    Edge ``i`` of a facet runs from corner ``i`` to corner ``(i + 1) % 3``.
    When more than two facets share an edge, the first other facet is used.

    :param facets: The facet indices of shape (M, 3).
    :return: The neighbour facet indices of shape (M, 3), or ``-1`` for open edges.
    """
    facets = np.asarray(facets, dtype=np.int64).reshape(-1, 3)
    neighbours = np.full(facets.shape, NO_NEIGHBOUR, dtype=np.int64)

    edges: dict[tuple[int, int], list[tuple[int, int]]] = {}
    for facet_idx, facet in enumerate(facets):
        for side in range(3):
            a, b = int(facet[side]), int(facet[(side + 1) % 3])
            key = (a, b) if a < b else (b, a)
            edges.setdefault(key, []).append((facet_idx, side))

    for sharing in edges.values():
        if len(sharing) < 2:
            continue

        for facet_idx, side in sharing:
            other = next((f for f, _ in sharing if f != facet_idx), NO_NEIGHBOUR)
            neighbours[facet_idx, side] = other

    return neighbours
