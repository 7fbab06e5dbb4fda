import struct
import typing as t

import numpy as np
import pytest

from plydecode import PLYMesh

#: Builds a PLY byte stream from header lines and a data section.
PLYBuilder: t.TypeAlias = t.Callable[..., bytes]


def make_ply(header_lines: t.Sequence[str], body: bytes | str = b"", newline: str = "\n") -> bytes:
    """Join a ``ply`` marker, header lines, ``end_header`` and a data section."""
    header = newline.join(["ply", *header_lines, "end_header"]) + newline
    if isinstance(body, str):
        body = body.encode("ascii")

    return header.encode("ascii") + body


@pytest.fixture
def build_ply() -> PLYBuilder:
    """A factory for PLY byte streams."""
    return make_ply


@pytest.fixture
def pack() -> t.Callable[..., bytes]:
    """A :py:func:`struct.pack` wrapper that defaults to little-endian."""

    def _pack(fmt: str, *values: t.Any, byte_order: str = "<") -> bytes:
        return struct.pack(byte_order + fmt, *values)

    return _pack


@pytest.fixture
def triangle_header() -> list[str]:
    """Header lines for three float vertices and one triangle, without the format line."""
    return [
        "element vertex 3",
        "property float x",
        "property float y",
        "property float z",
        "element face 1",
        "property list uchar int vertex_indices",
    ]


@pytest.fixture
def empty_mesh() -> PLYMesh:
    """An empty mesh with no vertices, faces, or colors."""
    return PLYMesh(
        vertices=np.empty((0, 3), dtype=np.float32),
        faces=np.empty((0, 3), dtype=np.int64),
        vertex_colors=np.empty((0, 3), dtype=np.float32),
    )


@pytest.fixture
def simple_mesh() -> PLYMesh:
    """A simple mesh without colors."""
    vertices = np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
        ],
        dtype=np.float32,
    )
    faces = np.array([[0, 1, 2]], dtype=np.int64)

    return PLYMesh(
        vertices=vertices,
        faces=faces,
        vertex_colors=np.empty((0, 3), dtype=np.float32),
    )


@pytest.fixture
def colored_mesh() -> PLYMesh:
    """A mesh with normalized vertex colors."""
    vertices = np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
        ],
        dtype=np.float32,
    )
    faces = np.array([[0, 1, 2]], dtype=np.int64)
    vertex_colors = np.array(
        [
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    )

    return PLYMesh(
        vertices=vertices,
        faces=faces,
        vertex_colors=vertex_colors,
    )
