"""Common interface of the writers that convert decoded PLY meshes."""

from __future__ import annotations

__all__ = ["BaseExporter"]

import abc
import typing as t

if t.TYPE_CHECKING:
    import os

    from plydecode.mesh import PLYMesh


class BaseExporter(abc.ABC):
    """Writer turning a decoded :py:class:`~plydecode.mesh.PLYMesh` into another file format.

    Exporters only read the mesh. Options such as binary output or vertex
    colors are fixed when the exporter is constructed.
    """

    @abc.abstractmethod
    def export(self, mesh: PLYMesh, output_path: str | os.PathLike[str]) -> None:
        """Write the triangles of a decoded mesh to ``output_path``.

        Missing parent directories are created.

        :param mesh: The decoded mesh to write.
        :param output_path: The destination file path. An existing file is overwritten.
        """
        raise NotImplementedError
