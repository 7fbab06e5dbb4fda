"""Record layout of a PLY file as declared by its header."""

from __future__ import annotations

__all__ = [
    "COLOR_ROLES",
    "COORDINATE_ROLES",
    "Encoding",
    "IndexListDescriptor",
    "PropertyDescriptor",
    "PropertyRole",
    "Schema",
    "validate_schema",
]

import dataclasses
import enum
import typing as t

from plydecode.exceptions import PLYSchemaError
from plydecode.numeric import NumericKind

if t.TYPE_CHECKING:
    from plydecode.binary import ByteOrder


class Encoding(enum.Enum):
    """The physical encoding of the data section."""

    ASCII = "ascii"
    BINARY_LITTLE_ENDIAN = "binary_little_endian"
    BINARY_BIG_ENDIAN = "binary_big_endian"

    @property
    def is_binary(self) -> bool:
        """Whether the data section holds fixed-width binary records."""
        return self is not Encoding.ASCII

    @property
    def byte_order(self) -> ByteOrder:
        """The :py:mod:`struct` byte order prefix of binary records."""
        return ">" if self is Encoding.BINARY_BIG_ENDIAN else "<"


class PropertyRole(enum.Enum):
    """The meaning of a vertex property, derived from its name."""

    X = "x"
    Y = "y"
    Z = "z"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    GENERIC = "generic"

    @classmethod
    def from_name(cls, name: str) -> PropertyRole:
        """Derive the role of a property from its declared name.

        :param name: The property name from the header.
        :return: The matching role, or :py:attr:`GENERIC` for unrecognized names.
        """
        return _ROLE_NAMES.get(name, cls.GENERIC)


_ROLE_NAMES: t.Final[dict[str, PropertyRole]] = {
    "x": PropertyRole.X,
    "y": PropertyRole.Y,
    "z": PropertyRole.Z,
    "red": PropertyRole.RED,
    "diffuse_red": PropertyRole.RED,
    "green": PropertyRole.GREEN,
    "diffuse_green": PropertyRole.GREEN,
    "blue": PropertyRole.BLUE,
    "diffuse_blue": PropertyRole.BLUE,
}

#: Roles holding point coordinates.
COORDINATE_ROLES: t.Final[tuple[PropertyRole, ...]] = (PropertyRole.X, PropertyRole.Y, PropertyRole.Z)

#: Roles holding RGB color channels.
COLOR_ROLES: t.Final[tuple[PropertyRole, ...]] = (PropertyRole.RED, PropertyRole.GREEN, PropertyRole.BLUE)


@dataclasses.dataclass(frozen=True)
class PropertyDescriptor:
    """A single property of an element record."""

    #: The property name as declared in the header.
    name: str

    #: The semantic role of the property.
    role: PropertyRole

    #: The numeric kind of the value (or of each list item).
    kind: NumericKind

    #: The numeric kind of the list length prefix, or ``None`` for scalar properties.
    count_kind: NumericKind | None = None

    @property
    def is_list(self) -> bool:
        """Whether the property is a length-prefixed list."""
        return self.count_kind is not None


@dataclasses.dataclass(frozen=True)
class IndexListDescriptor:
    """The layout of the per-face vertex index list."""

    #: The numeric kind of the list length prefix.
    count_kind: NumericKind = NumericKind.UINT8

    #: The numeric kind of each vertex index.
    index_kind: NumericKind = NumericKind.UINT32


@dataclasses.dataclass(frozen=True)
class Schema:
    """The validated layout of vertex and face records of one PLY stream."""

    #: The encoding of the data section.
    encoding: Encoding

    #: The number of vertex records.
    vertex_count: int = 0

    #: The number of face records.
    face_count: int = 0

    #: The vertex properties in physical field order.
    vertex_properties: tuple[PropertyDescriptor, ...] = ()

    #: The face properties other than the vertex index list, in physical field order.
    face_properties: tuple[PropertyDescriptor, ...] = ()

    #: The layout of the face vertex index list.
    face_indices: IndexListDescriptor = dataclasses.field(default_factory=IndexListDescriptor)

    #: The format version string.
    version: str = "1.0"

    #: The ``comment`` lines of the header.
    comments: tuple[str, ...] = ()

    #: The ``obj_info`` lines of the header.
    obj_info: tuple[str, ...] = ()

    def count_role(self, role: PropertyRole) -> int:
        """Count the vertex properties with the given role.

        :param role: The role to count.
        :return: The number of vertex properties with that role.
        """
        return sum(1 for prop in self.vertex_properties if prop.role is role)

    @property
    def color_count(self) -> int:
        """The number of color channel properties on the vertex element."""
        return sum(self.count_role(role) for role in COLOR_ROLES)

    @property
    def has_vertex_colors(self) -> bool:
        """Whether every vertex carries an RGB triple."""
        return self.color_count == len(COLOR_ROLES)


def validate_schema(schema: Schema) -> None:
    """Check that a schema describes a usable point set.

    The vertex element must declare each coordinate exactly once, and the
    color channels either not at all or all three of them.

    :param schema: The schema to check.
    :raises PLYSchemaError: If either condition does not hold.
    """
    for role in COORDINATE_ROLES:
        count = schema.count_role(role)
        if count != 1:
            raise PLYSchemaError(f"Expected exactly one '{role.value}' vertex property, found {count}")

    colors = schema.color_count
    if colors not in (0, len(COLOR_ROLES)):
        raise PLYSchemaError(f"Expected zero or three color properties, found {colors}")
