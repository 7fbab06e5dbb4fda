"""Command-line interface for plydecode."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import typing as t
from pathlib import Path

from plydecode import load_ply
from plydecode.exceptions import PLYFormatError, PLYHeaderError, PLYRecordError, PLYSchemaError
from plydecode.export import ExportFormat

if t.TYPE_CHECKING:
    from plydecode.mesh import PLYMesh
    from plydecode.schema import Schema

#: Environment variable holding the default log level.
LOG_LEVEL_ENV = "PLYDECODE_LOG_LEVEL"


def configure_logging(verbosity: int) -> None:
    """Configure the root logger from the verbosity flag or the environment.

    :param verbosity: The number of ``-v`` flags given.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def format_bytes(size: float) -> str:
    """Format a byte size into a human-readable string.

    :param size: The size in bytes.
    :return: A formatted string with appropriate units (B, KB, MB, GB, TB).
    """
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.2f} {unit}"

        size /= 1024

    return f"{size:.2f} TB"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    :return: The configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="plydecode",
        description="Decode PLY polygon files",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help=f"increase log output (-v for info, -vv for debug); defaults to ${LOG_LEVEL_ENV} or WARNING",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print the header schema and a summary of the decoded mesh",
    )

    inspect_parser.add_argument(
        "input",
        type=Path,
        help="path to the input PLY file",
    )

    export_parser = subparsers.add_parser(
        "export",
        help="Export a PLY file to another 3D format",
        description="Export a PLY file to STL or OBJ format",
    )

    export_parser.add_argument(
        "input",
        type=Path,
        help="path to the input PLY file",
    )

    export_parser.add_argument(
        "output",
        type=Path,
        help="path where the exported file will be written",
    )

    export_parser.add_argument(
        "-f",
        "--format",
        type=str,
        choices=[f.value for f in ExportFormat],
        help="output file format (automatically detected from file extension if omitted)",
    )

    export_parser.add_argument(
        "--ascii",
        action="store_true",
        help="export in ASCII text format instead of binary (STL only)",
    )

    export_parser.add_argument(
        "--no-colors",
        action="store_true",
        help="exclude per-vertex color data from the exported file (OBJ only)",
    )

    return parser


def _load(path: Path) -> tuple[Schema, PLYMesh] | None:
    """Load a PLY file, reporting failures on stderr.

    :param path: The input file path.
    :return: The schema and mesh, or ``None`` if loading failed.
    """
    try:
        return load_ply(path)
    except FileNotFoundError:
        print(f"Error: Input file not found: {path}", file=sys.stderr)
    except PLYFormatError as e:
        print(f"Error: Unsupported PLY format: {e}", file=sys.stderr)
    except PLYHeaderError as e:
        print(f"Error: Malformed PLY header: {e}", file=sys.stderr)
    except PLYSchemaError as e:
        print(f"Error: Unusable vertex properties: {e}", file=sys.stderr)
    except PLYRecordError as e:
        print(f"Error: Failed to decode PLY data: {e}", file=sys.stderr)

    return None


def inspect_command(args: argparse.Namespace) -> int:
    """Execute the inspect command.

    :param args: The parsed command-line arguments.
    :return: Exit code (0 for success, non-zero for error).
    """
    loaded = _load(args.input)
    if loaded is None:
        return 1

    schema, mesh = loaded

    print(f"=== Inspecting: {args.input.name} ===")
    print(f"File Size: {format_bytes(args.input.stat().st_size)}")

    print("\n[Header]")
    print(f"  Format: {schema.encoding.value} {schema.version}")
    print(f"  Declared Vertices: {schema.vertex_count}")
    print(f"  Declared Faces: {schema.face_count}")
    for comment in schema.comments:
        print(f"  Comment: {comment}")

    print("\n[Vertex Properties]")
    for prop in schema.vertex_properties:
        list_prefix = f"list {prop.count_kind.value} " if prop.count_kind is not None else ""
        print(f"  {prop.name}: {list_prefix}{prop.kind.value} ({prop.role.value})")

    if schema.face_properties:
        print("\n[Extra Face Properties]")
        for prop in schema.face_properties:
            list_prefix = f"list {prop.count_kind.value} " if prop.count_kind is not None else ""
            print(f"  {prop.name}: {list_prefix}{prop.kind.value}")

    print("\n[Decoded Mesh]")
    print(f"  Vertices: {mesh.num_vertices}")
    print(f"  Faces: {mesh.num_faces}")
    print(f"  Vertex Colors: {'Yes' if mesh.has_vertex_colors else 'No'}")

    if mesh.num_vertices > 0:
        dimensions = mesh.vertices.max(axis=0) - mesh.vertices.min(axis=0)
        print(f"  Bounds: {dimensions[0]:.3f} x {dimensions[1]:.3f} x {dimensions[2]:.3f}")

    return 0


def export_command(args: argparse.Namespace) -> int:
    """Execute the export command.

    :param args: The parsed command-line arguments.
    :return: Exit code (0 for success, non-zero for error).
    """
    loaded = _load(args.input)
    if loaded is None:
        return 1

    _, mesh = loaded
    export_format = ExportFormat(args.format) if args.format else None

    try:
        mesh.export(
            args.output,
            export_format=export_format,
            binary=not args.ascii,
            include_colors=not args.no_colors,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Failed to write output file: {e}", file=sys.stderr)
        return 1

    output_size = format_bytes(args.output.stat().st_size)
    print(f"Successfully exported to '{args.output}' ({output_size})")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    :param argv: The command-line arguments. If ``None``, :py:data:`sys.argv` is used.
    :return: The exit code (0 for success, non-zero for error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "inspect":
        return inspect_command(args)

    if args.command == "export":
        return export_command(args)

    return 1


if __name__ == "__main__":
    sys.exit(main())
