import argparse
import pathlib

import numpy as np
import trimesh

from plydecode import PLYError, load_ply


def main() -> None:
    """Visualize a PLY file using trimesh."""
    parser = argparse.ArgumentParser(description="View PLY polygon files.")
    parser.add_argument("input", type=pathlib.Path, help="Path to the PLY file to view.")

    args = parser.parse_args()
    if not args.input.exists():
        print(f"Error: File '{args.input}' does not exist.")
        return

    print(f"Loading {args.input.name}...")
    try:
        _, mesh = load_ply(args.input)
    except PLYError as e:
        print(f"Error loading PLY file: {e}")
        return

    t_mesh = trimesh.Trimesh(vertices=mesh.vertices, faces=mesh.faces, process=False)
    if mesh.has_vertex_colors:
        t_mesh.visual.vertex_colors = np.round(mesh.vertex_colors * 255).astype(np.uint8)

    t_mesh.show(caption=args.input.name)


if __name__ == "__main__":
    main()
