import argparse
import pathlib

from plydecode import PLYError, load_ply


def main() -> None:
    """Inspect a PLY file and print its header and decode summary."""
    parser = argparse.ArgumentParser(description="Inspect PLY polygon files.")
    parser.add_argument("input", type=pathlib.Path, help="Path to the PLY file to inspect.")

    args = parser.parse_args()
    if not args.input.exists():
        print(f"Error: File '{args.input}' does not exist.")
        return

    print(f"=== Inspecting: {args.input.name} ===")

    try:
        schema, mesh = load_ply(args.input)
    except PLYError as e:
        print(f"Error loading PLY file: {e}")
        return

    print("\n[Header]")
    print(f"  Format: {schema.encoding.value}")
    print(f"  Declared Vertices: {schema.vertex_count}")
    print(f"  Declared Faces: {schema.face_count}")

    print("\n[Decoded Mesh]")
    print(f"  Vertices: {mesh.num_vertices}")
    print(f"  Faces: {mesh.num_faces}")

    f_match = "✓" if schema.face_count == mesh.num_faces else "✗"
    print(f"  Faces Kept: {f_match}")

    boundary_edges = int((mesh.face_neighbours == -1).sum())
    print(f"  Boundary Edges: {boundary_edges}")
    print(f"  Vertex Colors: {'Yes' if mesh.has_vertex_colors else 'No'}")


if __name__ == "__main__":
    main()
