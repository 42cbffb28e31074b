"""Generate a rectangular and a hexagonal maze and render both to PNG."""

import sys
from pathlib import Path

ROOT = Path(__file__).parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from mazegrid import Maze, build_hex_grid, build_rectangular_grid
from mazegrid.render import render_maze_png


def main() -> None:
    out_dir = ROOT / "exports"

    rect = Maze(build_rectangular_grid(16, 24)).generate(seed=42)
    render_maze_png(rect, out_dir / "maze_rect.png")
    print("Rectangular:", len(rect.dual_graph), "rooms, solution", len(rect.shortest_path))

    hexes = Maze(build_hex_grid(5))
    hexes.excluded_vertices = [hexes.dual_graph.vertex_by_face("f46")]
    hexes.generate(seed=7)
    render_maze_png(hexes, out_dir / "maze_hex.png")
    print("Hex:", len(hexes.dual_graph), "rooms, solution", len(hexes.shortest_path))
    print("Narrowest passage:", hexes.find_minimal_rooms_passage())


if __name__ == "__main__":
    main()
