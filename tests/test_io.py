from mazegrid import Maze, build_hex_grid
from mazegrid.io import load_json, load_maze, save_json, save_maze


def test_grid_file_round_trip(tmp_path):
    grid = build_hex_grid(2)
    path = tmp_path / "nested" / "grid.json"
    save_json(grid, path)

    loaded = load_json(path)
    assert list(loaded.faces) == list(grid.faces)
    assert loaded.compute_face_neighbors() == grid.compute_face_neighbors()


def test_maze_file_round_trip(tmp_path):
    maze = Maze(build_hex_grid(2)).generate(12)
    path = tmp_path / "maze.json"
    save_maze(maze, path)

    loaded = load_maze(path)
    assert loaded.seed == 12
    assert loaded.solution_faces() == maze.solution_faces()
    assert loaded.removed_walls() == maze.removed_walls()
