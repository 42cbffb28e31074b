"""Tests for maze rendering to PNG."""

import pytest

pytest.importorskip("matplotlib")

from mazegrid import Maze, build_hex_grid, build_rectangular_grid
from mazegrid.render import render_maze_png


def test_renders_rectangular_maze(tmp_path):
    maze = Maze(build_rectangular_grid(6, 8)).generate(1)
    out = tmp_path / "rect.png"
    render_maze_png(maze, out)
    assert out.exists()
    assert out.stat().st_size > 0


def test_renders_hex_maze_with_exclusions(tmp_path):
    maze = Maze(build_hex_grid(2))
    maze.excluded_vertices = [maze.dual_graph.vertex_by_face("f10")]
    maze.generate(2)
    out = tmp_path / "hex.png"
    render_maze_png(maze, out, show_solution=False)
    assert out.exists()


def test_ungenerated_maze_rejected(tmp_path):
    with pytest.raises(RuntimeError):
        render_maze_png(Maze(build_rectangular_grid(3, 3)), tmp_path / "x.png")
