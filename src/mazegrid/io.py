from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from .graph import EmbeddedGraph
from .maze import Maze


PathLike = Union[str, Path]


def load_json(path: PathLike) -> EmbeddedGraph:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return EmbeddedGraph.from_dict(data)


def save_json(grid: EmbeddedGraph, path: PathLike) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(grid.to_json(), encoding="utf-8")


def load_maze(path: PathLike) -> Maze:
    return Maze.from_json(Path(path).read_text(encoding="utf-8"))


def save_maze(maze: Maze, path: PathLike) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(maze.to_json(), encoding="utf-8")
