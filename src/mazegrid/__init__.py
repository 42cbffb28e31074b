"""MazeGrid — maze generation on planar lattices via their dual graph.

Public API is organised into layers:

- **Core** — models, embedded graph, subgraph views, dual graph, algorithms
- **Generation** — the :class:`Maze` orchestrator and its options
- **Building** — lattice constructors
- **I/O** — JSON persistence for grids and mazes
- **Rendering** — PNG output (requires matplotlib)
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import Vertex, Edge, Face
from .graph import EmbeddedGraph
from .subgraph import SubGraph, SubGraphVertex
from .dual import DualGraph, DualVertex
from .algorithms import (
    Graph,
    ShortestPathAlgorithm,
    build_face_adjacency,
    build_shared_edges,
    build_spanning_tree,
    get_face_adjacency,
    reachable,
    shortest_path,
)
from .geometry import face_center, graph_size, passage_widths

# ── Generation ──────────────────────────────────────────────────────
from .maze import (
    DisconnectedMazeError,
    GenerationOptions,
    Maze,
    MazeGenerationError,
    MissingOpeningError,
)

# ── Building ────────────────────────────────────────────────────────
from .builders import (
    build_hex_grid,
    build_rectangular_grid,
    hex_face_count,
    rectangular_edge_count,
)

# ── I/O ─────────────────────────────────────────────────────────────
from .io import load_json, load_maze, save_json, save_maze

__all__ = [
    # Core
    "Vertex",
    "Edge",
    "Face",
    "EmbeddedGraph",
    "SubGraph",
    "SubGraphVertex",
    "DualGraph",
    "DualVertex",
    "Graph",
    "ShortestPathAlgorithm",
    "build_face_adjacency",
    "build_shared_edges",
    "build_spanning_tree",
    "get_face_adjacency",
    "reachable",
    "shortest_path",
    "face_center",
    "graph_size",
    "passage_widths",
    # Generation
    "DisconnectedMazeError",
    "GenerationOptions",
    "Maze",
    "MazeGenerationError",
    "MissingOpeningError",
    # Building
    "build_hex_grid",
    "build_rectangular_grid",
    "hex_face_count",
    "rectangular_edge_count",
    # I/O
    "load_json",
    "load_maze",
    "save_json",
    "save_maze",
]
