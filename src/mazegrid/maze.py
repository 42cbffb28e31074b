"""Maze generation over the planar dual of a lattice.

Pipeline
--------
1. Derive the :class:`DualGraph` of the lattice (once, at construction).
2. Grow a random spanning tree over the dual vertices that are not
   excluded (:func:`~mazegrid.algorithms.build_spanning_tree`).
3. Find the path from the entry room to the exit room inside that tree
   (:func:`~mazegrid.algorithms.shortest_path`).
4. Copy the lattice in full and remove every wall crossed by a tree
   edge, then open one boundary wall for the entry and one for the exit.

Only the spanning tree, shortest path and resulting graph change between
calls to :meth:`Maze.generate`; each call rebuilds them from scratch.
"""

from __future__ import annotations

import json
import logging
import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .algorithms import (
    ShortestPathAlgorithm,
    build_spanning_tree,
    reachable,
    shortest_path,
)
from .dual import DualGraph, DualVertex
from .geometry import graph_size, passage_widths
from .graph import EmbeddedGraph
from .subgraph import SubGraph

logger = logging.getLogger(__name__)


class MazeGenerationError(ValueError):
    """Generation could not produce a solvable maze."""


class DisconnectedMazeError(MazeGenerationError):
    """Entry and exit are not connected once exclusions are applied."""


class MissingOpeningError(MazeGenerationError):
    """A room has no boundary wall that can be opened."""


@dataclass
class GenerationOptions:
    """Configuration for maze generation.

    Attributes
    ----------
    excluded_vertices : list of DualVertex
        Rooms kept out of the spanning tree.  They stay walled off.
    require_openings : bool
        Raise :class:`MissingOpeningError` when the entry or exit room has
        no wall that can be opened.  When false the opening is skipped and
        a warning is logged.
    algorithm : ShortestPathAlgorithm
        Strategy used for the solution path.
    """

    excluded_vertices: List[DualVertex] = field(default_factory=list)
    require_openings: bool = True
    algorithm: ShortestPathAlgorithm = ShortestPathAlgorithm.BREADTH_FIRST_SEARCH


class Maze:
    """A maze over one lattice.

    Parameters
    ----------
    graph : EmbeddedGraph
        Initial walls; read-only for the maze's lifetime.
    options : GenerationOptions, optional
    entry_face_id, exit_face_id : str, optional
        Rooms holding the entry and exit.  Default to the first and last
        face of *graph*.
    seed_source : random.Random, optional
        Draws seeds for :meth:`generate` calls without an explicit seed.
    """

    def __init__(
        self,
        graph: EmbeddedGraph,
        options: Optional[GenerationOptions] = None,
        *,
        entry_face_id: Optional[str] = None,
        exit_face_id: Optional[str] = None,
        seed_source: Optional[random.Random] = None,
    ) -> None:
        if not graph.faces:
            raise ValueError("Graph has no faces to build rooms from")

        self.graph = graph
        self.dual_graph = DualGraph(graph)
        self.options = options or GenerationOptions()
        self.seed_source = seed_source or random.Random()

        self.entry_vertex = self._room(entry_face_id, default=self.dual_graph[0])
        self.exit_vertex = self._room(exit_face_id, default=self.dual_graph[-1])

        self.seed: Optional[int] = None
        self.spanning_tree: Optional[SubGraph] = None
        self.shortest_path: Optional[SubGraph] = None
        self.resulting_graph: Optional[SubGraph] = None
        self.entry_opening: Optional[str] = None
        self.exit_opening: Optional[str] = None

    def _room(self, face_id: Optional[str], default: DualVertex) -> DualVertex:
        if face_id is None:
            return default
        vertex = self.dual_graph.vertex_by_face(face_id)
        if vertex is None:
            raise KeyError(f"Face {face_id!r} not in graph")
        return vertex

    # ── configuration ───────────────────────────────────────────────

    @property
    def excluded_vertices(self) -> List[DualVertex]:
        return self.options.excluded_vertices

    @excluded_vertices.setter
    def excluded_vertices(self, vertices: List[DualVertex]) -> None:
        self.options.excluded_vertices = list(vertices)

    @property
    def is_generated(self) -> bool:
        return self.resulting_graph is not None

    # ── generation ──────────────────────────────────────────────────

    def generate(self, seed: Optional[int] = None) -> "Maze":
        """Generate the maze, replacing any previous generation.

        The spanning tree is grown from the entry room.  Raises
        :class:`DisconnectedMazeError` when the exclusions cut any room
        off from the entry or no path joins entry and exit, and
        :class:`MissingOpeningError` when a required opening cannot be
        carved.  On failure the previous state is kept.
        """
        if seed is None:
            seed = self.seed_source.getrandbits(63)
        rng = random.Random(seed)
        excluded = {v.index for v in self.options.excluded_vertices}

        root = self.entry_vertex.index if self.entry_vertex.index not in excluded else None
        tree = build_spanning_tree(self.dual_graph, excluded, rng, root=root)

        sealed = [
            v.face_id for v in self.dual_graph
            if v.index not in excluded and not tree.has_parent(v.index)
        ]
        if root is not None and sealed:
            raise DisconnectedMazeError(
                f"Rooms {', '.join(sealed)} are cut off from face "
                f"{self.entry_vertex.face_id} by the excluded rooms"
            )

        entry = tree.vertex_by_parent(self.entry_vertex.index)
        exit_ = tree.vertex_by_parent(self.exit_vertex.index)
        path = shortest_path(
            tree,
            entry.index if entry is not None else None,
            exit_.index if exit_ is not None else None,
            self.options.algorithm,
        )
        if path is None:
            raise DisconnectedMazeError(
                f"No path from face {self.entry_vertex.face_id} to face "
                f"{self.exit_vertex.face_id} with {len(excluded)} excluded rooms"
            )

        resulting = self._carve(tree)
        entry_opening = self._open_boundary(resulting, self.entry_vertex, excluded)
        exit_opening = self._open_boundary(resulting, self.exit_vertex, excluded)

        self.seed = seed
        self.spanning_tree = tree
        self.shortest_path = path
        self.resulting_graph = resulting
        self.entry_opening = entry_opening
        self.exit_opening = exit_opening

        logger.debug(
            "Generated maze seed=%d rooms=%d path=%d walls=%d/%d",
            seed, len(tree), len(path), resulting.edge_count(), len(self.graph.edges),
        )
        return self

    def _carve(self, tree: SubGraph) -> SubGraph:
        resulting = SubGraph.full(self.graph, name="resulting_graph")
        for a, b in tree.parent_edges():
            for edge_id in self.dual_graph.common_edges(a, b):
                resulting.disconnect_by_parents(*self.graph.edges[edge_id].vertex_ids)
        return resulting

    def _open_boundary(
        self,
        resulting: SubGraph,
        vertex: DualVertex,
        excluded: set,
    ) -> Optional[str]:
        """Remove the first wall of *vertex*'s room that leads outside.

        A wall leads outside when it is not shared with any room that
        takes part in the maze.
        """
        face = self.dual_graph.face_of(vertex)
        inner_walls = set()
        for neighbor in vertex.neighbor_ids:
            if neighbor not in excluded:
                inner_walls.update(self.dual_graph.common_edges(vertex.index, neighbor))

        for edge_id in face.edge_ids:
            if edge_id in inner_walls:
                continue
            resulting.disconnect_by_parents(*self.graph.edges[edge_id].vertex_ids)
            return edge_id

        if self.options.require_openings:
            raise MissingOpeningError(f"Face {face.id} has no boundary wall to open")
        logger.warning("Face %s has no boundary wall to open; room left closed", face.id)
        return None

    # ── queries ─────────────────────────────────────────────────────

    def _require_generated(self) -> None:
        if not self.is_generated:
            raise RuntimeError("Maze has not been generated; call generate() first")

    def size(self) -> Tuple[float, float]:
        """Far corner ``(max_x, max_y)`` of the lattice."""
        return graph_size(self.graph.vertices.values())

    def find_minimal_rooms_passage(self) -> float:
        """Narrowest wall removed between two rooms of the spanning tree.

        Adjacent rooms are assumed to share a single wall; when they share
        more, only the first one in the source room's boundary counts.
        Returns ``math.inf`` when the tree has no edges.
        """
        self._require_generated()
        segments = []
        for a, b in self.spanning_tree.parent_edges():
            passage = self.dual_graph.common_edges(a, b)[0]
            segments.append(self.graph.edges[passage].vertex_ids)
        if not segments:
            return math.inf
        return float(passage_widths(self.graph.vertices, segments).min())

    def removed_walls(self) -> List[str]:
        """Ids of lattice edges missing from the resulting graph."""
        self._require_generated()
        return [
            edge.id for edge in self.graph.edges.values()
            if not self._wall_standing(*edge.vertex_ids)
        ]

    def _wall_standing(self, a: str, b: str) -> bool:
        va = self.resulting_graph.vertex_by_parent(a)
        vb = self.resulting_graph.vertex_by_parent(b)
        return self.resulting_graph.are_connected(va.index, vb.index)

    def room_adjacency(self) -> Dict[str, List[str]]:
        """Rooms joined by at least one removed wall, keyed by face id."""
        self._require_generated()
        adjacency: Dict[str, List[str]] = {}
        for vertex in self.dual_graph:
            open_rooms = []
            for neighbor in vertex.neighbor_ids:
                walls = self.dual_graph.common_edges(vertex.index, neighbor)
                if any(
                    not self._wall_standing(*self.graph.edges[eid].vertex_ids)
                    for eid in walls
                ):
                    open_rooms.append(self.dual_graph[neighbor].face_id)
            adjacency[vertex.face_id] = open_rooms
        return adjacency

    def is_solvable(self) -> bool:
        """True if the exit room can be walked to from the entry room."""
        rooms = reachable(self.room_adjacency(), self.entry_vertex.face_id)
        return self.exit_vertex.face_id in rooms

    def solution_faces(self) -> List[str]:
        """Face ids along the solution, entry first.

        Follows each path vertex back through the spanning tree to its
        dual vertex and face.
        """
        self._require_generated()
        return [
            self.dual_graph[self.spanning_tree[tree_index].parent].face_id
            for tree_index in self.shortest_path.parents()
        ]

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        self._require_generated()
        return {
            "graph": self.graph.to_dict(),
            "dual_graph": [
                {"face": v.face_id, "neighbors": list(v.neighbor_ids)}
                for v in self.dual_graph
            ],
            "spanning_tree": self.spanning_tree.to_dict(),
            "shortest_path": self.shortest_path.to_dict(),
            "resulting_graph": self.resulting_graph.to_dict(),
            "entry": self.entry_vertex.index,
            "exit": self.exit_vertex.index,
            "seed": self.seed,
            "openings": {"entry": self.entry_opening, "exit": self.exit_opening},
        }

    @classmethod
    def from_dict(cls, payload: dict, options: Optional[GenerationOptions] = None) -> "Maze":
        """Restore a generated maze.

        Options and the seed source are not part of the snapshot; pass
        *options* to re-establish exclusions.
        """
        graph = EmbeddedGraph.from_dict(payload["graph"])
        maze = cls(graph, options)

        stored_faces = [record["face"] for record in payload.get("dual_graph", [])]
        derived_faces = [v.face_id for v in maze.dual_graph]
        if stored_faces != derived_faces:
            raise ValueError("Stored dual graph does not match the graph's faces")

        maze.entry_vertex = maze.dual_graph[payload["entry"]]
        maze.exit_vertex = maze.dual_graph[payload["exit"]]
        maze.seed = payload.get("seed")
        maze.spanning_tree = SubGraph.from_dict(payload["spanning_tree"])
        maze.shortest_path = SubGraph.from_dict(payload["shortest_path"])
        maze.resulting_graph = SubGraph.from_dict(payload["resulting_graph"])
        openings = payload.get("openings", {})
        maze.entry_opening = openings.get("entry")
        maze.exit_opening = openings.get("exit")
        return maze

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_data: str) -> "Maze":
        return cls.from_dict(json.loads(json_data))

    def __repr__(self) -> str:
        state = f"seed={self.seed}" if self.is_generated else "not generated"
        return f"Maze(rooms={len(self.dual_graph)}, {state})"
