from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass(frozen=True)
class Vertex:
    id: str
    x: Optional[float] = None
    y: Optional[float] = None

    def has_position(self) -> bool:
        return self.x is not None and self.y is not None

    def position(self) -> tuple[float, float]:
        if not self.has_position():
            raise ValueError(f"Vertex {self.id} has no position")
        return (self.x, self.y)


@dataclass(frozen=True)
class Edge:
    id: str
    vertex_ids: tuple[str, str]
    face_ids: tuple[str, ...] = field(default_factory=tuple)

    def is_boundary(self) -> bool:
        return len(self.face_ids) < 2

    def joins(self, a: str, b: str) -> bool:
        return set(self.vertex_ids) == {a, b}


@dataclass(frozen=True)
class Face:
    """A room of the lattice.

    *vertex_ids* are the room's corners in cycle order and *edge_ids*
    its walls in the same order: wall ``i`` runs from corner ``i`` to
    corner ``i + 1``.  Openings are searched in this order.
    """

    id: str
    face_type: str
    vertex_ids: tuple[str, ...]
    edge_ids: tuple[str, ...] = field(default_factory=tuple)
    neighbor_ids: tuple[str, ...] = field(default_factory=tuple)

    def corner_pairs(self) -> list[tuple[str, str]]:
        corners = self.vertex_ids
        return [(corners[i], corners[(i + 1) % len(corners)]) for i in range(len(corners))]

    def check_walls(self, edges: Mapping[str, Edge]) -> list[str]:
        """Problems with this room's wall cycle; empty when it is closed."""
        if len(self.vertex_ids) < 3:
            return [f"Face {self.id} has only {len(self.vertex_ids)} corners"]
        if len(set(self.vertex_ids)) != len(self.vertex_ids):
            return [f"Face {self.id} repeats a corner"]
        if len(self.edge_ids) != len(self.vertex_ids):
            return [
                f"Face {self.id} has {len(self.edge_ids)} walls for "
                f"{len(self.vertex_ids)} corners"
            ]

        problems = []
        for edge_id, (a, b) in zip(self.edge_ids, self.corner_pairs()):
            edge = edges.get(edge_id)
            if edge is None:
                continue
            if not edge.joins(a, b):
                problems.append(f"Face {self.id} wall {edge_id} does not join {a} and {b}")
            if self.id not in edge.face_ids:
                problems.append(f"Face {self.id} wall {edge_id} does not list the face")
        return problems
