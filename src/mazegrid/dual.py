"""Planar dual of an :class:`EmbeddedGraph` — one vertex per face."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .graph import EmbeddedGraph
from .models import Face


@dataclass(frozen=True)
class DualVertex:
    """A room: wraps exactly one face of the embedded graph.

    *neighbor_ids* are indices of adjacent dual vertices.
    """

    index: int
    face_id: str
    neighbor_ids: Tuple[int, ...] = field(default_factory=tuple)


class DualGraph:
    """Dual graph derived once from an embedded graph and never mutated.

    Dual vertices follow the embedded graph's face order; neighbours are
    sorted by index so the structure is fully deterministic.
    """

    def __init__(self, graph: EmbeddedGraph) -> None:
        self.graph = graph
        index_by_face = {face_id: i for i, face_id in enumerate(graph.faces)}
        adjacency = graph.face_adjacency()

        vertices: List[DualVertex] = []
        for face_id, index in index_by_face.items():
            neighbors = sorted(
                index_by_face[other]
                for other in adjacency.get(face_id, [])
                if other in index_by_face
            )
            vertices.append(DualVertex(index, face_id, tuple(neighbors)))

        self.vertices: Tuple[DualVertex, ...] = tuple(vertices)
        self._by_face: Dict[str, DualVertex] = {v.face_id: v for v in vertices}

    # Graph protocol
    def vertex_keys(self) -> range:
        return range(len(self.vertices))

    def neighbor_keys(self, key: int) -> Tuple[int, ...]:
        return self.vertices[key].neighbor_ids

    def vertex_by_face(self, face_id: str) -> Optional[DualVertex]:
        return self._by_face.get(face_id)

    def face_of(self, vertex: DualVertex) -> Face:
        return self.graph.faces[vertex.face_id]

    def common_edges(self, a: int, b: int) -> List[str]:
        """Embedded edge ids separating the rooms of dual vertices *a* and *b*."""
        return self.graph.common_edges(self.vertices[a].face_id, self.vertices[b].face_id)

    def edge_count(self) -> int:
        return sum(len(v.neighbor_ids) for v in self.vertices) // 2

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[DualVertex]:
        return iter(self.vertices)

    def __getitem__(self, index: int) -> DualVertex:
        return self.vertices[index]

    def __repr__(self) -> str:
        return f"DualGraph(vertices={len(self)}, edges={self.edge_count()})"
