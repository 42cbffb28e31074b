"""Subgraph views — restricted copies of another graph.

A :class:`SubGraph` holds an ordered list of :class:`SubGraphVertex`
objects.  Each one remembers the key of the vertex it was derived from
in the parent graph (``parent``) and its own neighbour list, expressed
as indices into the subgraph.  Parents are never owned: a subgraph of an
:class:`~mazegrid.graph.EmbeddedGraph` stores vertex ids, a subgraph of
a :class:`~mazegrid.dual.DualGraph` stores dual vertex indices, and a
subgraph of another subgraph stores that subgraph's vertex indices.

Because a :class:`SubGraph` satisfies the
:class:`~mazegrid.algorithms.Graph` protocol itself (keys are its own
indices), subgraphs can be derived from subgraphs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)

if TYPE_CHECKING:
    from .algorithms import Graph

K = TypeVar("K", bound=Hashable)


@dataclass
class SubGraphVertex(Generic[K]):
    index: int
    parent: K
    neighbors: List[int] = field(default_factory=list)

    def degree(self) -> int:
        return len(self.neighbors)


class SubGraph(Generic[K]):
    """Ordered collection of vertices derived from a parent graph."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.vertices: List[SubGraphVertex[K]] = []
        self._by_parent: Dict[K, int] = {}

    # ── construction ────────────────────────────────────────────────

    @classmethod
    def full(cls, graph: "Graph", name: str = "") -> "SubGraph":
        """Return a copy of *graph* containing every vertex and edge."""
        sub = cls(name)
        for key in graph.vertex_keys():
            sub.add_vertex(key)
        for vertex in list(sub.vertices):
            for other_key in graph.neighbor_keys(vertex.parent):
                other = sub.vertex_by_parent(other_key)
                if other is not None and other.index > vertex.index:
                    sub.connect(vertex.index, other.index)
        return sub

    def add_vertex(self, parent: K) -> SubGraphVertex[K]:
        if parent in self._by_parent:
            raise ValueError(f"Parent vertex {parent!r} already in subgraph {self.name!r}")
        vertex = SubGraphVertex(index=len(self.vertices), parent=parent)
        self.vertices.append(vertex)
        self._by_parent[parent] = vertex.index
        return vertex

    def connect(self, a: int, b: int) -> None:
        """Connect two subgraph vertices (by index) symmetrically."""
        if a == b:
            raise ValueError(f"Cannot connect vertex {a} to itself")
        va = self.vertices[a]
        vb = self.vertices[b]
        if b in va.neighbors:
            return
        va.neighbors.append(b)
        vb.neighbors.append(a)

    def disconnect(self, a: int, b: int) -> bool:
        """Remove the edge between *a* and *b*; return whether it existed."""
        va = self.vertices[a]
        vb = self.vertices[b]
        if b not in va.neighbors:
            return False
        va.neighbors.remove(b)
        vb.neighbors.remove(a)
        return True

    def disconnect_by_parents(self, parent_a: K, parent_b: K) -> bool:
        """Remove the edge between the vertices derived from two parents."""
        va = self.vertex_by_parent(parent_a)
        vb = self.vertex_by_parent(parent_b)
        if va is None or vb is None:
            return False
        return self.disconnect(va.index, vb.index)

    # ── queries ─────────────────────────────────────────────────────

    def vertex_by_parent(self, parent: K) -> Optional[SubGraphVertex[K]]:
        index = self._by_parent.get(parent)
        if index is None:
            return None
        return self.vertices[index]

    def has_parent(self, parent: K) -> bool:
        return parent in self._by_parent

    def are_connected(self, a: int, b: int) -> bool:
        return b in self.vertices[a].neighbors

    def edges(self) -> List[Tuple[int, int]]:
        """Each undirected edge once, as ``(lower, higher)`` index pairs."""
        result: List[Tuple[int, int]] = []
        for vertex in self.vertices:
            for other in vertex.neighbors:
                if other > vertex.index:
                    result.append((vertex.index, other))
        return result

    def edge_count(self) -> int:
        return sum(v.degree() for v in self.vertices) // 2

    def parent_edges(self) -> List[Tuple[K, K]]:
        """Edges translated back to parent keys."""
        return [
            (self.vertices[a].parent, self.vertices[b].parent)
            for a, b in self.edges()
        ]

    def parents(self) -> List[K]:
        return [v.parent for v in self.vertices]

    # Graph protocol
    def vertex_keys(self) -> Iterable[int]:
        return range(len(self.vertices))

    def neighbor_keys(self, key: int) -> Iterable[int]:
        return self.vertices[key].neighbors

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[SubGraphVertex[K]]:
        return iter(self.vertices)

    def __getitem__(self, index: int) -> SubGraphVertex[K]:
        return self.vertices[index]

    def __repr__(self) -> str:
        return f"SubGraph(name={self.name!r}, vertices={len(self)}, edges={self.edge_count()})"

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "vertices": [
                {"parent": v.parent, "neighbors": list(v.neighbors)}
                for v in self.vertices
            ],
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "SubGraph":
        sub = cls(payload.get("name", ""))
        records = payload.get("vertices", [])
        for record in records:
            sub.add_vertex(record["parent"])
        for vertex, record in zip(sub.vertices, records):
            vertex.neighbors = list(record.get("neighbors", []))
        for vertex in sub.vertices:
            for other in vertex.neighbors:
                if vertex.index not in sub.vertices[other].neighbors:
                    raise ValueError(
                        f"Subgraph {sub.name!r} edge {vertex.index}-{other} is not symmetric"
                    )
        return sub
