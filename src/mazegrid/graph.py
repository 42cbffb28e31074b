from __future__ import annotations

import json
from typing import Dict, Iterable, List, Optional, Tuple

from .algorithms import build_face_adjacency, build_shared_edges, get_face_adjacency
from .models import Edge, Face, Vertex


class EmbeddedGraph:
    """Planar graph of positioned vertices, explicit edges and faces.

    Vertices, edges and faces are stored by id; every cross reference
    (edge endpoints, face boundaries, edge-to-face links) is an id, so
    derived graphs can point back into this one without owning it.

    Faces are supplied by the lattice builder.  Their insertion order is
    significant: it fixes the order of dual vertices.
    """

    VERSION = "1.0"

    def __init__(
        self,
        vertices: Iterable[Vertex],
        edges: Iterable[Edge],
        faces: Iterable[Face] = (),
        metadata: Optional[dict] = None,
    ) -> None:
        self.vertices: Dict[str, Vertex] = {v.id: v for v in vertices}
        self.edges: Dict[str, Edge] = {e.id: e for e in edges}
        self.faces: Dict[str, Face] = {f.id: f for f in faces}
        self.metadata = metadata or {}

        self._adjacency: Dict[str, List[str]] = {vid: [] for vid in self.vertices}
        self._edge_lookup: Dict[Tuple[str, str], str] = {}
        for edge in self.edges.values():
            a, b = edge.vertex_ids
            if (a, b) in self._edge_lookup:
                raise ValueError(f"Edge {edge.id} duplicates edge {self._edge_lookup[(a, b)]}")
            self._edge_lookup[(a, b)] = edge.id
            self._edge_lookup[(b, a)] = edge.id
            self._adjacency.setdefault(a, []).append(b)
            self._adjacency.setdefault(b, []).append(a)

        self._shared_edges: Optional[Dict[Tuple[str, str], List[str]]] = None

    # ── Graph protocol ──────────────────────────────────────────────

    def vertex_keys(self) -> Iterable[str]:
        return self.vertices.keys()

    def neighbor_keys(self, key: str) -> List[str]:
        return self._adjacency.get(key, [])

    def edge_between(self, a: str, b: str) -> Optional[Edge]:
        edge_id = self._edge_lookup.get((a, b))
        return self.edges[edge_id] if edge_id is not None else None

    # ── Rooms ───────────────────────────────────────────────────────

    def compute_face_neighbors(self) -> Dict[str, list[str]]:
        return build_face_adjacency(self.faces.values(), self.edges.values())

    def face_adjacency(self) -> Dict[str, list[str]]:
        """Return face adjacency, preferring ``neighbor_ids`` when populated."""
        return get_face_adjacency(self.faces.values(), self.edges.values())

    def common_edges(self, face_a: str, face_b: str) -> List[str]:
        """Ids of the edges shared by two faces, in *face_a*'s boundary order."""
        if self._shared_edges is None:
            self._shared_edges = build_shared_edges(self.edges.values())
        shared = set(self._shared_edges.get((face_a, face_b), ()))
        return [eid for eid in self.faces[face_a].edge_ids if eid in shared]

    # ── Validation ──────────────────────────────────────────────────

    def validate(self, strict: bool = False) -> list[str]:
        """Return a list of problems; empty means the graph can host a maze.

        The basic pass checks that every id reference resolves.  *strict*
        also checks the assumptions carving relies on: each room's walls
        form its corner cycle, walls separate at most two rooms, adjacent
        rooms share a single wall, and every corner is positioned.
        """
        problems = [
            f"Edge {edge.id} references missing {kind} {ref}"
            for edge in self.edges.values()
            for kind, refs, known in (
                ("vertex", edge.vertex_ids, self.vertices),
                ("face", edge.face_ids, self.faces),
            )
            for ref in refs
            if ref not in known
        ]
        problems += [
            f"Face {face.id} references missing {kind} {ref}"
            for face in self.faces.values()
            for kind, refs, known in (
                ("vertex", face.vertex_ids, self.vertices),
                ("edge", face.edge_ids, self.edges),
            )
            for ref in refs
            if ref not in known
        ]
        if not strict:
            return problems

        for edge in self.edges.values():
            if len(set(edge.vertex_ids)) < 2:
                problems.append(f"Edge {edge.id} is a loop on vertex {edge.vertex_ids[0]}")
            if len(edge.face_ids) > 2:
                problems.append(f"Edge {edge.id} borders {len(edge.face_ids)} faces")
        for face in self.faces.values():
            problems.extend(face.check_walls(self.edges))
        for (face_a, face_b), edge_ids in build_shared_edges(self.edges.values()).items():
            if face_a < face_b and len(edge_ids) > 1:
                problems.append(f"Faces {face_a} and {face_b} share {len(edge_ids)} edges")
        problems.extend(
            f"Vertex {vertex.id} has no position"
            for vertex in self.vertices.values()
            if not vertex.has_position()
        )
        return problems

    # ── Serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        """Plain-data form; lists keep insertion order, so face order survives."""
        adjacency = self.face_adjacency()
        return {
            "version": self.VERSION,
            "metadata": self.metadata,
            "vertices": [[v.id, v.x, v.y] for v in self.vertices.values()],
            "edges": [
                {"id": e.id, "ends": list(e.vertex_ids), "faces": list(e.face_ids)}
                for e in self.edges.values()
            ],
            "faces": [
                {
                    "id": f.id,
                    "type": f.face_type,
                    "corners": list(f.vertex_ids),
                    "walls": list(f.edge_ids),
                    "neighbors": adjacency.get(f.id, []),
                }
                for f in self.faces.values()
            ],
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "EmbeddedGraph":
        if payload.get("version") != cls.VERSION:
            raise ValueError(f"Unsupported graph payload version {payload.get('version')!r}")
        vertices = [Vertex(vid, x, y) for vid, x, y in payload["vertices"]]
        edges = [
            Edge(record["id"], tuple(record["ends"]), tuple(record["faces"]))
            for record in payload["edges"]
        ]
        faces = [
            Face(
                record["id"],
                record["type"],
                tuple(record["corners"]),
                tuple(record["walls"]),
                tuple(record.get("neighbors", ())),
            )
            for record in payload["faces"]
        ]
        return cls(vertices, edges, faces, payload.get("metadata"))

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_data: str) -> "EmbeddedGraph":
        return cls.from_dict(json.loads(json_data))

    def __repr__(self) -> str:
        return (
            f"EmbeddedGraph(vertices={len(self.vertices)}, edges={len(self.edges)}, "
            f"faces={len(self.faces)})"
        )
