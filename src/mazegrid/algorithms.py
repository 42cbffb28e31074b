from __future__ import annotations

import logging
import random
from collections import defaultdict, deque
from enum import Enum
from typing import (
    Dict,
    Hashable,
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    Set,
    Tuple,
    runtime_checkable,
)

from .models import Edge, Face
from .subgraph import SubGraph

logger = logging.getLogger(__name__)


@runtime_checkable
class Graph(Protocol):
    """Anything with enumerable vertex keys and symmetric neighbours."""

    def vertex_keys(self) -> Iterable[Hashable]:
        ...

    def neighbor_keys(self, key: Hashable) -> Iterable[Hashable]:
        ...


class ShortestPathAlgorithm(Enum):
    BREADTH_FIRST_SEARCH = "bfs"


# ── Face adjacency ──────────────────────────────────────────────────

def build_face_adjacency(faces: Iterable[Face], edges: Iterable[Edge]) -> Dict[str, List[str]]:
    """Return face adjacency map based purely on shared edges."""
    neighbors: dict[str, set[str]] = {face.id: set() for face in faces}
    for face_ids in build_edge_faces(edges).values():
        if len(face_ids) < 2:
            continue
        for i, face_id in enumerate(face_ids):
            for other_id in face_ids[i + 1 :]:
                neighbors[face_id].add(other_id)
                neighbors[other_id].add(face_id)

    return {face_id: sorted(neigh) for face_id, neigh in neighbors.items()}


def build_edge_faces(edges: Iterable[Edge]) -> Dict[str, List[str]]:
    edge_to_faces: dict[str, list[str]] = defaultdict(list)
    for edge in edges:
        for face_id in edge.face_ids:
            edge_to_faces[edge.id].append(face_id)
    return edge_to_faces


def build_shared_edges(edges: Iterable[Edge]) -> Dict[Tuple[str, str], List[str]]:
    """Return ``{(face_a, face_b): [edge ids]}`` for every adjacent pair.

    Both orderings of each pair are present.
    """
    shared: dict[tuple[str, str], list[str]] = defaultdict(list)
    for edge_id, face_ids in build_edge_faces(edges).items():
        for i, face_id in enumerate(face_ids):
            for other_id in face_ids[i + 1 :]:
                shared[(face_id, other_id)].append(edge_id)
                shared[(other_id, face_id)].append(edge_id)
    return dict(shared)


def get_face_adjacency(faces: Iterable[Face], edges: Iterable[Edge]) -> Dict[str, List[str]]:
    """Return face adjacency, preferring precomputed ``neighbor_ids``.

    Falls back to :func:`build_face_adjacency` when no face carries
    neighbour ids.
    """
    faces = list(faces)
    if any(f.neighbor_ids for f in faces):
        return {f.id: sorted(f.neighbor_ids) for f in faces}
    return build_face_adjacency(faces, edges)


# ── Spanning tree ───────────────────────────────────────────────────

def build_spanning_tree(
    graph: Graph,
    excluded: Iterable[Hashable] = (),
    rng: Optional[random.Random] = None,
    *,
    root: Optional[Hashable] = None,
    name: str = "spanning_tree",
) -> SubGraph:
    """Grow a random spanning tree over the non-excluded vertices.

    The tree is grown depth-first: from the current vertex a random
    unvisited neighbour is chosen and entered; when none remains the
    walk backtracks.  Excluded keys never enter the tree and their edges
    are never followed.

    Only the component containing *root* (a random non-excluded vertex
    when omitted) is spanned.  If the exclusions disconnect the graph the
    tree is partial; callers detect this with :func:`shortest_path`
    returning ``None``.

    Parameters
    ----------
    graph : Graph
        Parent graph; tree vertices record its keys as ``parent``.
    excluded : iterable of keys
        Vertices that must not appear in the tree.
    rng : random.Random, optional
        Random number generator for tie-breaking.  If *None* a
        deterministic default is used.
    """
    if rng is None:
        rng = random.Random(42)
    excluded = set(excluded)

    candidates = [key for key in graph.vertex_keys() if key not in excluded]
    tree: SubGraph = SubGraph(name)
    if not candidates:
        return tree

    if root is None:
        root = rng.choice(candidates)
    elif root in excluded:
        raise ValueError(f"Root {root!r} is excluded")

    tree.add_vertex(root)
    stack = [root]
    while stack:
        current = stack[-1]
        unvisited = [
            key for key in graph.neighbor_keys(current)
            if key not in excluded and not tree.has_parent(key)
        ]
        if not unvisited:
            stack.pop()
            continue
        chosen = rng.choice(unvisited)
        child = tree.add_vertex(chosen)
        tree.connect(tree.vertex_by_parent(current).index, child.index)
        stack.append(chosen)

    if len(tree) < len(candidates):
        logger.warning(
            "Spanning tree covers %d of %d vertices; exclusions disconnect the graph",
            len(tree), len(candidates),
        )
    return tree


# ── Shortest path ───────────────────────────────────────────────────

def shortest_path(
    tree: Graph,
    source: Optional[Hashable],
    destination: Optional[Hashable],
    algorithm: ShortestPathAlgorithm = ShortestPathAlgorithm.BREADTH_FIRST_SEARCH,
    *,
    name: str = "shortest_path",
) -> Optional[SubGraph]:
    """Return the path from *source* to *destination* as a subgraph of *tree*.

    Path vertices are ordered from source to destination and their
    ``parent`` is the corresponding key of *tree*.  Returns ``None`` when
    either endpoint is missing (``None``) or no path exists.
    """
    if algorithm is not ShortestPathAlgorithm.BREADTH_FIRST_SEARCH:
        raise ValueError(f"Unsupported shortest path algorithm: {algorithm!r}")
    if source is None or destination is None:
        return None

    chain = _bfs_chain(tree, source, destination)
    if chain is None:
        return None

    path: SubGraph = SubGraph(name)
    previous = None
    for key in chain:
        vertex = path.add_vertex(key)
        if previous is not None:
            path.connect(previous.index, vertex.index)
        previous = vertex
    return path


def _bfs_chain(graph: Graph, source: Hashable, destination: Hashable) -> Optional[List[Hashable]]:
    came_from: Dict[Hashable, Optional[Hashable]] = {source: None}
    queue = deque([source])
    while queue:
        current = queue.popleft()
        if current == destination:
            break
        for neighbor in graph.neighbor_keys(current):
            if neighbor in came_from:
                continue
            came_from[neighbor] = current
            queue.append(neighbor)

    if destination not in came_from:
        return None

    chain: List[Hashable] = []
    node: Optional[Hashable] = destination
    while node is not None:
        chain.append(node)
        node = came_from[node]
    chain.reverse()
    return chain


def reachable(adjacency: Mapping[Hashable, Iterable[Hashable]], start: Hashable) -> Set[Hashable]:
    """Return every key reachable from *start* through *adjacency*."""
    visited = {start}
    frontier = deque([start])
    while frontier:
        current = frontier.popleft()
        for neighbor in adjacency.get(current, []):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            frontier.append(neighbor)
    return visited
