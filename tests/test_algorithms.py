import random

import pytest

from mazegrid.algorithms import (
    Graph,
    ShortestPathAlgorithm,
    build_spanning_tree,
    reachable,
    shortest_path,
)
from mazegrid.builders import build_hex_grid, build_rectangular_grid
from mazegrid.dual import DualGraph
from mazegrid.subgraph import SubGraph


@pytest.fixture
def dual() -> DualGraph:
    return DualGraph(build_rectangular_grid(6, 7))


def _tree_adjacency(tree: SubGraph) -> dict:
    return {v.index: list(v.neighbors) for v in tree}


# ═══════════════════════════════════════════════════════════════════
# Spanning tree
# ═══════════════════════════════════════════════════════════════════


def test_graphs_satisfy_protocol(dual):
    assert isinstance(dual, Graph)
    assert isinstance(dual.graph, Graph)
    assert isinstance(SubGraph(), Graph)


def test_spanning_tree_covers_every_vertex(dual):
    tree = build_spanning_tree(dual, rng=random.Random(3))

    assert len(tree) == len(dual) == 30
    assert sorted(tree.parents()) == list(range(30))
    assert tree.edge_count() == len(tree) - 1
    assert reachable(_tree_adjacency(tree), 0) == set(range(len(tree)))


def test_spanning_tree_edges_are_dual_edges(dual):
    tree = build_spanning_tree(dual, rng=random.Random(11))
    for a, b in tree.parent_edges():
        assert b in dual.neighbor_keys(a)


def test_spanning_tree_skips_excluded(dual):
    excluded = {8, 15, 22}
    tree = build_spanning_tree(dual, excluded, random.Random(5))

    assert len(tree) == len(dual) - len(excluded)
    assert not excluded & set(tree.parents())
    assert tree.edge_count() == len(tree) - 1
    assert reachable(_tree_adjacency(tree), 0) == set(range(len(tree)))


def test_spanning_tree_is_reproducible(dual):
    a = build_spanning_tree(dual, rng=random.Random(42))
    b = build_spanning_tree(dual, rng=random.Random(42))
    assert a.to_dict() == b.to_dict()


def test_spanning_tree_varies_with_seed(dual):
    shapes = {
        frozenset(
            frozenset(edge)
            for edge in build_spanning_tree(dual, rng=random.Random(seed)).parent_edges()
        )
        for seed in range(5)
    }
    assert len(shapes) > 1


def test_spanning_tree_root(dual):
    tree = build_spanning_tree(dual, rng=random.Random(1), root=17)
    assert tree[0].parent == 17
    with pytest.raises(ValueError):
        build_spanning_tree(dual, {17}, random.Random(1), root=17)


def test_spanning_tree_partial_when_disconnected():
    # The middle column of rooms splits a 3x4 lattice's rooms in two
    dual = DualGraph(build_rectangular_grid(3, 4))
    tree = build_spanning_tree(dual, {1, 4}, random.Random(0), root=0)
    assert sorted(tree.parents()) == [0, 3]


def test_spanning_tree_all_excluded():
    dual = DualGraph(build_rectangular_grid(2, 3))
    assert len(build_spanning_tree(dual, {0, 1})) == 0


# ═══════════════════════════════════════════════════════════════════
# Shortest path
# ═══════════════════════════════════════════════════════════════════


def test_shortest_path_endpoints_and_continuity(dual):
    tree = build_spanning_tree(dual, rng=random.Random(7))
    source = tree.vertex_by_parent(0).index
    destination = tree.vertex_by_parent(29).index

    path = shortest_path(tree, source, destination)

    assert path[0].parent == source
    assert path[len(path) - 1].parent == destination
    assert path.edge_count() == len(path) - 1
    for a, b in path.parent_edges():
        assert tree.are_connected(a, b)


def test_shortest_path_is_symmetric(dual):
    tree = build_spanning_tree(dual, rng=random.Random(9))
    source = tree.vertex_by_parent(0).index
    destination = tree.vertex_by_parent(29).index

    forward = shortest_path(tree, source, destination)
    backward = shortest_path(tree, destination, source)

    assert len(forward) == len(backward)
    assert forward.parents() == list(reversed(backward.parents()))


def test_shortest_path_is_minimal_on_cyclic_graph():
    grid = build_rectangular_grid(4, 4)
    full = SubGraph.full(grid)
    corner = full.vertex_by_parent("v1").index
    opposite = full.vertex_by_parent("v16").index

    path = shortest_path(full, corner, opposite)
    assert path.edge_count() == 6


def test_shortest_path_same_vertex(dual):
    tree = build_spanning_tree(dual, rng=random.Random(2))
    path = shortest_path(tree, 4, 4)
    assert path.parents() == [4]
    assert path.edge_count() == 0


def test_shortest_path_reports_no_path():
    sub = SubGraph()
    sub.add_vertex("a")
    sub.add_vertex("b")

    assert shortest_path(sub, 0, 1) is None
    assert shortest_path(sub, None, 1) is None
    assert shortest_path(sub, 0, None) is None


def test_shortest_path_rejects_unknown_algorithm(dual):
    tree = build_spanning_tree(dual)
    with pytest.raises(ValueError):
        shortest_path(tree, 0, 1, algorithm="dijkstra")


def test_default_algorithm_is_bfs():
    assert ShortestPathAlgorithm("bfs") is ShortestPathAlgorithm.BREADTH_FIRST_SEARCH


def test_hex_tree_and_path():
    dual = DualGraph(build_hex_grid(2))
    tree = build_spanning_tree(dual, rng=random.Random(4))
    path = shortest_path(tree, tree.vertex_by_parent(0).index, tree.vertex_by_parent(18).index)

    assert len(tree) == 19
    assert path is not None
    assert len(path) >= 2


# ═══════════════════════════════════════════════════════════════════
# Reachability
# ═══════════════════════════════════════════════════════════════════


def test_reachable():
    adjacency = {"a": ["b"], "b": ["a", "c"], "c": ["b"], "d": []}
    assert reachable(adjacency, "a") == {"a", "b", "c"}
    assert reachable(adjacency, "d") == {"d"}
