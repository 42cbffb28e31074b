from mazegrid.builders import build_hex_grid, build_rectangular_grid
from mazegrid.dual import DualGraph


def test_dual_of_rectangular_lattice():
    grid = build_rectangular_grid(3, 3)
    dual = DualGraph(grid)

    assert len(dual) == len(grid.faces) == 4
    assert [v.face_id for v in dual] == ["f1", "f2", "f3", "f4"]
    assert [v.neighbor_ids for v in dual] == [(1, 2), (0, 3), (0, 3), (1, 2)]
    assert dual.edge_count() == 4


def test_face_bijection():
    grid = build_hex_grid(2)
    dual = DualGraph(grid)

    assert len({v.face_id for v in dual}) == len(grid.faces)
    for vertex in dual:
        assert dual.vertex_by_face(vertex.face_id) is vertex
        assert dual.face_of(vertex) is grid.faces[vertex.face_id]
    assert dual.vertex_by_face("missing") is None


def test_dual_edges_mirror_face_adjacency():
    grid = build_hex_grid(1)
    dual = DualGraph(grid)
    adjacency = grid.compute_face_neighbors()

    for vertex in dual:
        expected = sorted(adjacency[vertex.face_id])
        assert sorted(dual[i].face_id for i in dual.neighbor_keys(vertex.index)) == expected


def test_common_edges_between_rooms():
    dual = DualGraph(build_rectangular_grid(3, 3))
    assert dual.common_edges(0, 1) == ["e4"]
    assert dual.common_edges(2, 3) == ["e9"]
    assert dual.common_edges(0, 3) == []


def test_dual_is_deterministic():
    a = DualGraph(build_hex_grid(2))
    b = DualGraph(build_hex_grid(2))
    assert a.vertices == b.vertices
