"""Lattice constructors.

Each builder returns a fully connected :class:`EmbeddedGraph` with its
faces already computed, ready to be turned into a maze.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .graph import EmbeddedGraph
from .models import Edge, Face, Vertex


@dataclass(frozen=True)
class AxialCoord:
    q: int
    r: int


def build_rectangular_grid(rows: int, columns: int, size: float = 1.0) -> EmbeddedGraph:
    """Build a rectangular lattice of ``rows x columns`` vertices.

    Vertex ``(row, column)`` sits at ``(column * size, row * size)`` and is
    connected to its upper and left neighbours.  Every unit cell becomes a
    ``"square"`` face, row-major, with boundary edges in the order top,
    right, bottom, left.
    """
    if rows < 1 or columns < 1:
        raise ValueError("rows and columns must be >= 1")

    lattice: List[List[Vertex]] = []
    edge_map: Dict[Tuple[str, str], Edge] = {}
    for i in range(rows):
        row: List[Vertex] = []
        for j in range(columns):
            vertex = Vertex(f"v{i * columns + j + 1}", j * size, i * size)
            if i > 0:
                _get_edge_id(edge_map, vertex.id, lattice[i - 1][j].id)
            if j > 0:
                _get_edge_id(edge_map, vertex.id, row[j - 1].id)
            row.append(vertex)
        lattice.append(row)

    faces: List[Face] = []
    for i in range(rows - 1):
        for j in range(columns - 1):
            face_id = f"f{len(faces) + 1}"
            corners = [
                lattice[i][j].id,
                lattice[i][j + 1].id,
                lattice[i + 1][j + 1].id,
                lattice[i + 1][j].id,
            ]
            edge_ids = _get_edge_ids(edge_map, corners, face_id)
            faces.append(Face(face_id, "square", tuple(corners), tuple(edge_ids)))

    vertices = [vertex for row in lattice for vertex in row]
    return EmbeddedGraph(
        vertices,
        list(edge_map.values()),
        faces,
        metadata={"lattice": "rectangular", "rows": rows, "columns": columns},
    )


def rectangular_edge_count(rows: int, columns: int) -> int:
    if rows < 1 or columns < 1:
        raise ValueError("rows and columns must be >= 1")
    return rows * (columns - 1) + columns * (rows - 1)


def build_hex_grid(rings: int, size: float = 1.0) -> EmbeddedGraph:
    """Build a honeycomb of hexagonal rooms using axial coordinates.

    rings=0 produces a single hex. rings=1 produces 7 hexes, etc.  The
    grid is translated so every vertex has non-negative coordinates.
    """
    if rings < 0:
        raise ValueError("rings must be >= 0")

    centers = [_axial_to_pixel(coord, size) for coord in _hex_area(rings)]
    offset_x = size * (1.5 * rings + 1)
    offset_y = size * math.sqrt(3) * (rings + 0.5)

    vertex_map: Dict[str, Vertex] = {}
    edge_map: Dict[Tuple[str, str], Edge] = {}
    faces: List[Face] = []
    for idx, (cx, cy) in enumerate(centers, start=1):
        corners = _hex_corners((cx + offset_x, cy + offset_y), size)
        vertex_ids = [_get_vertex_id(vertex_map, corner) for corner in corners]
        edge_ids = _get_edge_ids(edge_map, vertex_ids, face_id=f"f{idx}")
        faces.append(
            Face(
                id=f"f{idx}",
                face_type="hex",
                vertex_ids=tuple(vertex_ids),
                edge_ids=tuple(edge_ids),
            )
        )

    return EmbeddedGraph(
        list(vertex_map.values()),
        list(edge_map.values()),
        faces,
        metadata={"lattice": "hex", "rings": rings},
    )


def hex_face_count(rings: int) -> int:
    if rings < 0:
        raise ValueError("rings must be >= 0")
    return 1 + 3 * rings * (rings + 1)


def _hex_area(rings: int) -> List[AxialCoord]:
    coords: List[AxialCoord] = []
    for q in range(-rings, rings + 1):
        r1 = max(-rings, -q - rings)
        r2 = min(rings, -q + rings)
        for r in range(r1, r2 + 1):
            coords.append(AxialCoord(q, r))
    return coords


def _axial_to_pixel(coord: AxialCoord, size: float) -> Tuple[float, float]:
    x = size * (1.5 * coord.q)
    y = size * (math.sqrt(3) * (coord.r + coord.q / 2))
    return x, y


def _hex_corners(center: Tuple[float, float], size: float) -> List[Tuple[float, float]]:
    cx, cy = center
    corners = []
    for i in range(6):
        angle = math.radians(60 * i)
        corners.append((cx + size * math.cos(angle), cy + size * math.sin(angle)))
    return corners


def _vertex_key(position: Tuple[float, float]) -> str:
    return f"{position[0]:.6f},{position[1]:.6f}"


def _get_vertex_id(vertex_map: Dict[str, Vertex], position: Tuple[float, float]) -> str:
    key = _vertex_key(position)
    if key not in vertex_map:
        vertex_map[key] = Vertex(f"v{len(vertex_map) + 1}", position[0], position[1])
    return vertex_map[key].id


def _get_edge_id(
    edge_map: Dict[Tuple[str, str], Edge],
    a: str,
    b: str,
    face_id: str | None = None,
) -> str:
    key = tuple(sorted((a, b)))
    edge = edge_map.get(key)
    if edge is None:
        faces = (face_id,) if face_id else ()
        edge = Edge(id=f"e{len(edge_map) + 1}", vertex_ids=key, face_ids=faces)
    elif face_id:
        edge = Edge(edge.id, edge.vertex_ids, edge.face_ids + (face_id,))
    edge_map[key] = edge
    return edge.id


def _get_edge_ids(
    edge_map: Dict[Tuple[str, str], Edge],
    vertex_ids: List[str],
    face_id: str,
) -> List[str]:
    count = len(vertex_ids)
    return [
        _get_edge_id(edge_map, vertex_ids[i], vertex_ids[(i + 1) % count], face_id)
        for i in range(count)
    ]
