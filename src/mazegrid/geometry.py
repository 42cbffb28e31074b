"""Geometry helper functions used across the package."""

from __future__ import annotations

from typing import Dict, Iterable, Sequence, Tuple

import numpy as np

from .models import Face, Vertex


def _require_positions(vertices: Iterable[Vertex]) -> None:
    for vertex in vertices:
        if not vertex.has_position():
            raise ValueError(f"Vertex {vertex.id} has no position")


def graph_size(vertices: Iterable[Vertex]) -> Tuple[float, float]:
    """Maximum x and y over *vertices*; both start at 0.

    Lattices are laid out from the origin, so this is the far corner of
    the bounding box.
    """
    vertices = list(vertices)
    _require_positions(vertices)
    if not vertices:
        return (0.0, 0.0)
    coords = np.array([(v.x, v.y) for v in vertices], dtype=float)
    max_x, max_y = np.maximum(coords.max(axis=0), 0.0)
    return (float(max_x), float(max_y))


def passage_widths(vertices: Dict[str, Vertex], segments: Sequence[Tuple[str, str]]) -> np.ndarray:
    """Euclidean length of each ``(a, b)`` vertex-id segment, as an array."""
    if not segments:
        return np.zeros(0)
    used = [vertices[vid] for segment in segments for vid in segment]
    _require_positions(used)
    coords = np.array([(v.x, v.y) for v in used], dtype=float).reshape(-1, 2, 2)
    deltas = coords[:, 1, :] - coords[:, 0, :]
    return np.hypot(deltas[:, 0], deltas[:, 1])


def face_center(vertices: Dict[str, Vertex], face: Face) -> Tuple[float, float]:
    """Centroid of the face's corner positions."""
    corners = [vertices[vid] for vid in face.vertex_ids]
    _require_positions(corners)
    coords = np.array([(v.x, v.y) for v in corners], dtype=float)
    cx, cy = coords.mean(axis=0)
    return (float(cx), float(cy))
