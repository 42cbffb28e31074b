from __future__ import annotations

from pathlib import Path

from .geometry import face_center
from .maze import Maze


def render_maze_png(
    maze: Maze,
    output_path: str | Path,
    wall_color: str = "#2b2b2b",
    path_color: str = "#d1495b",
    excluded_color: str = "#5aa9e6",
    excluded_alpha: float = 0.3,
    linewidth: float = 2.0,
    padding: float = 0.5,
    dpi: int = 150,
    show_solution: bool = True,
) -> None:
    """Render the remaining walls of a generated maze to PNG.

    Requires matplotlib; imported lazily to keep core package lightweight.
    """
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from matplotlib.patches import Polygon
    except ImportError as exc:  # pragma: no cover - requires optional dep
        raise RuntimeError(
            "matplotlib is required for rendering. Install with `pip install matplotlib`."
        ) from exc

    if not maze.is_generated:
        raise RuntimeError("Maze has not been generated; call generate() first")

    vertices = maze.graph.vertices
    if not all(v.has_position() for v in vertices.values()):
        raise ValueError("All vertices must have positions for rendering.")

    fig, ax = plt.subplots()

    for room in maze.excluded_vertices:
        face = maze.dual_graph.face_of(room)
        points = [vertices[vid].position() for vid in face.vertex_ids]
        ax.add_patch(Polygon(points, closed=True, facecolor=excluded_color, alpha=excluded_alpha))

    for a, b in maze.resulting_graph.parent_edges():
        va, vb = vertices[a], vertices[b]
        ax.plot([va.x, vb.x], [va.y, vb.y], color=wall_color, linewidth=linewidth)

    if show_solution:
        centers = [
            face_center(vertices, maze.graph.faces[face_id])
            for face_id in maze.solution_faces()
        ]
        xs, ys = zip(*centers)
        ax.plot(xs, ys, color=path_color, linewidth=linewidth * 0.75, zorder=3)

    xs = [v.x for v in vertices.values()]
    ys = [v.y for v in vertices.values()]
    ax.set_aspect("equal", "box")
    ax.set_xlim(min(xs) - padding, max(xs) + padding)
    ax.set_ylim(max(ys) + padding, min(ys) - padding)
    ax.axis("off")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight", pad_inches=0)
    plt.close(fig)
