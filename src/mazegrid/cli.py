"""MazeGrid command-line interface."""

from __future__ import annotations

import argparse
import logging

from .io import load_json, save_json, save_maze
from .maze import GenerationOptions, Maze, MazeGenerationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="MazeGrid CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate a grid")
    validate.add_argument("--in", dest="input_path", required=True)
    validate.add_argument("--strict", action="store_true")

    build_rect = sub.add_parser("build-rect", help="Build a rectangular lattice")
    build_rect.add_argument("--rows", type=int, required=True)
    build_rect.add_argument("--columns", type=int, required=True)
    build_rect.add_argument("--out", dest="output_path", required=True)

    build_hex = sub.add_parser("build-hex", help="Build a hexagonal lattice")
    build_hex.add_argument("--rings", type=int, required=True)
    build_hex.add_argument("--out", dest="output_path", required=True)

    generate = sub.add_parser("generate", help="Generate a maze from a grid")
    generate.add_argument("--in", dest="input_path", required=True)
    generate.add_argument("--out", dest="output_path", required=True)
    generate.add_argument("--seed", type=int)
    generate.add_argument("--entry", dest="entry_face_id")
    generate.add_argument("--exit", dest="exit_face_id")
    generate.add_argument(
        "--exclude", nargs="*", default=[], metavar="FACE_ID",
        help="Faces kept out of the maze",
    )
    generate.add_argument("--allow-closed", action="store_true",
                          help="Do not fail when an entry/exit wall cannot be opened")
    generate.add_argument("--render-out", dest="render_path")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "validate":
        grid = load_json(args.input_path)
        errors = grid.validate(strict=args.strict)
        if errors:
            for error in errors:
                print(error)
            raise SystemExit(1)
        print("OK")

    elif args.command == "build-rect":
        from .builders import build_rectangular_grid
        grid = build_rectangular_grid(args.rows, args.columns)
        save_json(grid, args.output_path)
        print(f"Saved {args.output_path}")

    elif args.command == "build-hex":
        from .builders import build_hex_grid
        grid = build_hex_grid(args.rings)
        save_json(grid, args.output_path)
        print(f"Saved {args.output_path}")

    elif args.command == "generate":
        _cmd_generate(args)


def _cmd_generate(args) -> None:
    grid = load_json(args.input_path)
    maze = Maze(
        grid,
        GenerationOptions(require_openings=not args.allow_closed),
        entry_face_id=args.entry_face_id,
        exit_face_id=args.exit_face_id,
    )

    excluded = []
    for face_id in args.exclude:
        vertex = maze.dual_graph.vertex_by_face(face_id)
        if vertex is None:
            print(f"Unknown face {face_id}")
            raise SystemExit(1)
        excluded.append(vertex)
    maze.excluded_vertices = excluded

    try:
        maze.generate(args.seed)
    except MazeGenerationError as exc:
        print(f"Generation failed: {exc}")
        raise SystemExit(1)

    save_maze(maze, args.output_path)
    if args.render_path:
        from .render import render_maze_png
        render_maze_png(maze, args.render_path)
    print(
        f"Saved {args.output_path} (seed {maze.seed}, "
        f"solution {len(maze.shortest_path)} rooms)"
    )


if __name__ == "__main__":
    main()
