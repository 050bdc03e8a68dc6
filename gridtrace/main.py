import argparse
import logging
import os
import sys

# Ensure project root is in path so we can import 'gridtrace' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridtrace import config
from gridtrace.algo.registry import GeneratorKind, SearchKind
from gridtrace.core.controller import RunController
from gridtrace.core.grid import Grid

logger = logging.getLogger("gridtrace")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def format_grid(grid: Grid, path=()) -> str:
    """ASCII view: '#' wall, 'S' start, 'T' target, '*' path, '.' open."""
    on_path = set(path)
    lines = []
    for r in range(grid.size):
        row = []
        for c in range(grid.size):
            pos = (r, c)
            if pos == grid.start:
                row.append("S")
            elif pos == grid.target:
                row.append("T")
            elif pos in grid.walls:
                row.append("#")
            elif pos in on_path:
                row.append("*")
            else:
                row.append(".")
        lines.append("".join(row))
    return "\n".join(lines)


def build_grid(args) -> Grid:
    size = args.size
    if size == config.GRID_SIZE:
        default_start, default_target = config.START, config.TARGET
    else:
        default_start, default_target = (1, 1), (size - 2, size - 2)
    start = tuple(args.start) if args.start else default_start
    target = tuple(args.target) if args.target else default_target
    return Grid(size, start=start, target=target)


def drive(run, label: str):
    """Headless consumption of a run with a live progress line."""
    for status in run:
        print(f"\r{label}: {status:<30}", end="", flush=True)
    print()
    return run.result


def show(grid: Grid, run):
    from gridtrace.viz.renderer import Renderer
    renderer = Renderer(grid, run=run, state=run.algorithm.sink)
    renderer.init_window()
    renderer.run_loop()
    return run.result


def start_with_state(controller, grid, starter, visual, **kwargs):
    if visual:
        from gridtrace.viz.renderer import RenderState
        kwargs["sink"] = RenderState(grid)
        kwargs["pace_ms"] = 0  # frame clock paces the viewer
    return starter(**kwargs)


def cmd_generate(args):
    grid = build_grid(args)
    controller = RunController(grid)
    pace = args.pace if args.pace is not None else config.GENERATION_PACE_MS[args.algo]
    logger.info(f"Generating {grid.size}x{grid.size} maze with {args.algo}...")

    run = start_with_state(controller, grid, controller.start_generation, args.visual,
                           kind=args.algo, seed=args.seed, pace_ms=pace)
    result = show(grid, run) if args.visual else drive(run, "Generating")
    if result is None:
        logger.warning("Generation window closed early")
        return 1

    controller.apply(result)
    logger.info(f"Steps: {result.steps}, passages: {result.passage_count}, "
                f"walls: {len(result.walls)} ({result.elapsed_ms:.1f} ms)")
    if args.print:
        print(format_grid(grid))
    return 0


def cmd_solve(args):
    grid = build_grid(args)
    controller = RunController(grid, pace_every=config.SEARCH_PACE_EVERY[args.algo])

    if args.maze:
        logger.info(f"Building {args.maze} maze (seed={args.seed})...")
        controller.generate(args.maze, seed=args.seed)

    pace = args.pace if args.pace is not None else config.SEARCH_PACE_MS[args.algo]
    logger.info(f"Solving with {args.algo} from {tuple(grid.start)} to {tuple(grid.target)}...")

    run = start_with_state(controller, grid, controller.start_search, args.visual,
                           kind=args.algo, pace_ms=pace)
    result = show(grid, run) if args.visual else drive(run, "Searching")
    if result is None:
        logger.warning("Search window closed early")
        return 1

    if result.found:
        logger.info(f"Path length: {result.path_length}, visited: {result.visited_count} "
                    f"({result.elapsed_ms:.1f} ms)")
    else:
        logger.info(f"No path ({result.status.value}), visited: {result.visited_count}")
    if args.print:
        print(format_grid(grid, result.path))
    return 0 if result.found else 2


def cmd_benchmark(args):
    grid = build_grid(args)
    controller = RunController(grid)
    if args.maze:
        logger.info(f"Building {args.maze} maze (seed={args.seed})...")
        controller.generate(args.maze, seed=args.seed)

    print(f"\n{'ALGORITHM':<22} | {'FOUND':<6} | {'PATH LEN':<8} | {'VISITED':<8} | {'TIME (ms)':<10}")
    print("-" * 66)
    for kind in SearchKind:
        result = controller.search(kind, pace_ms=0)
        print(f"{kind.value:<22} | {str(result.found):<6} | {result.path_length:<8} | "
              f"{result.visited_count:<8} | {result.elapsed_ms:<10.2f}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="gridtrace: step-by-step grid search and maze generation")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_grid_args(p):
        p.add_argument("--size", type=int, default=config.GRID_SIZE, help="Grid size (N x N)")
        p.add_argument("--start", type=int, nargs=2, metavar=("ROW", "COL"), help="Start cell")
        p.add_argument("--target", type=int, nargs=2, metavar=("ROW", "COL"), help="Target cell")
        p.add_argument("--seed", type=int, default=None, help="Random Seed")

    generators = [k.value for k in GeneratorKind]
    searches = [k.value for k in SearchKind]

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a maze wall layout")
    add_grid_args(gen_parser)
    gen_parser.add_argument("--algo", type=str, default=config.DEFAULT_GENERATOR, choices=generators,
                            help="Generation Algorithm")
    gen_parser.add_argument("--pace", type=float, default=None, help="Milliseconds between steps (0 = no delay)")
    gen_parser.add_argument("--visual", action="store_true", help="Show visualization")
    gen_parser.add_argument("--print", action="store_true", help="Print the resulting grid")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Search for a path between start and target")
    add_grid_args(solve_parser)
    solve_parser.add_argument("--algo", type=str, default=config.DEFAULT_SEARCH, choices=searches,
                              help="Search algorithm")
    solve_parser.add_argument("--maze", type=str, choices=generators, help="Generate walls first")
    solve_parser.add_argument("--pace", type=float, default=None, help="Milliseconds between steps (0 = no delay)")
    solve_parser.add_argument("--visual", action="store_true", help="Show visualization")
    solve_parser.add_argument("--print", action="store_true", help="Print the grid with the path")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Compare every search algorithm on one grid")
    add_grid_args(bench_parser)
    bench_parser.add_argument("--maze", type=str, choices=generators, help="Generate walls first")

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")
    if args.command == "generate":
        return cmd_generate(args)
    if args.command == "solve":
        return cmd_solve(args)
    return cmd_benchmark(args)


if __name__ == "__main__":
    sys.exit(main())
