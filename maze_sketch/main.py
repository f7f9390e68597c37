import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'maze_sketch' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

MAX_MAZE_SIZE = 20

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def maze_size(value: str) -> int:
    try:
        size = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid size: {value!r}")
    if not 1 <= size <= MAX_MAZE_SIZE:
        raise argparse.ArgumentTypeError(f"size must be between 1 and {MAX_MAZE_SIZE}, got {size}")
    return size

def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Sketch: animated recursive backtracking")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Animate Command
    anim_parser = subparsers.add_parser("animate", help="Open a window and watch the maze being carved")
    anim_parser.add_argument("--width", type=maze_size, default=15, help="Maze width in cells")
    anim_parser.add_argument("--height", type=maze_size, default=15, help="Maze height in cells")
    anim_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    anim_parser.add_argument("--step-delay", type=positive_int, default=1, help="Frames between generator steps")
    anim_parser.add_argument("--fps", type=positive_int, default=60, help="Frame rate cap")
    anim_parser.add_argument("--watch", action="store_true", help="Start with watch mode enabled")
    anim_parser.add_argument("--record", action="store_true", help="Record the animation to mp4")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a maze headless and print it")
    gen_parser.add_argument("--width", type=maze_size, default=15, help="Maze width in cells")
    gen_parser.add_argument("--height", type=maze_size, default=15, help="Maze height in cells")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--start", type=int, nargs=2, metavar=("X", "Y"), help="Start cell")
    gen_parser.add_argument("--steps", type=positive_int, default=None,
                            help="Stop after this many steps (default: run to completion)")

    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_sketch")

    if args.command is None:
        parser.print_help()
        return

    logger.info(f"Running command: {args.command}")

    from maze_sketch.algo.dfs import RecursiveBacktracker

    if args.command == "animate":
        from maze_sketch.core.control import PlaybackController
        from maze_sketch.viz.renderer import Renderer

        generator = RecursiveBacktracker(args.width, args.height, seed=args.seed)
        controller = PlaybackController(generator, step_delay=args.step_delay)
        controller.watch_mode = args.watch

        logger.info(f"Animating {args.width}x{args.height} maze from {generator.head}...")
        renderer = Renderer(controller, fps=args.fps, record=args.record)
        if args.record:
            logger.info(f"Recording video to {renderer.recorder.output_file}")

        renderer.init_window()
        renderer.run_loop()

    elif args.command == "generate":
        from maze_sketch.viz.text import render_text

        start = tuple(args.start) if args.start else None
        try:
            generator = RecursiveBacktracker(args.width, args.height, seed=args.seed, start=start)
        except IndexError as e:
            parser.error(str(e))

        logger.info(f"Generating {args.width}x{args.height} maze from {generator.head}...")
        if args.steps is None:
            generator.run_all()
        else:
            for _ in range(args.steps):
                if generator.step() is None:
                    break

        print(render_text(generator))
        status = "Done" if generator.generated else "In progress"
        print(f"{status}. Steps: {generator.step_count}, "
              f"Visited: {len(generator.visited)}/{args.width * args.height}, "
              f"Path: {len(generator.path)}, Passages: {generator.grid.connection_count()}")

if __name__ == "__main__":
    main()
