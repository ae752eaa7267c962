"""Command-line player for Game of Life boards."""

import argparse
import sys
import time
from typing import Optional, Tuple

from ..core.board import Board
from ..core.cell import BorderOpt
from ..core.game import GameOfLife
from ..core.patterns import PatternLibrary

DEFAULT_DELAY_MS = 1000
DEFAULT_RANDOM_SIZE = 20
MAX_DISPLAY_SIZE = 60

SOURCE_KINDS = ("pattern", "random")


def parse_board_source(source: str) -> Tuple[str, str]:
    """Split a board source into (kind, value).

    Sources look like ``pattern:Glider`` or ``random:0.25``; anything else is
    taken to be a board file path.

    Raises:
        ValueError: If a pattern name is empty or a random rate is not in [0, 1]
    """
    kind, sep, value = source.partition(":")
    if not sep or kind not in SOURCE_KINDS:
        return "file", source

    if kind == "pattern" and not value:
        raise ValueError("pattern source needs a name, e.g. 'pattern:Glider'")

    if kind == "random":
        try:
            rate = float(value)
        except ValueError:
            raise ValueError(f"Invalid random rate in source: '{value}'")
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"Random rate must be between 0.0 and 1.0, got {rate}")

    return kind, value


class CLIGameOfLife:
    """Builds boards from command-line sources and plays them."""

    def __init__(self):
        self.pattern_library = PatternLibrary()

    def load_board(
        self,
        source: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        border: Optional[BorderOpt] = None,
        seed: Optional[int] = None,
        margin: int = 2,
    ) -> Board:
        """Build the starting board for a source.

        Args:
            source: Board file path, ``pattern:NAME`` or ``random:RATE``
            width: Board width for pattern and random sources
            height: Board height for pattern and random sources
            border: Border to use; files default to their own header
            seed: Random seed for random sources
            margin: Dead cells around a pattern when no size is given

        Returns:
            The starting board

        Raises:
            FileNotFoundError: If a board file is missing
            ValueError: If the source is malformed or names an unknown pattern
        """
        kind, value = parse_board_source(source)

        if kind == "file":
            board = Board.from_file(value)
            if border is not None:
                board.border = border
            return board

        border = border or BorderOpt.EMPTY

        if kind == "random":
            board = Board(width or DEFAULT_RANDOM_SIZE, height or DEFAULT_RANDOM_SIZE, border)
            board.randomize(float(value), seed)
            return board

        pattern = self.pattern_library.get_pattern(value)
        if pattern is None:
            raise ValueError(f"Unknown pattern '{value}'; use --list-patterns to see the names")

        if width is None and height is None:
            return pattern.to_board(border, margin)

        pattern_width, pattern_height = pattern.get_size()
        width = width or pattern_width + 2 * margin
        height = height or pattern_height + 2 * margin
        board = Board(width, height, border)
        # Centered; whatever does not fit is cut off
        pattern.normalize().apply_to_board(board, (width - pattern_width) // 2, (height - pattern_height) // 2)
        return board

    def play(self, board: Board, cycles: int, delay_ms: int = DEFAULT_DELAY_MS, source: str = "") -> Board:
        """Print the board and each of the next `cycles` generations.

        The pause happens between frames only, so zero cycles prints a single
        frame and returns at once.
        """
        if parse_board_source(source)[0] == "file":
            print(f"Path: {source}")
        else:
            print(f"Source: {source}")
        print(f"Number of cycles: {cycles}")
        print(f"Delay in ms: {delay_ms}")
        print(f"Board from {source}:\n{board}")

        for cycle in range(cycles + 1):
            if cycle:
                time.sleep(delay_ms / 1000)
                board.advance()
            print(f"Cycle: {cycle}/{cycles}\n{board}")

        return board

    def settle(self, board: Board, max_generations: int, verbose: bool = False) -> Tuple[int, str, dict]:
        """Run a board until it dies out, repeats or hits `max_generations`.

        Returns:
            Tuple of (generation, reason, statistics)
        """
        game = GameOfLife(board)
        initial_population = board.population

        if verbose:
            print(f"Settling {board.width}x{board.height} board (border: {board.border}, population: {initial_population})")
            print(render_board(board))

        started = time.perf_counter()
        generation, reason = game.run_until_stable(max_generations)
        elapsed = time.perf_counter() - started

        stats = game.get_statistics()
        stats["initial_population"] = initial_population
        stats["duration_seconds"] = elapsed
        stats["generations_per_second"] = generation / elapsed if elapsed > 0 else 0.0

        if verbose:
            print(f"\nGeneration {generation}:")
            print(render_board(board))

        return generation, reason, stats

    def list_patterns(self) -> None:
        """Print the pattern library grouped by category."""
        print("Available patterns (use as pattern:NAME):")
        for category, names in self.pattern_library.get_patterns_by_category().items():
            print(f"\n{category}:")
            for name in names:
                pattern = self.pattern_library.get_pattern(name)
                width, height = pattern.get_size()
                line = f"  {name}: {width}x{height}, {len(pattern.cells)} cells"
                if pattern.description:
                    line += f" - {pattern.description}"
                print(line)


def render_board(board: Board, max_size: int = MAX_DISPLAY_SIZE) -> str:
    """The board as text, or a one-line note when it is too big for a terminal."""
    if board.width > max_size or board.height > max_size:
        return f"Board too large to display ({board.width}x{board.height})"
    return str(board)


def describe_outcome(reason: str, stats: dict) -> str:
    """One-line explanation of why a settle run stopped."""
    if reason == "cycle":
        if stats.get("cycle_length") == 1:
            return f"Still life from generation {stats.get('cycle_start_generation', 0)}"
        return (
            f"Period {stats.get('cycle_length', 0)} cycle "
            f"from generation {stats.get('cycle_start_generation', 0)}"
        )
    if reason == "extinction":
        return "Extinction - all cells died"
    if reason == "max_generations":
        return f"Still changing after {stats.get('generation', 0)} generations"
    return f"Unknown reason: {reason}"


def print_summary(generation: int, reason: str, stats: dict, verbose: bool = False) -> None:
    """Print what a settle run ended with."""
    print(f"\nStopped at generation {generation}: {describe_outcome(reason, stats)}")
    print(f"Population: {stats['initial_population']} -> {stats['population']}")

    if not verbose:
        return

    width, height = stats["board_size"]
    print(f"  Board: {width}x{height}, border {stats['border']}")
    print(f"  Density: {stats['population_density']:.2%}")
    print(f"  Change rate: {stats['population_change_rate']:+.2f} cells/generation")
    if stats["bounding_box"]:
        min_x, min_y, max_x, max_y = stats["bounding_box"]
        print(f"  Live area: ({min_x}, {min_y}) to ({max_x}, {max_y})")
    if "duration_seconds" in stats:
        print(f"  Took {stats['duration_seconds']:.3f}s ({stats['generations_per_second']:.0f} generations/second)")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Play Conway's Game of Life boards in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Board sources:
  PATH            a board file: a border line (solid, empty or loop)
                  followed by rows of '#' (alive) and '_' (dead)
  pattern:NAME    a named pattern (see --list-patterns)
  random:RATE     a random board with RATE of its cells alive

Examples:
  # Print 20 generations of a board file, half a second apart
  lifeboard-cli boards/glider.txt 20 500

  # Play a glider on a looping 12x12 board
  lifeboard-cli pattern:Glider 48 100 -W 12 -H 12 --border loop

  # Run a random board until it settles and keep the result
  lifeboard-cli random:0.3 --until-stable --seed 7 --save settled.txt
        """,
    )

    parser.add_argument("source", nargs="?", help="Board file, pattern:NAME or random:RATE")
    parser.add_argument("cycles", nargs="?", type=int, help="Number of generations to print")
    parser.add_argument(
        "delay",
        nargs="?",
        type=int,
        default=DEFAULT_DELAY_MS,
        help=f"Delay between generations in ms (default: {DEFAULT_DELAY_MS})",
    )

    parser.add_argument("-W", "--width", type=int, help="Board width for pattern and random sources")
    parser.add_argument("-H", "--height", type=int, help="Board height for pattern and random sources")
    parser.add_argument(
        "-b",
        "--border",
        choices=[str(opt) for opt in BorderOpt],
        help="Border behavior (default: the file's own, else empty)",
    )
    parser.add_argument("--margin", type=int, default=2, help="Dead cells around a pattern (default: 2)")
    parser.add_argument("-s", "--seed", type=int, help="Random seed for random sources")

    parser.add_argument(
        "-u",
        "--until-stable",
        action="store_true",
        help="Run until the board dies out or repeats instead of printing each generation",
    )
    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=10000,
        help="Generation limit for --until-stable (default: 10000)",
    )

    parser.add_argument("--save", help="Write the final board to this file")
    parser.add_argument("--list-patterns", action="store_true", help="List the named patterns and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print extra detail")

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Print every problem with the parsed arguments.

    Returns:
        True if arguments are valid
    """
    if args.list_patterns:
        return True

    errors = []

    if args.source is None:
        errors.append("A board source is required (file, pattern:NAME or random:RATE)")
    else:
        try:
            parse_board_source(args.source)
        except ValueError as e:
            errors.append(str(e))

    if args.cycles is None:
        if not args.until_stable:
            errors.append("Please supply the number of cycles you'd like to simulate, or --until-stable")
    elif args.cycles < 0:
        errors.append("Number of cycles must be non-negative")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    for name in ("width", "height"):
        value = getattr(args, name)
        if value is not None and value <= 0:
            errors.append(f"{name.capitalize()} must be positive")

    if args.margin < 0:
        errors.append("Margin must be non-negative")

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # --help exits cleanly; usage errors share the invalid-argument status
        return 0 if e.code in (0, None) else 1

    if not validate_args(args):
        return 1

    try:
        cli = CLIGameOfLife()

        if args.list_patterns:
            cli.list_patterns()
            return 0

        board = cli.load_board(
            args.source,
            width=args.width,
            height=args.height,
            border=BorderOpt(args.border) if args.border else None,
            seed=args.seed,
            margin=args.margin,
        )

        if args.until_stable:
            generation, reason, stats = cli.settle(board, args.max_generations, args.verbose)
            print_summary(generation, reason, stats, args.verbose)
        else:
            cli.play(board, args.cycles, args.delay, args.source)

        if args.save:
            board.save(args.save)
            print(f"Saved final board to {args.save}")

        return 0

    except FileNotFoundError as e:
        print(f"Error: No board file at {e.filename}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
