"""Command-line interface for the propagation solver."""

import argparse
import logging
import sys

from .core.grid import Grid
from .core.validator import is_valid
from .solvers import PropagationSolver
from .trace import FileTraceSink, LoggingTraceSink, NullTraceSink

log = logging.getLogger(__name__)


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku solver based on candidate propagation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle given as an 81-character string
  python -m sudokuprop.cli solve --puzzle "530070000600195000..."

  # Solve a puzzle file of 81 whitespace-separated integers, tracing every step
  python -m sudokuprop.cli solve --file puzzle.txt --trace solver.log

  # Compare solver configurations on a file of puzzles
  python -m sudokuprop.cli benchmark --puzzles puzzles.txt --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Shared puzzle input options
    input_parser = argparse.ArgumentParser(add_help=False)
    source = input_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--puzzle", "-p", type=str,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    source.add_argument(
        "--file", "-f", type=str,
        help="File with 81 whitespace-separated integers (0 for empty), '-' for stdin"
    )
    input_parser.add_argument(
        "--column-major", action="store_true",
        help="Read --file values column by column instead of row by row"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", parents=[input_parser], help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--no-bruteforce", action="store_true",
        help="Disable hypothesis testing when propagation stalls"
    )
    solve_parser.add_argument(
        "--mirror-rows", action="store_true",
        help="Apply the locked-candidate rule to box rows as well as columns"
    )
    solve_parser.add_argument(
        "--trace", "-t", type=str, default=None,
        help="Write step-by-step solver events to this file"
    )
    solve_parser.add_argument(
        "--plain", action="store_true",
        help="Print grids without box borders"
    )
    solve_parser.add_argument(
        "--heatmap", type=str, default=None,
        help="Save a chart of the remaining candidates to this PNG file"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics and debug logging"
    )

    # Validate command
    subparsers.add_parser("validate", parents=[input_parser], help="Check a grid for conflicts")

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run solver configurations over a puzzle file")
    bench_parser.add_argument(
        "--puzzles", "-n", type=str, required=True,
        help="File with one 81-character puzzle per line"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--timeout", type=float, default=60.0,
        help="Seconds to wait per puzzle and solver before recording a timeout "
             "(default: 60). Runs still in progress are not interrupted."
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "solve":
        cmd_solve(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def read_grid(args) -> Grid:
    """Build the input grid from --puzzle or --file."""
    if args.puzzle is not None:
        return Grid.from_string(args.puzzle.strip())

    if args.file == "-":
        text = sys.stdin.read()
    else:
        with open(args.file, "r") as f:
            text = f.read()
    return Grid.from_text(text, order="columns" if args.column_major else "rows")


def _load_or_exit(args) -> Grid:
    try:
        return read_grid(args)
    except (OSError, ValueError) as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)


def cmd_solve(args):
    """Handle the solve command."""
    board = _load_or_exit(args)
    show = (lambda grid: grid.render()) if args.plain else str

    if args.trace:
        trace = FileTraceSink(args.trace)
    elif args.verbose:
        trace = LoggingTraceSink()
    else:
        trace = NullTraceSink()

    solver = PropagationSolver(
        use_bruteforce=not args.no_bruteforce,
        mirror_rows=args.mirror_rows,
        trace=trace,
    )
    try:
        solution, stats = solver.solve(board)
    finally:
        if isinstance(trace, FileTraceSink):
            trace.close()

    print("Input puzzle:")
    print(show(board))
    print()
    print("Result:")
    print(show(solution))
    print()
    print(f"Valid: {is_valid(solution)}")

    if stats.solved:
        print(f"✓ Solved in {stats.time_seconds:.4f}s")
    else:
        print(f"✗ Stopped with {solution.count_empty()} empty cells")
    if args.verbose:
        print(f"  Passes: {stats.iterations:,}")
        print(f"  Moves: {stats.extra['moves']:,}")
        print(f"  Candidates cleaned: {stats.extra['eliminations']:,}")
        print(f"  Hypotheses tested: {stats.nodes_explored:,}")
        print(f"  Hypotheses disproved: {stats.backtracks:,}")
        print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")

    if args.heatmap:
        from .benchmark.visualizer import plot_candidate_heatmap
        path = plot_candidate_heatmap(solver.candidates, args.heatmap, solution)
        print(f"Candidate heatmap saved to {path}")


def cmd_validate(args):
    """Handle the validate command."""
    board = _load_or_exit(args)
    valid = is_valid(board)

    print(board)
    print(f"Valid: {valid}")
    print(f"Complete: {board.is_complete()}")
    sys.exit(0 if valid else 1)


def cmd_benchmark(args):
    """Handle the benchmark command."""
    from .benchmark import Benchmark, load_puzzles

    try:
        puzzles = load_puzzles(args.puzzles)
    except (OSError, ValueError) as e:
        print(f"Error loading puzzles: {e}")
        sys.exit(1)

    benchmark = Benchmark(puzzles, timeout_seconds=args.timeout)

    print("=" * 60)
    print("SUDOKU SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Puzzles: {len(puzzles)}")
    print(f"Solvers: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Accuracy: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Cells Filled: {stats['avg_cells_filled']:.1f}")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.2f} MB")

    benchmark.save_results(args.output)

    if not args.no_charts:
        from .benchmark.visualizer import Visualizer
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        charts.append(visualizer.generate_summary_table())
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
