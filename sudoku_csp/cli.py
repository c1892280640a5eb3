"""Command-line interface for the Sudoku solving strategies."""

import argparse
import logging
import sys

from .benchmark import Benchmark, Visualizer, build_solvers, load_solver_config
from .core.board import SudokuBoard, PuzzleParseError
from .solvers import SOLVERS


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku solver: propagation, deduction rules, backtracking and annealing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle with the rule-based strategy
  sudoku-csp solve --strategy rules --puzzle "53..7....6..195..."
  
  # Run every strategy over a puzzle file
  sudoku-csp benchmark --puzzles data/easy.txt --output results/
        """
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)"
    )
    
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    strategy_choices = list(SOLVERS) + ["all"]
    
    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--strategy", "-s",
        choices=strategy_choices,
        default="rules",
        help="Solving strategy to use (default: rules)"
    )
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    solve_parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON file with per-strategy parameters"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )
    
    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run strategies over a puzzle file")
    bench_parser.add_argument(
        "--puzzles", "-p", type=str, required=True,
        help="Text file with one puzzle per line"
    )
    bench_parser.add_argument(
        "--strategy", "-s",
        choices=strategy_choices,
        default="all",
        help="Strategy to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON file with per-strategy parameters"
    )
    bench_parser.add_argument(
        "--timeout", "-t", type=float, default=60.0,
        help="Seconds allowed per puzzle per strategy (default: 60)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )
    
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    
    if args.command is None:
        parser.print_help()
        sys.exit(1)
    
    try:
        config = load_solver_config(args.config) if args.config else {}
    except (OSError, ValueError) as e:
        print(f"Error loading config: {e}")
        sys.exit(1)
    
    keys = None if args.strategy == "all" else [args.strategy]
    solvers = build_solvers(keys, config)
    
    if args.command == "solve":
        cmd_solve(args, solvers)
    elif args.command == "benchmark":
        cmd_benchmark(args, solvers)


def cmd_solve(args, solvers):
    """Handle the solve command."""
    try:
        board = SudokuBoard.from_string(args.puzzle)
    except PuzzleParseError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)
    
    print("Input puzzle:")
    print(board)
    print()
    
    all_solved = True
    for name, solver in solvers.items():
        print(f"Solving with {name}...")
        solution, stats = solver.run(board)
        
        if stats.solved:
            print(f"✓ Solved in {stats.time_seconds:.4f}s")
            if args.verbose:
                print(f"  Iterations: {stats.iterations:,}")
                print(f"  Backtracks: {stats.backtracks:,}")
                print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
                for key, value in stats.extra.items():
                    print(f"  {key}: {value}")
            print(solution)
        else:
            all_solved = False
            print("✗ Failed to solve")
            if args.verbose:
                print(f"  Time: {stats.time_seconds:.4f}s")
                print(f"  Iterations: {stats.iterations:,}")
                if "error" in stats.extra:
                    print(f"  Reason: {stats.extra['error']}")
        print()
    
    if not all_solved:
        sys.exit(2)


def cmd_benchmark(args, solvers):
    """Handle the benchmark command."""
    try:
        puzzles = Benchmark.load_puzzles(args.puzzles)
    except (OSError, PuzzleParseError) as e:
        print(f"Error loading puzzles: {e}")
        sys.exit(1)
    
    print("=" * 60)
    print("SUDOKU STRATEGY BENCHMARK")
    print("=" * 60)
    print(f"Puzzles: {len(puzzles)}")
    print(f"Strategies: {', '.join(solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)
    
    benchmark = Benchmark(puzzles, solvers=solvers, timeout_seconds=args.timeout)
    results = benchmark.run()
    
    summary = benchmark.get_summary()
    
    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Accuracy: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.2f} MB")
    
    csv_path = benchmark.save_results(args.output)
    print(f"\nResults written to {csv_path}")
    
    if not args.no_charts and results:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        for chart in charts:
            print(f"  - {chart}")
    
    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
