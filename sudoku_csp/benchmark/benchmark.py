"""Batch runner for comparing Sudoku solving strategies on a puzzle corpus."""

from __future__ import annotations
import csv
import json
import logging
import os
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from tqdm import tqdm

from ..core.board import SudokuBoard, PuzzleParseError
from ..solvers import BaseSolver, SOLVERS, create_solver

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single strategy run on a single puzzle."""
    puzzle_id: int
    puzzle: str
    algorithm: str
    solved: bool
    correct: bool
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    extra: Dict[str, Any] = field(default_factory=dict)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "puzzle": self.puzzle,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "correct": self.correct,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            **self.extra
        }


def load_solver_config(path: str) -> Dict[str, Dict[str, Any]]:
    """
    Load per-strategy constructor arguments from a JSON file.
    
    The file holds an object keyed by strategy name, e.g.
    ``{"annealing": {"cooling_rate": 0.99995, "restarts": 3}}``.
    
    Raises:
        ValueError: if the file is not an object of objects or names an
            unknown strategy.
    """
    with open(path, "r") as f:
        config = json.load(f)
    
    if not isinstance(config, dict):
        raise ValueError(f"{path}: expected a JSON object of strategy settings")
    for key, params in config.items():
        if key not in SOLVERS:
            raise ValueError(
                f"{path}: unknown strategy {key!r}; choose from {', '.join(SOLVERS)}"
            )
        if not isinstance(params, dict):
            raise ValueError(f"{path}: settings for {key!r} must be a JSON object")
    return config


def build_solvers(
    keys: Optional[List[str]] = None,
    config: Optional[Dict[str, Dict[str, Any]]] = None
) -> Dict[str, BaseSolver]:
    """Instantiate the named strategies (default: all), applying ``config``."""
    config = config or {}
    solvers = {}
    for key in keys or list(SOLVERS):
        solver = create_solver(key, **config.get(key, {}))
        solvers[solver.name] = solver
    return solvers


class Benchmark:
    """
    Benchmark framework for comparing Sudoku solving strategies.
    
    Runs every strategy on every puzzle and records, per run, the puzzle,
    the strategy name, the elapsed time and whether the result is correct.
    """
    
    def __init__(
        self,
        puzzles: List[str],
        solvers: Optional[Dict[str, BaseSolver]] = None,
        timeout_seconds: float = 60.0
    ):
        """
        Initialize the benchmark.
        
        Args:
            puzzles: Puzzle strings (81 characters each).
            solvers: Dict of solver_name -> solver_instance (default: all).
            timeout_seconds: Maximum time per puzzle per solver.
        """
        self.puzzles = list(puzzles)
        self.solvers = solvers if solvers is not None else build_solvers()
        self.timeout_seconds = timeout_seconds
        self.results: List[BenchmarkResult] = []
    
    @staticmethod
    def load_puzzles(path: str) -> List[str]:
        """
        Read puzzles from a text file, one per line.
        
        Blank lines and lines starting with '#' are skipped.
        
        Raises:
            PuzzleParseError: naming the line of the first malformed puzzle.
        """
        puzzles = []
        with open(path, "r") as f:
            for line_no, line in enumerate(f, 1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                try:
                    SudokuBoard.from_string(line)
                except PuzzleParseError as e:
                    raise PuzzleParseError(f"{path}:{line_no}: {e}") from e
                puzzles.append(line)
        log.info("Loaded %d puzzles from %s", len(puzzles), path)
        return puzzles
    
    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.
        
        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []
        
        total_tests = len(self.puzzles) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)
        
        for puzzle_id, puzzle in enumerate(self.puzzles):
            board = SudokuBoard.from_string(puzzle)
            for solver_name, solver in self.solvers.items():
                result = self._run_single(board, puzzle_id, puzzle, solver_name, solver)
                self.results.append(result)
                pbar.update(1)
        
        pbar.close()
        return self.results
    
    def _run_single(
        self,
        board: SudokuBoard,
        puzzle_id: int,
        puzzle: str,
        solver_name: str,
        solver: BaseSolver
    ) -> BenchmarkResult:
        """Run a single solver on a single puzzle within the timeout."""
        solution, stats = solver.run(board, timeout=self.timeout_seconds)
        error = stats.extra.get("error")
        if error == "Timeout":
            log.warning("%s timed out on puzzle %d", solver_name, puzzle_id)
        elif error:
            log.warning("%s failed on puzzle %d: %s", solver_name, puzzle_id, error)
        
        correct = solution is not None and solution.is_complete() and solver.is_correct(solution)
        return BenchmarkResult(
            puzzle_id=puzzle_id,
            puzzle=puzzle,
            algorithm=solver_name,
            solved=stats.solved,
            correct=correct,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            extra=dict(stats.extra)
        )
    
    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics grouped by strategy."""
        summary = {
            "total_puzzles": len(self.puzzles),
            "solvers_tested": list(self.solvers.keys()),
            "results_by_algorithm": {}
        }
        
        for solver_name in self.solvers:
            solver_results = [r for r in self.results if r.algorithm == solver_name]
            if solver_results:
                correct = [r for r in solver_results if r.correct]
                times = [r.time_seconds for r in solver_results]
                memory = [r.memory_bytes for r in solver_results]
                
                summary["results_by_algorithm"][solver_name] = {
                    "accuracy": len(correct) / len(solver_results) * 100,
                    "avg_time_seconds": sum(times) / len(times),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                    "total_solved": len(correct),
                    "total_tested": len(solver_results)
                }
        
        return summary
    
    def save_results(self, output_dir: str) -> str:
        """
        Write ``results.csv`` and ``benchmark_summary.json`` to ``output_dir``.
        
        Returns:
            Path of the CSV file.
        """
        os.makedirs(output_dir, exist_ok=True)
        
        results_file = os.path.join(output_dir, "results.csv")
        with open(results_file, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["Puzzle", "Model", "Time", "Correct", "Iterations", "Backtracks"])
            for r in self.results:
                writer.writerow([
                    r.puzzle, r.algorithm, f"{r.time_seconds:.6f}",
                    str(r.correct).lower(), r.iterations, r.backtracks
                ])
        
        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)
        
        log.info("Results saved to %s", output_dir)
        return results_file
