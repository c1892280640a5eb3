"""Benchmark module for comparing Sudoku solving strategies."""

from .benchmark import Benchmark, BenchmarkResult, build_solvers, load_solver_config
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkResult", "build_solvers", "load_solver_config", "Visualizer"]
