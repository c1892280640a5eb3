"""Solvers module for Sudoku puzzles."""

from typing import Dict, Type

from .base_solver import BaseSolver, SolverStats, SolverTimeout
from .backtracking_solver import BacktrackingSolver, ConstraintPropagationSolver, search
from .rule_based_solver import RuleBasedSolver
from .rules import RuleOutcome
from .annealing_solver import AnnealingSolver, PERFECT_SCORE, score

SOLVERS: Dict[str, Type[BaseSolver]] = {
    "backtracking": BacktrackingSolver,
    "propagation": ConstraintPropagationSolver,
    "rules": RuleBasedSolver,
    "annealing": AnnealingSolver,
}


def create_solver(key: str, **params) -> BaseSolver:
    """Instantiate the strategy registered under ``key``."""
    try:
        solver_cls = SOLVERS[key]
    except KeyError:
        raise ValueError(
            f"Unknown strategy {key!r}; choose from {', '.join(SOLVERS)}"
        ) from None
    return solver_cls(**params)


__all__ = [
    "BaseSolver",
    "SolverStats",
    "SolverTimeout",
    "BacktrackingSolver",
    "ConstraintPropagationSolver",
    "RuleBasedSolver",
    "RuleOutcome",
    "AnnealingSolver",
    "PERFECT_SCORE",
    "score",
    "search",
    "SOLVERS",
    "create_solver",
]
