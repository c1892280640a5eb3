"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple
import logging
import time
import tracemalloc

from ..core.board import SudokuBoard
from ..core.validator import is_correct

log = logging.getLogger(__name__)


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0
    
    # Search metrics
    backtracks: int = 0
    nodes_explored: int = 0
    
    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class SolverTimeout(Exception):
    """Raised inside a solve when its deadline has passed."""


def check_deadline(deadline: Optional[float]) -> None:
    """Raise :class:`SolverTimeout` once ``time.perf_counter()`` passes ``deadline``."""
    if deadline is not None and time.perf_counter() >= deadline:
        raise SolverTimeout()


class BaseSolver(ABC):
    """
    Abstract base class for Sudoku solving strategies.
    
    Every strategy exposes the same contract:
    
    - ``name``: label used in reports.
    - ``initialize(board)``: prepare strategy-specific state on the board.
    - ``solve(board)``: mutate the board in place, return True when solved.
    - ``is_correct(board)``: check the board against the Sudoku rules.
    
    ``run`` wraps all of this for batch use: it works on a copy, records
    time and peak memory, and can stop the search at a deadline.
    """
    
    name: str = "BaseSolver"
    
    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)
        self.deadline: Optional[float] = None
    
    def initialize(self, board: SudokuBoard) -> bool:
        """
        Prepare the board for solving.
        
        Returns:
            False if the givens already violate the Sudoku rules.
        """
        return board.is_valid()
    
    def solve(self, board: SudokuBoard) -> bool:
        """
        Solve a Sudoku puzzle in place.
        
        Args:
            board: The puzzle to solve. Modified in place.
        
        Returns:
            True if the board now holds a complete, valid solution. False
            if the search failed or ran past ``self.deadline``.
        """
        self.stats = SolverStats(algorithm=self.name)
        start_time = time.perf_counter()
        
        try:
            found = self._solve(board)
        except SolverTimeout:
            log.info("%s stopped at its deadline", self.name)
            self.stats.extra["error"] = "Timeout"
            found = False
        
        self.stats.time_seconds = time.perf_counter() - start_time
        self.stats.solved = found and board.is_solved()
        log.debug("%s finished: solved=%s in %.4fs", self.name,
                  self.stats.solved, self.stats.time_seconds)
        return self.stats.solved
    
    @abstractmethod
    def _solve(self, board: SudokuBoard) -> bool:
        """
        Internal solve method to be implemented by subclasses.
        
        Long-running loops call :meth:`_check_deadline`.
        
        Args:
            board: The board to solve in place.
        
        Returns:
            True if a solution was found.
        """
        pass
    
    def _check_deadline(self) -> None:
        check_deadline(self.deadline)
    
    def is_correct(self, board: SudokuBoard) -> bool:
        """Check that the board has no repeated digit in any unit."""
        return is_correct(board)
    
    def run(
        self,
        board: SudokuBoard,
        timeout: Optional[float] = None
    ) -> Tuple[Optional[SudokuBoard], SolverStats]:
        """
        Initialize and solve a copy of ``board``, tracking time and memory.
        
        Args:
            board: The puzzle to solve. Left untouched.
            timeout: Seconds allowed for the run. When they run out the
                     search stops and ``stats.extra["error"]`` is "Timeout".
        
        Returns:
            Tuple of (solution or None, stats).
        """
        work_board = board.copy()
        
        tracemalloc.start()
        start_time = time.perf_counter()
        self.deadline = None if timeout is None else start_time + timeout
        
        try:
            if self.initialize(work_board):
                self.solve(work_board)
            else:
                self.stats = SolverStats(algorithm=self.name)
                self.stats.extra["error"] = "contradiction during initialization"
        except Exception as e:
            log.exception("%s raised while solving", self.name)
            self.stats = SolverStats(algorithm=self.name)
            self.stats.extra["error"] = str(e)
        finally:
            self.deadline = None
        
        self.stats.time_seconds = time.perf_counter() - start_time
        
        current, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
        self.stats.memory_bytes = peak
        
        solution = work_board if self.stats.solved else None
        return solution, self.stats
