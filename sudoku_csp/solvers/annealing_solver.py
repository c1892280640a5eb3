"""Simulated Annealing solver for Sudoku (score-based local search)."""

from __future__ import annotations
import logging
import math
import random
from typing import Iterable, List, Optional

import numpy as np

from .base_solver import BaseSolver
from ..core.board import SudokuBoard
from ..core.topology import DIGITS, NUM_UNITS, SIZE, get_topology

log = logging.getLogger(__name__)

# Every one of the 27 units holding all nine digits
PERFECT_SCORE = -NUM_UNITS * SIZE


def _unique_count(values: np.ndarray) -> int:
    """Number of distinct non-zero digits among ``values``."""
    return len(set(values.tolist()) - {0})


def _units_score(flat: np.ndarray, unit_ids: Iterable[int]) -> int:
    unit_arrays = get_topology().unit_arrays
    return sum(_unique_count(flat[unit_arrays[u]]) for u in unit_ids)


def score(board: SudokuBoard) -> int:
    """
    Score a board: minus the number of distinct digits per unit, summed
    over all rows, columns and boxes.
    
    A solved board scores exactly :data:`PERFECT_SCORE` (-243); any
    repeated digit in a unit makes the score strictly higher.
    """
    return -_units_score(board.grid.reshape(-1), range(NUM_UNITS))


class AnnealingSolver(BaseSolver):
    """
    Simulated Annealing solver for Sudoku.
    
    Works on board values only, without candidate domains:
    
    - Initialize: fill every blank with a shuffled multiset of the digits
      still missing from the board, so each digit appears nine times.
    - Move: swap two non-given cells that share a unit, which keeps the
      per-digit counts intact.
    - Accept: moves that do not worsen the score always; worse moves with
      probability ``exp(-delta / temperature)`` (Metropolis criterion).
    - Cool: multiply the temperature by ``cooling_rate`` after every move.
    
    The search stops when the score reaches :data:`PERFECT_SCORE` or the
    iteration budget of every restart is spent. Restarts reshuffle the
    free cells and reset the temperature.
    """
    
    name = "Simulated Annealing"
    
    def __init__(
        self,
        initial_temp: float = 1.0,
        cooling_rate: float = 0.9999,
        min_temp: float = 0.0001,
        max_iterations: int = 200000,
        restarts: int = 5,
        seed: Optional[int] = None
    ):
        """
        Initialize the annealing solver.
        
        Args:
            initial_temp: Starting temperature.
            cooling_rate: Temperature multiplier each iteration (e.g., 0.9999).
            min_temp: Temperature below which a restart is triggered.
            max_iterations: Maximum iterations per restart.
            restarts: Number of attempts before giving up.
            seed: Seed for the solver's random generator.
        """
        if not 0.0 < cooling_rate < 1.0:
            raise ValueError(f"cooling_rate must be in (0, 1), got {cooling_rate}")
        if restarts < 1:
            raise ValueError(f"restarts must be at least 1, got {restarts}")
        super().__init__()
        self.initial_temp = initial_temp
        self.cooling_rate = cooling_rate
        self.min_temp = min_temp
        self.max_iterations = max_iterations
        self.restarts = restarts
        self.seed = seed
        self._rng = random.Random(seed)
        self._free_cells: Optional[List[int]] = None
        self._prepared: Optional[SudokuBoard] = None
        self._free_by_unit: List[List[int]] = []
        self._movable_units: List[int] = []
    
    def initialize(self, board: SudokuBoard) -> bool:
        """
        Fill every blank cell with one of the board's missing digits.
        
        Returns:
            False if the givens conflict or some digit is given more than
            nine times.
        """
        self._prepared = None
        if not board.is_valid():
            return False
        
        flat = board.grid.reshape(-1)
        counts = np.bincount(flat, minlength=SIZE + 1)
        missing = [d for d in DIGITS for _ in range(SIZE - int(counts[d]))]
        
        free_cells = np.flatnonzero(flat == 0).tolist()
        if len(missing) != len(free_cells):
            return False
        
        self._rng.shuffle(missing)
        flat[free_cells] = missing
        
        free = set(free_cells)
        self._free_cells = free_cells
        self._prepared = board
        self._free_by_unit = [
            [c for c in unit if c in free] for unit in get_topology().units
        ]
        self._movable_units = [
            u for u, cells in enumerate(self._free_by_unit) if len(cells) >= 2
        ]
        board.candidates = None
        return True
    
    def _solve(self, board: SudokuBoard) -> bool:
        """Solve using simulated annealing."""
        self.stats.extra["restarts_used"] = 0
        self.stats.extra["accepted_moves"] = 0
        
        # Free cells belong to the board that was initialized
        if self._prepared is not board or board.count_empty() > 0:
            if not self.initialize(board):
                return False
        
        try:
            return self._anneal(board)
        finally:
            self.stats.extra["final_score"] = score(board)
            self._free_cells = None
            self._prepared = None
    
    def _anneal(self, board: SudokuBoard) -> bool:
        flat = board.grid.reshape(-1)
        topology = get_topology()
        
        for restart in range(self.restarts):
            if restart > 0:
                values = flat[self._free_cells].tolist()
                self._rng.shuffle(values)
                flat[self._free_cells] = values
                log.debug("%s: restart %d", self.name, restart)
            
            self.stats.extra["restarts_used"] = restart + 1
            temperature = self.initial_temp
            current = score(board)
            
            if current == PERFECT_SCORE:
                return True
            if not self._movable_units:
                # Nothing can move, the initial fill is final
                return False
            
            for _ in range(self.max_iterations):
                if temperature < self.min_temp:
                    break
                self._check_deadline()
                self.stats.iterations += 1
                
                unit = self._rng.choice(self._movable_units)
                a, b = self._rng.sample(self._free_by_unit[unit], 2)
                affected = set(topology.units_of[a]) | set(topology.units_of[b])
                
                before = _units_score(flat, affected)
                snapshot = flat.copy()
                flat[a], flat[b] = snapshot[b], snapshot[a]
                after = _units_score(flat, affected)
                
                # Change in score; negative means fewer conflicts
                delta = before - after
                if delta <= 0 or self._rng.random() < math.exp(-delta / temperature):
                    current += delta
                    self.stats.extra["accepted_moves"] += 1
                else:
                    flat[:] = snapshot
                
                temperature *= self.cooling_rate
                
                if current == PERFECT_SCORE:
                    return True
        
        log.debug("%s: no solution after %d restarts, score %d",
                  self.name, self.restarts, current)
        return False
