"""Depth-first backtracking search with the MRV heuristic."""

from __future__ import annotations
import logging
from typing import Optional, Tuple

from .base_solver import BaseSolver, SolverStats, check_deadline
from ..core.board import SudokuBoard
from ..core.candidates import count, digits_of
from ..core.propagation import assign, initialize_candidates
from ..core.topology import SIZE

log = logging.getLogger(__name__)


def search(
    board: SudokuBoard,
    stats: Optional[SolverStats] = None,
    deadline: Optional[float] = None
) -> bool:
    """
    Fill the remaining empty cells of ``board`` by backtracking.
    
    Searches over the candidate domains when the board has them, otherwise
    over the grid alone. On success the board holds the solution; on
    failure it is left as it was found.
    
    Raises:
        SolverTimeout: once ``time.perf_counter()`` passes ``deadline``.
    """
    if stats is None:
        stats = SolverStats()
    if board.candidates is not None:
        return _search_domains(board, stats, deadline)
    return _search_grid(board, stats, deadline)


def select_unassigned_cell(board: SudokuBoard) -> Optional[Tuple[int, int]]:
    """
    Select the next empty cell using MRV (Minimum Remaining Values).
    
    Picks the empty cell with the fewest candidates, first in scan order
    on ties. Returns None when the board is full.
    """
    best_cell = None
    min_candidates = SIZE + 1
    
    if board.candidates is not None:
        domains = board.candidates
        for cell, value in enumerate(board.grid.reshape(-1).tolist()):
            if value:
                continue
            num_candidates = count(domains[cell])
            if num_candidates < min_candidates:
                min_candidates = num_candidates
                best_cell = divmod(cell, SIZE)
                if num_candidates <= 1:
                    break
        return best_cell
    
    for row, col in board.get_empty_cells():
        num_candidates = len(board.get_candidates(row, col))
        if num_candidates < min_candidates:
            min_candidates = num_candidates
            best_cell = (row, col)
            # Zero fails fast, one cannot be beaten
            if num_candidates <= 1:
                break
    
    return best_cell


def _search_grid(board: SudokuBoard, stats: SolverStats, deadline: Optional[float] = None) -> bool:
    check_deadline(deadline)
    stats.iterations += 1
    
    cell = select_unassigned_cell(board)
    if cell is None:
        return True
    
    row, col = cell
    candidates = board.get_candidates(row, col)
    stats.nodes_explored += 1
    
    if not candidates:
        stats.backtracks += 1
        return False
    
    for value in sorted(candidates):
        board.set(row, col, value)
        if _search_grid(board, stats, deadline):
            return True
        board.clear(row, col)
        stats.backtracks += 1
    
    return False


def _search_domains(board: SudokuBoard, stats: SolverStats, deadline: Optional[float] = None) -> bool:
    check_deadline(deadline)
    stats.iterations += 1
    
    cell = select_unassigned_cell(board)
    if cell is None:
        return True
    
    row, col = cell
    index = row * SIZE + col
    options = digits_of(board.candidates[index])
    stats.nodes_explored += 1
    
    if not options:
        stats.backtracks += 1
        return False
    
    for value in options:
        # Propagation is not reversible, so snapshot the whole state
        snapshot = board.copy()
        if assign(board, index, value) and _search_domains(board, stats, deadline):
            return True
        board.restore(snapshot)
        stats.backtracks += 1
    
    return False


class BacktrackingSolver(BaseSolver):
    """
    Depth-first search solver using recursive backtracking.
    
    Features:
    - Minimum Remaining Values (MRV) heuristic for cell selection
    - Optional constraint propagation: candidate domains are built and
      kept arc-consistent after every tentative assignment
    - Backtracking counter for performance analysis
    """
    
    name = "Backtracking"
    
    def __init__(self, use_propagation: bool = False):
        """
        Initialize the backtracking solver.
        
        Args:
            use_propagation: If True, search over propagated candidate
                             domains instead of the bare grid.
        """
        self.use_propagation = use_propagation
        if use_propagation:
            self.name = "Constraint Propagation"
        super().__init__()
    
    def initialize(self, board: SudokuBoard) -> bool:
        """Build candidate domains, or just check the givens for plain search."""
        if self.use_propagation:
            if not initialize_candidates(board):
                log.info("%s: puzzle givens are contradictory", self.name)
                return False
            return True
        board.candidates = None
        return board.is_valid()
    
    def _solve(self, board: SudokuBoard) -> bool:
        """Solve using DFS with backtracking."""
        if self.use_propagation:
            if board.candidates is None and not self.initialize(board):
                return False
            return _search_domains(board, self.stats, self.deadline)
        
        # Grid writes would leave stale domains behind
        board.candidates = None
        if not board.is_valid():
            return False
        return _search_grid(board, self.stats, self.deadline)


class ConstraintPropagationSolver(BacktrackingSolver):
    """Backtracking over candidate domains kept consistent by propagation."""
    
    name = "Constraint Propagation"
    
    def __init__(self):
        super().__init__(use_propagation=True)
