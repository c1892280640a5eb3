"""Sudoku board state: the digit grid plus optional candidate domains."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional, Set

from .candidates import digits_of
from .topology import SIZE, BOX_SIZE, NUM_CELLS, cell_index

PLACEHOLDERS = "0."


class PuzzleParseError(ValueError):
    """Raised when a puzzle string is malformed."""


class SudokuBoard:
    """
    Represents a 9x9 Sudoku board.
    
    ``grid`` holds assigned digits (0 means empty). ``candidates`` is
    ``None`` until a candidate-based strategy populates it with one
    9-bit domain mask per cell (see :mod:`sudoku_csp.core.candidates`).
    Whenever a cell is assigned, its domain is exactly that digit.
    """
    
    size = SIZE
    box_size = BOX_SIZE
    
    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.
        
        Args:
            grid: Optional initial 9x9 grid. If None, creates empty board.
        """
        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > SIZE:
                raise ValueError(f"Grid values must be 0-{SIZE}")
            self.grid = grid.astype(np.int32)  # astype copies
        else:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)
        self.candidates: Optional[List[int]] = None
    
    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board, domains included."""
        new_board = SudokuBoard()
        new_board.grid = self.grid.copy()
        if self.candidates is not None:
            new_board.candidates = list(self.candidates)
        return new_board
    
    def restore(self, snapshot: SudokuBoard) -> None:
        """Overwrite this board's state with a snapshot taken by :meth:`copy`."""
        self.grid[:, :] = snapshot.grid
        if snapshot.candidates is None:
            self.candidates = None
        else:
            self.candidates = list(snapshot.candidates)
    
    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])
    
    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > SIZE:
            raise ValueError(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value
    
    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.grid[row, col] = 0
    
    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.grid[row, col] == 0
    
    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]
    
    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]
    
    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = (row // BOX_SIZE) * BOX_SIZE
        box_col = (col // BOX_SIZE) * BOX_SIZE
        return self.grid[box_row:box_row + BOX_SIZE,
                        box_col:box_col + BOX_SIZE].flatten()
    
    def get_box_index(self, row: int, col: int) -> int:
        """Get the box index (0 to 8) for a cell."""
        return (row // BOX_SIZE) * BOX_SIZE + (col // BOX_SIZE)
    
    def get_candidates(self, row: int, col: int) -> Set[int]:
        """
        Get all digits not yet used by the peers of an empty cell.
        
        Derived from the grid alone; ignores candidate domains.
        Returns empty set if cell is not empty.
        """
        if not self.is_empty(row, col):
            return set()
        
        used = set(self.get_row(row).tolist())
        used.update(self.get_col(col).tolist())
        used.update(self.get_box(row, col).tolist())
        
        return set(range(1, SIZE + 1)) - used
    
    def domain(self, row: int, col: int) -> Set[int]:
        """
        Candidate domain of a cell.
        
        Uses the propagated domains when they exist, otherwise falls
        back to :meth:`get_candidates` (or the assigned digit).
        """
        if self.candidates is not None:
            return set(digits_of(self.candidates[cell_index(row, col)]))
        if not self.is_empty(row, col):
            return {self.get(row, col)}
        return self.get_candidates(row, col)
    
    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions."""
        rows, cols = np.nonzero(self.grid == 0)
        return list(zip(rows.tolist(), cols.tolist()))
    
    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == 0))
    
    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != 0))
    
    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0
    
    def is_valid(self) -> bool:
        """
        Check if the current board state is valid.
        Does not check if solution is complete, only if no conflicts exist.
        """
        for i in range(SIZE):
            for values in (self.get_row(i), self.get_col(i)):
                non_zero = values[values != 0]
                if len(non_zero) != len(set(non_zero.tolist())):
                    return False
        
        for box_row in range(0, SIZE, BOX_SIZE):
            for box_col in range(0, SIZE, BOX_SIZE):
                box = self.get_box(box_row, box_col)
                non_zero = box[box != 0]
                if len(non_zero) != len(set(non_zero.tolist())):
                    return False
        
        return True
    
    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return self.is_complete() and self.is_valid()
    
    def to_string(self, placeholder: str = "0") -> str:
        """
        Convert board to an 81-character string, row by row.
        
        Empty cells are written as ``placeholder``.
        """
        return "".join(
            str(v) if v else placeholder for v in self.grid.reshape(-1).tolist()
        )
    
    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from an 81-character puzzle string.
        
        Args:
            s: Digits '1'-'9' for givens, '0' or '.' for empty cells,
               read left to right, top to bottom.
        
        Raises:
            PuzzleParseError: on wrong length or an invalid character.
        """
        if len(s) != NUM_CELLS:
            raise PuzzleParseError(
                f"Puzzle must be {NUM_CELLS} characters long, got {len(s)}"
            )
        
        values = []
        for idx, c in enumerate(s):
            if c in PLACEHOLDERS:
                values.append(0)
            elif "1" <= c <= "9":
                values.append(int(c))
            else:
                row, col = divmod(idx, SIZE)
                raise PuzzleParseError(
                    f"Invalid character {c!r} at position {idx} (row {row}, col {col}); "
                    f"expected 1-9 or one of {PLACEHOLDERS!r}"
                )
        
        return cls(np.array(values, dtype=np.int32).reshape(SIZE, SIZE))
    
    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE
        
        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)
            
            row_str = '|'
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += f' {val}' if val else ' .'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'
            
            lines.append(row_str)
        
        lines.append(horizontal_sep)
        return '\n'.join(lines)
    
    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()})"
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid)
