"""Validation utilities for Sudoku boards."""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .board import SudokuBoard


def is_valid_placement(board: SudokuBoard, row: int, col: int, value: int) -> bool:
    """
    Check if placing a value at (row, col) is valid.
    
    Args:
        board: The Sudoku board.
        row: Row index.
        col: Column index.
        value: Value to check (1 to 9).
    
    Returns:
        True if no peer of (row, col) already holds ``value``.
    """
    if value < 1 or value > board.size:
        return False
    
    if value in board.get_row(row):
        return False
    
    if value in board.get_col(col):
        return False
    
    if value in board.get_box(row, col):
        return False
    
    return True


def is_correct(board: SudokuBoard) -> bool:
    """
    Check that no row, column or box repeats a digit.
    
    Empty cells are ignored, so a partially filled board can be correct.
    Combine with ``board.is_complete()`` to check for a full solution.
    """
    return board.is_valid()


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.
    
    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.
    
    Returns:
        True if solution is complete, valid and keeps every given.
    """
    givens = puzzle.grid != 0
    if (puzzle.grid[givens] != solution.grid[givens]).any():
        return False
    
    return solution.is_solved()
