"""Sudoku constraint-satisfaction solver with interchangeable strategies."""

__version__ = "1.0.0"
