"""Core module: topology, board state, candidate domains and propagation."""

from .board import SudokuBoard, PuzzleParseError
from .topology import Topology, get_topology
from .propagation import initialize_candidates, assign, eliminate
from .validator import is_valid_placement, is_correct, validate_solution

__all__ = [
    "SudokuBoard",
    "PuzzleParseError",
    "Topology",
    "get_topology",
    "initialize_candidates",
    "assign",
    "eliminate",
    "is_valid_placement",
    "is_correct",
    "validate_solution",
]
