"""Unit tests for Sudoku board and validation."""

import pytest
import numpy as np
from sudoku_csp.core.board import SudokuBoard, PuzzleParseError
from sudoku_csp.core.validator import is_valid_placement, is_correct, validate_solution

PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


class TestSudokuBoard:
    """Tests for SudokuBoard class."""
    
    def test_create_empty_board(self):
        """Test creating an empty 9x9 board."""
        board = SudokuBoard()
        assert board.size == 9
        assert board.box_size == 3
        assert board.count_empty() == 81
        assert board.count_filled() == 0
        assert board.candidates is None
    
    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            SudokuBoard(np.zeros((4, 4), dtype=np.int32))
    
    def test_set_and_get(self):
        """Test setting and getting values."""
        board = SudokuBoard()
        board.set(0, 0, 5)
        assert board.get(0, 0) == 5
        assert not board.is_empty(0, 0)
        
        board.clear(0, 0)
        assert board.is_empty(0, 0)
        
        with pytest.raises(ValueError):
            board.set(0, 0, 10)
    
    def test_get_candidates(self):
        """Test getting valid candidates for a cell."""
        board = SudokuBoard()
        board.set(0, 0, 5)
        board.set(0, 1, 3)
        
        candidates = board.get_candidates(0, 2)
        assert 5 not in candidates
        assert 3 not in candidates
        assert len(candidates) == 7
        assert board.get_candidates(0, 0) == set()
    
    def test_domain_without_candidates(self):
        board = SudokuBoard.from_string(PUZZLE)
        assert board.domain(0, 0) == {5}
        assert board.domain(0, 2) == board.get_candidates(0, 2)
    
    def test_is_valid(self):
        """Test board validation."""
        board = SudokuBoard()
        assert board.is_valid()
        
        board.set(0, 0, 5)
        board.set(0, 1, 5)
        assert not board.is_valid()
    
    def test_box_conflict_detected(self):
        board = SudokuBoard()
        board.set(0, 0, 7)
        board.set(2, 2, 7)
        assert not board.is_valid()
    
    def test_is_solved(self):
        assert SudokuBoard.from_string(SOLUTION).is_solved()
        assert not SudokuBoard.from_string(PUZZLE).is_solved()
    
    def test_copy_is_deep(self):
        """Test board copy."""
        board = SudokuBoard()
        board.set(4, 4, 7)
        board.candidates = [0x1FF] * 81
        copy = board.copy()
        
        assert copy.get(4, 4) == 7
        
        copy.set(4, 4, 8)
        copy.candidates[0] = 1
        assert board.get(4, 4) == 7
        assert board.candidates[0] == 0x1FF
    
    def test_restore(self):
        board = SudokuBoard.from_string(PUZZLE)
        board.candidates = [0x1FF] * 81
        snapshot = board.copy()
        
        board.set(0, 2, 4)
        board.candidates[2] = 8
        board.restore(snapshot)
        
        assert board == snapshot
        assert board.candidates == snapshot.candidates
        assert board.candidates is not snapshot.candidates


class TestParsing:
    """Tests for reading and writing puzzle strings."""
    
    def test_from_string(self):
        puzzle_str = "0" * 80 + "9"
        board = SudokuBoard.from_string(puzzle_str)
        assert board.get(8, 8) == 9
        assert board.count_filled() == 1
    
    def test_dot_placeholder(self):
        board = SudokuBoard.from_string(PUZZLE.replace("0", "."))
        assert board == SudokuBoard.from_string(PUZZLE)
    
    def test_round_trip(self):
        assert SudokuBoard.from_string(PUZZLE).to_string() == PUZZLE
        dotted = PUZZLE.replace("0", ".")
        assert SudokuBoard.from_string(dotted).to_string(placeholder=".") == dotted
    
    def test_wrong_length(self):
        with pytest.raises(PuzzleParseError, match="81 characters"):
            SudokuBoard.from_string(PUZZLE[:-1])
    
    def test_invalid_character(self):
        bad = PUZZLE[:10] + "x" + PUZZLE[11:]
        with pytest.raises(PuzzleParseError, match="position 10"):
            SudokuBoard.from_string(bad)
    
    def test_parse_error_is_value_error(self):
        assert issubclass(PuzzleParseError, ValueError)
    
    def test_pretty_print(self):
        text = str(SudokuBoard.from_string(PUZZLE))
        assert text.splitlines()[1] == "| 5 3 . | . 7 . | . . . |"


class TestValidator:
    """Tests for validation utilities."""
    
    def test_is_valid_placement(self):
        """Test placement validation."""
        board = SudokuBoard()
        board.set(0, 0, 5)
        
        assert not is_valid_placement(board, 0, 5, 5)
        assert not is_valid_placement(board, 5, 0, 5)
        assert not is_valid_placement(board, 1, 1, 5)
        assert is_valid_placement(board, 0, 5, 7)
        assert not is_valid_placement(board, 0, 5, 0)
    
    def test_is_correct_allows_blanks(self):
        assert is_correct(SudokuBoard.from_string(PUZZLE))
        assert not is_correct(SudokuBoard.from_string("55" + "0" * 79))
    
    def test_validate_solution(self):
        puzzle = SudokuBoard.from_string(PUZZLE)
        solution = SudokuBoard.from_string(SOLUTION)
        assert validate_solution(puzzle, solution)
        
        other = SudokuBoard.from_string("1" + "0" * 80)
        assert not validate_solution(other, solution)
        assert not validate_solution(puzzle, puzzle)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
