"""Tests for the deduction rules."""

import pytest
from sudoku_csp.core.board import SudokuBoard
from sudoku_csp.core.candidates import digit_bit, digits_of
from sudoku_csp.core.propagation import initialize_candidates
from sudoku_csp.core.topology import cell_index
from sudoku_csp.solvers.rules import (
    RuleOutcome,
    RULE_TIERS,
    naked_single,
    hidden_single,
    naked_pair,
    hidden_pair,
    locked_candidates_pointing,
    locked_candidates_claiming,
    x_wing,
    swordfish,
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

ALL_RULES = [rule for tier in RULE_TIERS for rule in tier]


@pytest.fixture
def board():
    """Empty board with full candidate domains."""
    board = SudokuBoard()
    assert initialize_candidates(board)
    return board


def remove(board, row, col, *digits):
    """Strike digits from a domain without propagating."""
    for d in digits:
        board.candidates[cell_index(row, col)] &= ~digit_bit(d)


def has(board, row, col, digit):
    return digit in digits_of(board.candidates[cell_index(row, col)])


def test_rule_tiers():
    assert [r.__name__ for r in ALL_RULES] == [
        "naked_single", "hidden_single", "naked_pair", "hidden_pair",
        "locked_candidates_pointing", "locked_candidates_claiming",
        "x_wing", "swordfish",
    ]


@pytest.mark.parametrize("rule", ALL_RULES, ids=lambda r: r.__name__)
def test_no_progress_on_empty_board(board, rule):
    assert rule(board) is RuleOutcome.NO_PROGRESS


class TestSingles:
    """Naked and hidden singles."""
    
    def test_naked_single_commits_digit(self):
        board = SudokuBoard.from_string("0" + SOLUTION[1:])
        assert initialize_candidates(board)
        assert board.get(0, 0) == 0
        
        assert naked_single(board) is RuleOutcome.PROGRESS
        assert board.get(0, 0) == 5
        assert naked_single(board) is RuleOutcome.NO_PROGRESS
    
    def test_hidden_single(self, board):
        for col in range(8):
            remove(board, 0, col, 3)
        
        assert hidden_single(board) is RuleOutcome.PROGRESS
        assert board.get(0, 8) == 3
        assert board.domain(0, 8) == {3}


class TestPairs:
    """Naked and hidden pairs."""
    
    def test_naked_pair(self, board):
        for col in (0, 1):
            remove(board, 0, col, 3, 4, 5, 6, 7, 8, 9)
        
        assert naked_pair(board) is RuleOutcome.PROGRESS
        for col in range(2, 9):
            assert not has(board, 0, col, 1)
            assert not has(board, 0, col, 2)
        # Only the first matching unit (row 0) is used
        assert has(board, 1, 0, 1)
    
    def test_naked_pair_contradiction(self, board):
        for col in (0, 1, 2):
            remove(board, 0, col, 3, 4, 5, 6, 7, 8, 9)
        
        assert naked_pair(board) is RuleOutcome.CONTRADICTION
    
    def test_hidden_pair(self, board):
        for col in range(2, 9):
            remove(board, 0, col, 1, 2)
        
        assert hidden_pair(board) is RuleOutcome.PROGRESS
        assert board.domain(0, 0) == {1, 2}
        assert board.domain(0, 1) == {1, 2}
        assert hidden_pair(board) is RuleOutcome.NO_PROGRESS


class TestLockedCandidates:
    """Pointing and claiming."""
    
    def test_pointing(self, board):
        for row in (1, 2):
            for col in range(3):
                remove(board, row, col, 5)
        
        assert locked_candidates_pointing(board) is RuleOutcome.PROGRESS
        for col in range(3, 9):
            assert not has(board, 0, col, 5)
        assert has(board, 0, 0, 5)
        assert has(board, 1, 4, 5)
    
    def test_claiming(self, board):
        for col in range(2, 9):
            remove(board, 0, col, 7)
        
        assert locked_candidates_claiming(board) is RuleOutcome.PROGRESS
        for row in (1, 2):
            for col in range(3):
                assert not has(board, row, col, 7)
        assert has(board, 0, 1, 7)
        assert has(board, 1, 5, 7)


class TestFish:
    """X-Wing and Swordfish."""
    
    def test_x_wing(self, board):
        for row in (0, 5):
            for col in range(9):
                if col not in (2, 7):
                    remove(board, row, col, 4)
        
        assert x_wing(board) is RuleOutcome.PROGRESS
        for row in range(9):
            if row in (0, 5):
                assert has(board, row, 2, 4)
                assert has(board, row, 7, 4)
            else:
                assert not has(board, row, 2, 4)
                assert not has(board, row, 7, 4)
        assert has(board, 3, 3, 4)
    
    def test_x_wing_on_columns(self, board):
        for col in (1, 6):
            for row in range(9):
                if row not in (3, 8):
                    remove(board, row, col, 2)
        
        assert x_wing(board) is RuleOutcome.PROGRESS
        for col in range(9):
            if col not in (1, 6):
                assert not has(board, 3, col, 2)
                assert not has(board, 8, col, 2)
    
    def test_swordfish(self, board):
        keep = {1: (0, 4), 4: (4, 8), 7: (0, 8)}
        for row, cols in keep.items():
            for col in range(9):
                if col not in cols:
                    remove(board, row, col, 9)
        
        # No two rows share the same pair of columns
        assert x_wing(board) is RuleOutcome.NO_PROGRESS
        
        assert swordfish(board) is RuleOutcome.PROGRESS
        for row in range(9):
            for col in (0, 4, 8):
                if row in keep:
                    assert has(board, row, col, 9) == (col in keep[row])
                else:
                    assert not has(board, row, col, 9)
        assert has(board, 0, 1, 9)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
