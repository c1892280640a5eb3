"""Logical deduction rules over candidate domains.

Each rule scans the board's domains for its pattern, acts on the first
match that removes at least one candidate (or commits a digit), and
returns a :class:`RuleOutcome`. Rules never guess.
"""

from __future__ import annotations
from enum import Enum
from itertools import combinations
from typing import Callable, Iterable, Sequence, Tuple

from ..core.board import SudokuBoard
from ..core.candidates import count, digit_bit, digits_of
from ..core.propagation import assign, eliminate
from ..core.topology import DIGITS, SIZE, Unit, get_topology


class RuleOutcome(Enum):
    """Result of applying a single deduction rule."""
    NO_PROGRESS = "no_progress"
    PROGRESS = "progress"
    CONTRADICTION = "contradiction"


Rule = Callable[[SudokuBoard], RuleOutcome]


def _outcome(ok: bool) -> RuleOutcome:
    return RuleOutcome.PROGRESS if ok else RuleOutcome.CONTRADICTION


def _eliminate_from(board: SudokuBoard, cells: Iterable[int], digits: Sequence[int]) -> RuleOutcome:
    """Eliminate ``digits`` from every cell in ``cells`` that still has them."""
    removed = False
    for cell in cells:
        for digit in digits:
            if board.candidates[cell] & digit_bit(digit):
                if not eliminate(board, cell, digit):
                    return RuleOutcome.CONTRADICTION
                removed = True
    return RuleOutcome.PROGRESS if removed else RuleOutcome.NO_PROGRESS


def _places(board: SudokuBoard, unit: Unit, digit: int) -> Tuple[int, ...]:
    bit = digit_bit(digit)
    return tuple(c for c in unit if board.candidates[c] & bit)


# Basic rules

def naked_single(board: SudokuBoard) -> RuleOutcome:
    """Commit an empty cell whose domain holds a single digit."""
    domains = board.candidates
    for cell, value in enumerate(board.grid.reshape(-1).tolist()):
        if not value and count(domains[cell]) == 1:
            return _outcome(assign(board, cell, digits_of(domains[cell])[0]))
    return RuleOutcome.NO_PROGRESS


def hidden_single(board: SudokuBoard) -> RuleOutcome:
    """Assign a digit that has only one possible cell in some unit."""
    flat = board.grid.reshape(-1)
    for unit in get_topology().units:
        for digit in DIGITS:
            places = _places(board, unit, digit)
            if not places:
                return RuleOutcome.CONTRADICTION
            if len(places) == 1 and flat[places[0]] == 0:
                return _outcome(assign(board, places[0], digit))
    return RuleOutcome.NO_PROGRESS


def naked_pair(board: SudokuBoard) -> RuleOutcome:
    """Two cells of a unit sharing the same two candidates claim both digits."""
    domains = board.candidates
    for unit in get_topology().units:
        pairs = [c for c in unit if count(domains[c]) == 2]
        for first, second in combinations(pairs, 2):
            if domains[first] != domains[second]:
                continue
            digits = digits_of(domains[first])
            others = [c for c in unit if c != first and c != second]
            outcome = _eliminate_from(board, others, digits)
            if outcome is not RuleOutcome.NO_PROGRESS:
                return outcome
    return RuleOutcome.NO_PROGRESS


def hidden_pair(board: SudokuBoard) -> RuleOutcome:
    """Two digits confined to the same two cells of a unit clear those cells."""
    domains = board.candidates
    for unit in get_topology().units:
        positions = {d: _places(board, unit, d) for d in DIGITS}
        paired = [d for d in DIGITS if len(positions[d]) == 2]
        for first, second in combinations(paired, 2):
            if positions[first] != positions[second]:
                continue
            keep = digit_bit(first) | digit_bit(second)
            removed = False
            for cell in positions[first]:
                extra = digits_of(domains[cell] & ~keep)
                outcome = _eliminate_from(board, (cell,), extra)
                if outcome is RuleOutcome.CONTRADICTION:
                    return outcome
                removed = removed or outcome is RuleOutcome.PROGRESS
            if removed:
                return RuleOutcome.PROGRESS
    return RuleOutcome.NO_PROGRESS


# Intermediate rules

def locked_candidates_pointing(board: SudokuBoard) -> RuleOutcome:
    """
    Locked candidates type 1.
    
    When a digit's candidates inside a box all lie on one row (or column),
    the digit is removed from the rest of that row (or column).
    """
    topology = get_topology()
    for box in topology.boxes:
        in_box = set(box)
        for digit in DIGITS:
            places = _places(board, box, digit)
            if not places:
                continue
            lines = (
                ({topology.row_of[c] for c in places}, topology.rows),
                ({topology.col_of[c] for c in places}, topology.cols),
            )
            for line_ids, line_units in lines:
                if len(line_ids) != 1:
                    continue
                line = line_units[next(iter(line_ids))]
                outside = [c for c in line if c not in in_box]
                outcome = _eliminate_from(board, outside, (digit,))
                if outcome is not RuleOutcome.NO_PROGRESS:
                    return outcome
    return RuleOutcome.NO_PROGRESS


def locked_candidates_claiming(board: SudokuBoard) -> RuleOutcome:
    """
    Locked candidates type 2.
    
    When a digit's candidates inside a row (or column) all lie in one box,
    the digit is removed from the rest of that box.
    """
    topology = get_topology()
    for line in topology.rows + topology.cols:
        in_line = set(line)
        for digit in DIGITS:
            places = _places(board, line, digit)
            box_ids = {topology.box_of[c] for c in places}
            if len(box_ids) != 1:
                continue
            box = topology.boxes[next(iter(box_ids))]
            outside = [c for c in box if c not in in_line]
            outcome = _eliminate_from(board, outside, (digit,))
            if outcome is not RuleOutcome.NO_PROGRESS:
                return outcome
    return RuleOutcome.NO_PROGRESS


# Complex rules

def _fish(board: SudokuBoard, order: int) -> RuleOutcome:
    """
    Basic fish of the given order (2 = X-Wing, 3 = Swordfish).
    
    ``order`` parallel lines whose candidates for a digit all fall on the
    same ``order`` cross lines remove the digit from those cross lines
    everywhere else. Rows and columns are both tried as base lines.
    """
    topology = get_topology()
    orientations = (
        (topology.rows, topology.cols),
        (topology.cols, topology.rows),
    )
    for digit in DIGITS:
        bit = digit_bit(digit)
        for base_lines, cross_lines in orientations:
            # Position p within base line i lies on cross line p
            covers = {}
            for i, line in enumerate(base_lines):
                cover = frozenset(p for p, c in enumerate(line) if board.candidates[c] & bit)
                if 2 <= len(cover) <= order:
                    covers[i] = cover
            for combo in combinations(sorted(covers), order):
                cover = frozenset().union(*(covers[i] for i in combo))
                if len(cover) != order:
                    continue
                # Position q within cross line p lies on base line q
                targets = [
                    cross_lines[p][q]
                    for p in sorted(cover)
                    for q in range(SIZE)
                    if q not in combo
                ]
                outcome = _eliminate_from(board, targets, (digit,))
                if outcome is not RuleOutcome.NO_PROGRESS:
                    return outcome
    return RuleOutcome.NO_PROGRESS


def x_wing(board: SudokuBoard) -> RuleOutcome:
    """Two lines with a digit confined to the same two cross lines."""
    return _fish(board, 2)


def swordfish(board: SudokuBoard) -> RuleOutcome:
    """Three lines with a digit confined to the same three cross lines."""
    return _fish(board, 3)


BASIC_RULES: Tuple[Rule, ...] = (naked_single, hidden_single, naked_pair, hidden_pair)
INTERMEDIATE_RULES: Tuple[Rule, ...] = (locked_candidates_pointing, locked_candidates_claiming)
COMPLEX_RULES: Tuple[Rule, ...] = (x_wing, swordfish)
RULE_TIERS: Tuple[Tuple[Rule, ...], ...] = (BASIC_RULES, INTERMEDIATE_RULES, COMPLEX_RULES)
