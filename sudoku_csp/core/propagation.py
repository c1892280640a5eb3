"""Constraint propagation over candidate domains (assign / eliminate).

Both primitives enforce two rules until nothing changes:

1. A cell reduced to a single candidate removes that digit from its peers.
2. A digit left with a single place in a unit is assigned there.

Propagation runs over a FIFO work-list of ``(cell, digit)`` eliminations
instead of recursing. A ``False`` result means a contradiction was found;
domains are then left partially pruned and the caller is expected to
restore a snapshot taken with :meth:`SudokuBoard.copy`.
"""

from __future__ import annotations
import collections
import logging
from typing import Iterable, Tuple

from .board import SudokuBoard
from .candidates import ALL_CANDIDATES, count, digit_bit, digits_of
from .topology import NUM_CELLS, SIZE, get_topology

log = logging.getLogger(__name__)


def initialize_candidates(board: SudokuBoard) -> bool:
    """
    Populate ``board.candidates`` from the grid.
    
    Every cell starts with all nine digits, then each given is assigned
    and propagated.
    
    Returns:
        False if the givens contradict each other.
    """
    board.candidates = [ALL_CANDIDATES] * NUM_CELLS
    for cell, value in enumerate(board.grid.reshape(-1).tolist()):
        if value and not assign(board, cell, value):
            log.debug("Contradiction while assigning given %d at cell %d", value, cell)
            return False
    return True


def assign(board: SudokuBoard, cell: int, digit: int) -> bool:
    """
    Reduce the domain of ``cell`` to ``{digit}`` and commit it to the grid.
    
    Returns:
        False if ``digit`` is not a candidate or propagation fails.
    """
    domain = board.candidates[cell]
    bit = digit_bit(digit)
    if not domain & bit:
        return False
    if not _propagate(board, ((cell, d) for d in digits_of(domain & ~bit))):
        return False
    board.grid[cell // SIZE, cell % SIZE] = digit
    return True


def eliminate(board: SudokuBoard, cell: int, digit: int) -> bool:
    """
    Remove ``digit`` from the domain of ``cell`` and propagate.
    
    Removing a digit that is already absent is a no-op.
    
    Returns:
        False if any domain becomes empty or a unit loses every place
        for some digit.
    """
    return _propagate(board, ((cell, digit),))


def _propagate(board: SudokuBoard, tasks: Iterable[Tuple[int, int]]) -> bool:
    topology = get_topology()
    domains = board.candidates
    queue = collections.deque(tasks)
    processed = set()
    
    while queue:
        task = queue.popleft()
        if task in processed:
            continue
        processed.add(task)
        
        cell, digit = task
        bit = digit_bit(digit)
        if not domains[cell] & bit:
            continue
        domains[cell] &= ~bit
        remaining = domains[cell]
        
        if not remaining:
            return False
        
        if count(remaining) == 1:
            # Sole candidate left: no peer may keep it
            for peer in topology.peers[cell]:
                if domains[peer] & remaining:
                    queue.append((peer, digits_of(remaining)[0]))
        
        for unit in topology.cell_units[cell]:
            places = [c for c in unit if domains[c] & bit]
            if not places:
                return False
            if len(places) == 1:
                place = places[0]
                queue.extend((place, d) for d in digits_of(domains[place] & ~bit))
    
    return True
