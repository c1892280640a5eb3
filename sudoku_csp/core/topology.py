"""Fixed 9x9 Sudoku topology: cells, units and peers."""

from __future__ import annotations
from functools import lru_cache
from typing import FrozenSet, Tuple

import numpy as np

SIZE = 9
BOX_SIZE = 3
NUM_CELLS = SIZE * SIZE
NUM_UNITS = 3 * SIZE
DIGITS = tuple(range(1, SIZE + 1))

Unit = Tuple[int, ...]


def cell_index(row: int, col: int) -> int:
    """Flat index of the cell at (row, col)."""
    return row * SIZE + col


def cell_position(cell: int) -> Tuple[int, int]:
    """(row, col) of a flat cell index."""
    return divmod(cell, SIZE)


def box_index(row: int, col: int) -> int:
    """Index (0-8) of the box containing (row, col)."""
    return (row // BOX_SIZE) * BOX_SIZE + (col // BOX_SIZE)


class Topology:
    """
    Cell, unit and peer structure of a 9x9 board.
    
    Cells are flat indices ``row * 9 + col``. The 27 units are ordered
    rows (0-8), columns (9-17), then boxes (18-26); every unit is a tuple
    of 9 cell indices in scan order.
    
    Instances are immutable once built. Use :func:`get_topology` to share
    a single instance.
    """
    
    def __init__(self):
        self.cells: Tuple[int, ...] = tuple(range(NUM_CELLS))
        
        self.rows: Tuple[Unit, ...] = tuple(
            tuple(cell_index(r, c) for c in range(SIZE)) for r in range(SIZE)
        )
        self.cols: Tuple[Unit, ...] = tuple(
            tuple(cell_index(r, c) for r in range(SIZE)) for c in range(SIZE)
        )
        boxes = []
        for box_row in range(0, SIZE, BOX_SIZE):
            for box_col in range(0, SIZE, BOX_SIZE):
                boxes.append(tuple(
                    cell_index(box_row + i, box_col + j)
                    for i in range(BOX_SIZE)
                    for j in range(BOX_SIZE)
                ))
        self.boxes: Tuple[Unit, ...] = tuple(boxes)
        self.units: Tuple[Unit, ...] = self.rows + self.cols + self.boxes
        
        self.row_of = tuple(c // SIZE for c in self.cells)
        self.col_of = tuple(c % SIZE for c in self.cells)
        self.box_of = tuple(box_index(*cell_position(c)) for c in self.cells)
        
        # Unit ids of each cell: (row unit, column unit, box unit)
        self.units_of: Tuple[Tuple[int, int, int], ...] = tuple(
            (self.row_of[c], SIZE + self.col_of[c], 2 * SIZE + self.box_of[c])
            for c in self.cells
        )
        self.cell_units: Tuple[Tuple[Unit, Unit, Unit], ...] = tuple(
            tuple(self.units[u] for u in self.units_of[c]) for c in self.cells
        )
        
        self.row_peers = tuple(
            tuple(p for p in self.rows[self.row_of[c]] if p != c) for c in self.cells
        )
        self.col_peers = tuple(
            tuple(p for p in self.cols[self.col_of[c]] if p != c) for c in self.cells
        )
        self.box_peers = tuple(
            tuple(p for p in self.boxes[self.box_of[c]] if p != c) for c in self.cells
        )
        self.peer_sets: Tuple[FrozenSet[int], ...] = tuple(
            frozenset(self.row_peers[c] + self.col_peers[c] + self.box_peers[c])
            for c in self.cells
        )
        self.peers: Tuple[Tuple[int, ...], ...] = tuple(
            tuple(sorted(s)) for s in self.peer_sets
        )
        
        self.unit_arrays = np.array(self.units, dtype=np.intp)
        self.unit_arrays.setflags(write=False)
    
    def unit_kind(self, unit_id: int) -> str:
        """Return 'row', 'col' or 'box' for a unit id."""
        return ("row", "col", "box")[unit_id // SIZE]
    
    def __repr__(self) -> str:
        return f"Topology(cells={len(self.cells)}, units={len(self.units)})"


@lru_cache(maxsize=None)
def get_topology() -> Topology:
    """Return the shared 9x9 topology."""
    return Topology()
