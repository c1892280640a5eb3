"""Unit tests for the board topology."""

import pytest
from sudoku_csp.core.topology import (
    Topology, get_topology, cell_index, cell_position, NUM_CELLS, SIZE
)


@pytest.fixture(scope="module")
def topology():
    return get_topology()


class TestUnits:
    """Tests for the 27 units."""
    
    def test_unit_count(self, topology):
        assert len(topology.units) == 27
        assert len(topology.rows) == len(topology.cols) == len(topology.boxes) == 9
    
    def test_units_have_nine_distinct_cells(self, topology):
        for unit in topology.units:
            assert len(unit) == 9
            assert len(set(unit)) == 9
    
    def test_every_cell_in_three_units(self, topology):
        for cell in topology.cells:
            containing = [u for u in topology.units if cell in u]
            assert len(containing) == 3
            assert [topology.units[u] for u in topology.units_of[cell]] == containing
    
    def test_box_layout(self, topology):
        """Box 4 is the centre box."""
        assert topology.boxes[4] == (30, 31, 32, 39, 40, 41, 48, 49, 50)
        assert topology.box_of[cell_index(4, 4)] == 4
        assert topology.unit_kind(22) == "box"
    
    def test_unit_arrays_match_units(self, topology):
        assert topology.unit_arrays.shape == (27, 9)
        assert [tuple(row) for row in topology.unit_arrays.tolist()] == list(topology.units)


class TestPeers:
    """Tests for peer sets."""
    
    def test_twenty_peers(self, topology):
        for cell in topology.cells:
            assert len(topology.peers[cell]) == 20
            assert cell not in topology.peer_sets[cell]
    
    def test_peers_symmetric(self, topology):
        for a in topology.cells:
            for b in topology.peers[a]:
                assert a in topology.peer_sets[b]
    
    def test_partitioned_peers(self, topology):
        cell = cell_index(0, 0)
        assert len(topology.row_peers[cell]) == 8
        assert len(topology.col_peers[cell]) == 8
        assert len(topology.box_peers[cell]) == 8
        union = set(topology.row_peers[cell]) | set(topology.col_peers[cell]) | set(topology.box_peers[cell])
        assert union == topology.peer_sets[cell]
        # (0, 1) is both a row peer and a box peer
        assert cell_index(0, 1) in topology.row_peers[cell]
        assert cell_index(0, 1) in topology.box_peers[cell]


def test_cell_index_round_trip():
    for cell in range(NUM_CELLS):
        row, col = cell_position(cell)
        assert 0 <= row < SIZE and 0 <= col < SIZE
        assert cell_index(row, col) == cell


def test_topology_shared():
    assert get_topology() is get_topology()
    assert isinstance(get_topology(), Topology)
