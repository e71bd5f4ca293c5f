import pytest

from kmap_loops.errors import UnsupportedVariableCount
from kmap_loops.grid_state import CellState, KMapGrid


def test_cycle_goes_off_on_dont_care_off():
    grid = KMapGrid(3)
    assert grid.state_at(0, 3) is CellState.OFF
    assert grid.cycle(0, 3) is CellState.ON
    assert grid.cycle(0, 3) is CellState.DONT_CARE
    assert grid.cycle(0, 3) is CellState.OFF
    assert [s.symbol for s in CellState] == ["0", "1", "X"]


def test_extract_uses_gray_layout():
    grid = KMapGrid(3)
    grid.cycle(0, 3)
    grid.cycle(1, 2)
    grid.cycle(1, 2)
    assert grid.extract() == ([2], [7])


def test_from_minterms_round_trip():
    grid = KMapGrid.from_minterms(4, [0, 2, 8, 10], [5])
    assert grid.state_at(3, 3) is CellState.ON
    assert grid.state_at(1, 1) is CellState.DONT_CARE
    assert grid.extract() == ([0, 2, 8, 10], [5])
    grid.clear()
    assert grid.extract() == ([], [])


def test_bad_cells_and_sizes():
    grid = KMapGrid(2)
    with pytest.raises(ValueError):
        grid.cycle(2, 0)
    with pytest.raises(UnsupportedVariableCount):
        KMapGrid(5)


def test_from_minterms_rejects_overlap():
    with pytest.raises(ValueError, match="both minterms and don't cares"):
        KMapGrid.from_minterms(3, [1, 2], [2, 5])
