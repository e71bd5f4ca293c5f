"""Click-to-cycle K-map input: each cell is off, on, or don't care."""

from __future__ import annotations

import enum
from typing import Dict, Iterable, List, Tuple

from .kmap_engine import idx_to_rc, map_dimensions, rc_to_idx
from .logic import validate_disjoint


class CellState(enum.Enum):
    OFF = 0
    ON = 1
    DONT_CARE = 2

    @property
    def symbol(self) -> str:
        return {CellState.OFF: "0", CellState.ON: "1", CellState.DONT_CARE: "X"}[self]

    def next(self) -> "CellState":
        return CellState((self.value + 1) % 3)


class KMapGrid:
    """Cell states of one map, addressed by (row, col)."""

    def __init__(self, nvars: int):
        self.nvars = nvars
        self.nrows, self.ncols = map_dimensions(nvars)
        self._cells: Dict[Tuple[int, int], CellState] = {}

    @classmethod
    def from_minterms(
        cls, nvars: int, minterms: Iterable[int], dontcares: Iterable[int] = ()
    ) -> "KMapGrid":
        minterms, dontcares = list(minterms), list(dontcares)
        validate_disjoint(minterms, dontcares)
        grid = cls(nvars)
        for m in minterms:
            grid._cells[idx_to_rc(nvars, m)] = CellState.ON
        for m in dontcares:
            grid._cells[idx_to_rc(nvars, m)] = CellState.DONT_CARE
        return grid

    def _check(self, r: int, c: int) -> None:
        if not (0 <= r < self.nrows and 0 <= c < self.ncols):
            raise ValueError(f"Cell ({r}, {c}) outside the {self.nrows}x{self.ncols} map.")

    def state_at(self, r: int, c: int) -> CellState:
        self._check(r, c)
        return self._cells.get((r, c), CellState.OFF)

    def cycle(self, r: int, c: int) -> CellState:
        """Advance a cell off -> on -> don't care -> off and return the new state."""
        state = self.state_at(r, c).next()
        if state is CellState.OFF:
            self._cells.pop((r, c), None)
        else:
            self._cells[(r, c)] = state
        return state

    def clear(self) -> None:
        self._cells.clear()

    def extract(self) -> Tuple[List[int], List[int]]:
        """Return sorted (minterms, dontcares)."""
        ones, dcs = [], []
        for (r, c), state in self._cells.items():
            idx = rc_to_idx(self.nvars, r, c)
            (ones if state is CellState.ON else dcs).append(idx)
        return sorted(ones), sorted(dcs)
