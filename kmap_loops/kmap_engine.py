"""Karnaugh map indexing and group classification helpers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Sequence, Set, Tuple

from .errors import UnsupportedVariableCount

GRID_VARS: Tuple[int, ...] = (2, 3, 4)

# Gray-code ordering for two-bit combinations
GRAY4: Sequence[Tuple[int, int]] = ((0, 0), (0, 1), (1, 1), (1, 0))

# Gray order of the integer codes, keyed by bit width
_GRAY_CODES: Dict[int, Tuple[int, ...]] = {
    1: (0, 1),
    2: tuple((hi << 1) | lo for hi, lo in GRAY4),
}

# (row bits, column bits); the row bits are the high-order variables
_AXIS_BITS: Dict[int, Tuple[int, int]] = {2: (1, 1), 3: (1, 2), 4: (2, 2)}


def map_dimensions(nvars: int) -> Tuple[int, int]:
    """Return (rows, cols) for K-map based on variable count."""
    try:
        row_bits, col_bits = _AXIS_BITS[nvars]
    except KeyError:
        raise UnsupportedVariableCount(nvars, GRID_VARS) from None
    return 1 << row_bits, 1 << col_bits


def axis_codes(nvars: int) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    """Return the Gray-ordered variable codes labelling rows and columns."""
    map_dimensions(nvars)
    row_bits, col_bits = _AXIS_BITS[nvars]
    return _GRAY_CODES[row_bits], _GRAY_CODES[col_bits]


def idx_to_rc(nvars: int, idx: int) -> Tuple[int, int]:
    """Translate a minterm index to (row, col) coordinates.

    n=2: row is A, column is B.
    n=3: row is A, column is the Gray position of BC.
    n=4: row is the Gray position of AB, column the Gray position of CD.
    """
    nrows, ncols = map_dimensions(nvars)
    if not 0 <= idx < nrows * ncols:
        raise ValueError(f"Minterm {idx} out of range for {nvars} variables.")
    row_codes, col_codes = axis_codes(nvars)
    col_bits = _AXIS_BITS[nvars][1]
    row_code = idx >> col_bits
    col_code = idx & ((1 << col_bits) - 1)
    return row_codes.index(row_code), col_codes.index(col_code)


def rc_to_idx(nvars: int, r: int, c: int) -> int:
    """Inverse of :func:`idx_to_rc`."""
    nrows, ncols = map_dimensions(nvars)
    if not (0 <= r < nrows and 0 <= c < ncols):
        raise ValueError(f"Cell ({r}, {c}) outside the {nrows}x{ncols} map.")
    row_codes, col_codes = axis_codes(nvars)
    col_bits = _AXIS_BITS[nvars][1]
    return (row_codes[r] << col_bits) | col_codes[c]


def map_minterms_to_cells(nvars: int, minterms: Iterable[int]) -> Set[Tuple[int, int]]:
    """Convert minterm indices to a set of (row, col) cells."""
    return {idx_to_rc(nvars, m) for m in minterms}


def grid_neighbors(nvars: int, r: int, c: int) -> Set[Tuple[int, int]]:
    """Return the cells adjacent to (r, c), wrapping around the map edges."""
    nrows, ncols = map_dimensions(nvars)
    around = {
        ((r - 1) % nrows, c),
        ((r + 1) % nrows, c),
        (r, (c - 1) % ncols),
        (r, (c + 1) % ncols),
    }
    around.discard((r, c))
    return around


def rect_cells(
    r0: int, rows: int, c0: int, cols: int, nrows: int, ncols: int
) -> Set[Tuple[int, int]]:
    """Return the set of cells covered by a rectangle (with wrap-around)."""
    cells: Set[Tuple[int, int]] = set()
    for dr in range(rows):
        for dc in range(cols):
            r = (r0 + dr) % nrows
            c = (c0 + dc) % ncols
            cells.add((r, c))
    return cells


class RegionKind(enum.Enum):
    RECTANGLE = "rectangle"
    WRAPPED_ROWS = "wrapped_rows"
    WRAPPED_COLS = "wrapped_cols"
    WRAPPED_BOTH = "wrapped_both"
    INVALID = "invalid"


@dataclass(frozen=True)
class GroupRegion:
    """Classified placement of a group on the K-map.

    ``r0``/``c0`` are the first row/column of the run when walking the map
    cyclically, so a run over rows 3 and 0 of a 4-row map has ``r0 == 3``.
    """

    kind: RegionKind
    nrows: int
    ncols: int
    r0: int = 0
    rows: int = 0
    c0: int = 0
    cols: int = 0
    cells: FrozenSet[Tuple[int, int]] = frozenset()
    minterms: FrozenSet[int] = frozenset()
    reason: str = ""

    @property
    def is_valid(self) -> bool:
        return self.kind is not RegionKind.INVALID

    @property
    def wraps_rows(self) -> bool:
        return self.kind in (RegionKind.WRAPPED_ROWS, RegionKind.WRAPPED_BOTH)

    @property
    def wraps_cols(self) -> bool:
        return self.kind in (RegionKind.WRAPPED_COLS, RegionKind.WRAPPED_BOTH)

    @property
    def row_indices(self) -> Tuple[int, ...]:
        return tuple((self.r0 + k) % self.nrows for k in range(self.rows))

    @property
    def col_indices(self) -> Tuple[int, ...]:
        return tuple((self.c0 + k) % self.ncols for k in range(self.cols))


def _contiguous_span(coords: Set[int], size: int) -> Tuple[int, int]:
    """Return (start, length) of a cyclic run covering exactly ``coords``."""
    length = len(coords)
    for start in range(size):
        seq = {(start + offset) % size for offset in range(length)}
        if seq == coords:
            return start, length
    raise ValueError("Cells do not form a contiguous span on the map.")


def _invalid(
    nrows: int, ncols: int, unique: Set[int], reason: str, cells=frozenset()
) -> GroupRegion:
    return GroupRegion(
        kind=RegionKind.INVALID,
        nrows=nrows,
        ncols=ncols,
        cells=frozenset(cells),
        minterms=frozenset(unique),
        reason=reason,
    )


def classify_group(nvars: int, minterms: Iterable[int]) -> GroupRegion:
    """Classify the cells of ``minterms`` as a (possibly wrapped) rectangle.

    Shape problems never raise: they come back as an ``INVALID`` region whose
    ``reason`` explains the rejection. Only an unsupported ``nvars`` raises.
    """
    nrows, ncols = map_dimensions(nvars)
    unique = set(minterms)
    if not unique:
        return _invalid(nrows, ncols, unique, "group is empty")
    stray = sorted(m for m in unique if not 0 <= m < nrows * ncols)
    if stray:
        return _invalid(nrows, ncols, unique, f"minterms out of range: {stray}")

    cells = map_minterms_to_cells(nvars, unique)
    count = len(cells)
    if count & (count - 1):
        return _invalid(nrows, ncols, unique, f"size {count} is not a power of two", cells)

    try:
        r0, rows = _contiguous_span({r for r, _ in cells}, nrows)
    except ValueError:
        return _invalid(nrows, ncols, unique, "rows are not contiguous", cells)
    try:
        c0, cols = _contiguous_span({c for _, c in cells}, ncols)
    except ValueError:
        return _invalid(nrows, ncols, unique, "columns are not contiguous", cells)

    if cells != rect_cells(r0, rows, c0, cols, nrows, ncols):
        return _invalid(
            nrows, ncols, unique, "cells do not fill their bounding rectangle", cells
        )

    # a full span always starts at 0, so it never counts as a wrap
    wraps_rows = r0 + rows > nrows
    wraps_cols = c0 + cols > ncols
    if wraps_rows and wraps_cols:
        kind = RegionKind.WRAPPED_BOTH
    elif wraps_rows:
        kind = RegionKind.WRAPPED_ROWS
    elif wraps_cols:
        kind = RegionKind.WRAPPED_COLS
    else:
        kind = RegionKind.RECTANGLE
    return GroupRegion(
        kind=kind,
        nrows=nrows,
        ncols=ncols,
        r0=r0,
        rows=rows,
        c0=c0,
        cols=cols,
        cells=frozenset(cells),
        minterms=frozenset(unique),
    )


__all__ = [
    "GRAY4",
    "GRID_VARS",
    "GroupRegion",
    "RegionKind",
    "axis_codes",
    "classify_group",
    "grid_neighbors",
    "idx_to_rc",
    "map_dimensions",
    "map_minterms_to_cells",
    "rc_to_idx",
    "rect_cells",
]
