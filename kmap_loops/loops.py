"""Turn classified K-map groups into drawable loop outlines.

Coordinates are in whatever space the cell boxes are given in, with ``y``
growing downwards (screen convention, and the inverted axis of the plotted
map). Nothing here knows how a shape is painted: each descriptor carries its
box and can describe its outline as ``M``/``L``/``Q``/``Z`` path commands.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple, Union

from .errors import InvalidGroupShape
from .kmap_engine import GroupRegion, RegionKind, map_dimensions

Point = Tuple[float, float]
PathCommand = Tuple  # ("M", p) | ("L", p) | ("Q", ctrl, p) | ("Z",)


class Side(enum.Enum):
    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3


class Corner(enum.Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"


# clockwise walk: side k runs from corner k to corner k + 1
_DIRECTIONS: Sequence[Point] = ((1, 0), (0, 1), (-1, 0), (0, -1))

# first of the two outer sides of each corner, walking clockwise
_CORNER_FIRST_SIDE: Dict[Corner, int] = {
    Corner.TOP_LEFT: Side.LEFT.value,
    Corner.TOP_RIGHT: Side.TOP.value,
    Corner.BOTTOM_RIGHT: Side.RIGHT.value,
    Corner.BOTTOM_LEFT: Side.BOTTOM.value,
}


@dataclass(frozen=True)
class CellBox:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class LoopStyle:
    """Inset of drawn edges from the cell boundary, and the corner rounding."""

    padding: float = 0.08
    corner_radius: float = 0.2


DEFAULT_STYLE = LoopStyle()


def _corners(x: float, y: float, w: float, h: float) -> List[Point]:
    return [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]


def _step(point: Point, side: int, amount: float) -> Point:
    dx, dy = _DIRECTIONS[side % 4]
    return point[0] + dx * amount, point[1] + dy * amount


def _open_outline(
    x: float, y: float, w: float, h: float, first_side: int, count: int, radius: float
) -> List[PathCommand]:
    """Walk ``count`` sides clockwise from ``first_side``, rounding inner joints."""
    r = max(0.0, min(radius, w / 2, h / 2))
    pts = _corners(x, y, w, h)
    commands: List[PathCommand] = [("M", pts[first_side % 4])]
    for k in range(count):
        side = first_side + k
        end = pts[(side + 1) % 4]
        if k == count - 1:
            commands.append(("L", end))
        else:
            commands.append(("L", _step(end, side, -r)))
            commands.append(("Q", end, _step(end, side + 1, r)))
    return commands


@dataclass(frozen=True)
class RoundedRect:
    x: float
    y: float
    width: float
    height: float
    corner_radius: float

    @property
    def drawn_sides(self) -> Tuple[Side, ...]:
        return tuple(Side)

    def outline(self) -> List[PathCommand]:
        r = max(0.0, min(self.corner_radius, self.width / 2, self.height / 2))
        pts = _corners(self.x, self.y, self.width, self.height)
        commands: List[PathCommand] = [("M", _step(pts[0], 0, r))]
        for side in range(4):
            end = pts[(side + 1) % 4]
            commands.append(("L", _step(end, side, -r)))
            commands.append(("Q", end, _step(end, side + 1, r)))
        commands.append(("Z",))
        return commands


@dataclass(frozen=True)
class OpenSidedPath:
    """One half of a wrapped loop; ``open_side`` continues across the map edge."""

    open_side: Side
    x: float
    y: float
    width: float
    height: float
    corner_radius: float

    @property
    def drawn_sides(self) -> Tuple[Side, ...]:
        return tuple(Side((self.open_side.value + k) % 4) for k in range(1, 4))

    def outline(self) -> List[PathCommand]:
        return _open_outline(
            self.x, self.y, self.width, self.height,
            self.open_side.value + 1, 3, self.corner_radius,
        )


@dataclass(frozen=True)
class CornerFragment:
    """Quarter of a four-corner loop: only the two outer edges are drawn."""

    corner: Corner
    x: float
    y: float
    width: float
    height: float
    corner_radius: float = 0.0

    @property
    def drawn_sides(self) -> Tuple[Side, ...]:
        first = _CORNER_FIRST_SIDE[self.corner]
        return Side(first), Side((first + 1) % 4)

    def outline(self) -> List[PathCommand]:
        return _open_outline(
            self.x, self.y, self.width, self.height,
            _CORNER_FIRST_SIDE[self.corner], 2, self.corner_radius,
        )


ShapeDescriptor = Union[RoundedRect, OpenSidedPath, CornerFragment]


def unit_cell_geometry(nvars: int) -> Dict[Tuple[int, int], CellBox]:
    """Cell boxes for a map drawn with one unit per cell, origin top-left."""
    nrows, ncols = map_dimensions(nvars)
    return {
        (r, c): CellBox(x=float(c), y=float(r), width=1.0, height=1.0)
        for r in range(nrows)
        for c in range(ncols)
    }


def _hull(
    geometry: Mapping[Tuple[int, int], CellBox],
    rows: Sequence[int],
    cols: Sequence[int],
    open_sides: Sequence[Side],
    padding: float,
) -> Tuple[float, float, float, float]:
    top_left = geometry[(min(rows), min(cols))]
    bottom_right = geometry[(max(rows), max(cols))]
    left, top = top_left.x, top_left.y
    right = bottom_right.x + bottom_right.width
    bottom = bottom_right.y + bottom_right.height
    if Side.LEFT not in open_sides:
        left += padding
    if Side.RIGHT not in open_sides:
        right -= padding
    if Side.TOP not in open_sides:
        top += padding
    if Side.BOTTOM not in open_sides:
        bottom -= padding
    return left, top, right - left, bottom - top


def _split_at_seam(indices: Sequence[int], start: int) -> Tuple[List[int], List[int]]:
    """Split a wrapped run into the part at the low edge and the part at the high edge."""
    near = sorted(i for i in indices if i < start)
    far = sorted(i for i in indices if i >= start)
    return near, far


def synthesize_shapes(
    region: GroupRegion,
    geometry: Mapping[Tuple[int, int], CellBox],
    style: LoopStyle = DEFAULT_STYLE,
) -> List[ShapeDescriptor]:
    """Return the 1-4 shapes that together outline ``region``."""
    if not region.is_valid:
        raise InvalidGroupShape(region.minterms, region.reason or "invalid group")

    pad, radius = style.padding, style.corner_radius
    rows = sorted(region.row_indices)
    cols = sorted(region.col_indices)

    if region.kind is RegionKind.RECTANGLE:
        x, y, w, h = _hull(geometry, rows, cols, (), pad)
        return [RoundedRect(x, y, w, h, radius)]

    if region.kind is RegionKind.WRAPPED_COLS:
        shapes: List[ShapeDescriptor] = []
        for part, side in zip(_split_at_seam(cols, region.c0), (Side.LEFT, Side.RIGHT)):
            x, y, w, h = _hull(geometry, rows, part, (side,), pad)
            shapes.append(OpenSidedPath(side, x, y, w, h, radius))
        return shapes

    if region.kind is RegionKind.WRAPPED_ROWS:
        shapes = []
        for part, side in zip(_split_at_seam(rows, region.r0), (Side.TOP, Side.BOTTOM)):
            x, y, w, h = _hull(geometry, part, cols, (side,), pad)
            shapes.append(OpenSidedPath(side, x, y, w, h, radius))
        return shapes

    top, bottom = _split_at_seam(rows, region.r0)
    left, right = _split_at_seam(cols, region.c0)
    quadrants = (
        (Corner.TOP_LEFT, top, left, (Side.RIGHT, Side.BOTTOM)),
        (Corner.TOP_RIGHT, top, right, (Side.LEFT, Side.BOTTOM)),
        (Corner.BOTTOM_RIGHT, bottom, right, (Side.LEFT, Side.TOP)),
        (Corner.BOTTOM_LEFT, bottom, left, (Side.RIGHT, Side.TOP)),
    )
    shapes = []
    for corner, part_rows, part_cols, open_sides in quadrants:
        x, y, w, h = _hull(geometry, part_rows, part_cols, open_sides, pad)
        shapes.append(CornerFragment(corner, x, y, w, h, radius))
    return shapes


__all__ = [
    "CellBox",
    "Corner",
    "CornerFragment",
    "DEFAULT_STYLE",
    "LoopStyle",
    "OpenSidedPath",
    "RoundedRect",
    "ShapeDescriptor",
    "Side",
    "synthesize_shapes",
    "unit_cell_geometry",
]
