"""Matplotlib rendering of the K-map grid and its implicant loops."""

from __future__ import annotations

import io
from typing import Iterable, List, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import FancyBboxPatch, Patch, PathPatch
from matplotlib.path import Path

from .kmap_engine import axis_codes, idx_to_rc, map_dimensions
from .logic import variable_names
from .loops import RoundedRect, ShapeDescriptor
from .pipeline import ImplicantLoop

COLOR_PALETTE = [
    "#e53935", "#1e88e5", "#43a047", "#f39c12",
    "#8e24aa", "#009688", "#6d4c41", "#2e86c1",
]

FIGURE_SIZES = {2: (3.2, 3.2), 3: (5.2, 3.4), 4: (5.2, 5.2)}


def loop_color(index: int) -> str:
    return COLOR_PALETTE[index % len(COLOR_PALETTE)]


def loop_alpha(size: int, max_size: int) -> float:
    """Bigger groups are drawn more opaque: 0.3 for nothing, 0.7 for the largest."""
    if max_size <= 0:
        return 0.7
    return 0.3 + 0.4 * size / max_size


def axis_labels(nvars: int) -> Tuple[str, List[str], str, List[str]]:
    """Return (row title, row labels, column title, column labels) in Gray order."""
    names = variable_names(nvars)
    row_codes, col_codes = axis_codes(nvars)
    row_bits = len(row_codes).bit_length() - 1
    col_bits = len(col_codes).bit_length() - 1
    row_title = "".join(names[:row_bits])
    col_title = "".join(names[row_bits:])
    rows = [format(code, f"0{row_bits}b") for code in row_codes]
    cols = [format(code, f"0{col_bits}b") for code in col_codes]
    return row_title, rows, col_title, cols


def outline_to_path(commands: Iterable[tuple]) -> Path:
    """Convert ``M``/``L``/``Q``/``Z`` commands to a matplotlib Path."""
    verts: List[Tuple[float, float]] = []
    codes: List[int] = []
    start = (0.0, 0.0)
    for command in commands:
        op = command[0]
        if op == "M":
            start = command[1]
            verts.append(start)
            codes.append(Path.MOVETO)
        elif op == "L":
            verts.append(command[1])
            codes.append(Path.LINETO)
        elif op == "Q":
            verts.extend([command[1], command[2]])
            codes.extend([Path.CURVE3, Path.CURVE3])
        elif op == "Z":
            verts.append(start)
            codes.append(Path.CLOSEPOLY)
        else:
            raise ValueError(f"Unknown path command {op!r}")
    return Path(verts, codes)


def shape_to_patch(shape: ShapeDescriptor, color: str, alpha: float = 1.0, lw: float = 2.5) -> Patch:
    if isinstance(shape, RoundedRect):
        radius = max(0.0, min(shape.corner_radius, shape.width / 2, shape.height / 2))
        return FancyBboxPatch(
            (shape.x, shape.y), shape.width, shape.height,
            boxstyle=f"round,pad=0,rounding_size={radius}",
            fill=False, edgecolor=color, lw=lw, alpha=alpha,
        )
    return PathPatch(
        outline_to_path(shape.outline()),
        fill=False, edgecolor=color, lw=lw, alpha=alpha,
    )


def draw_kmap(
    nvars: int,
    minterms: Sequence[int],
    dontcares: Sequence[int],
    loops: Sequence[ImplicantLoop] = (),
):
    """Plot the map with cell values and one coloured loop per implicant."""
    nrows, ncols = map_dimensions(nvars)
    fig, ax = plt.subplots(figsize=FIGURE_SIZES[nvars])

    # leave room for the row and column headers
    ax.set_xlim(-1.2, ncols)
    ax.set_ylim(-0.6, nrows)
    ax.set_xticks(np.arange(0, ncols + 1))
    ax.set_yticks(np.arange(0, nrows + 1))
    ax.set_xticklabels([])
    ax.set_yticklabels([])
    ax.grid(True, color="#888", linewidth=1)
    ax.invert_yaxis()
    ax.set_facecolor("#fafafa")

    row_title, row_labels, col_title, col_labels = axis_labels(nvars)
    for j, lab in enumerate(col_labels):
        ax.text(j + 0.5, -0.25, f"{col_title}={lab}", ha="center", va="center", fontsize=10, color="#333")
    for i, lab in enumerate(row_labels):
        ax.text(-0.25, i + 0.5, f"{row_title}={lab}", ha="right", va="center", fontsize=10, color="#333")

    ones = set(minterms)
    dcs_set = set(dontcares)
    for idx in range(nrows * ncols):
        r, c = idx_to_rc(nvars, idx)
        if idx in ones:
            val, color = "1", "#1f3c88"
        elif idx in dcs_set:
            val, color = "X", "#ff8c32"
        else:
            val, color = "0", "#9aa7b7"
        ax.text(c + 0.5, r + 0.5, val, color=color,
                fontsize=13, ha="center", va="center", weight="bold")
        ax.text(c + 0.05, r + 0.9, str(idx), color="#777", fontsize=8, alpha=0.7)

    max_size = max((len(loop.implicant.minterms) for loop in loops), default=0)
    for loop in loops:
        color = loop_color(loop.index)
        alpha = loop_alpha(len(loop.implicant.minterms), max_size)
        for shape in loop.shapes:
            ax.add_patch(shape_to_patch(shape, color, alpha))

    return fig


def figure_to_png(fig) -> bytes:
    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", bbox_inches="tight", dpi=150)
    return buffer.getvalue()
