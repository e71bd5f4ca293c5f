import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest
from matplotlib.patches import FancyBboxPatch, PathPatch
from matplotlib.path import Path

from kmap_loops.draw import (
    axis_labels,
    draw_kmap,
    figure_to_png,
    loop_alpha,
    loop_color,
    outline_to_path,
    shape_to_patch,
)
from kmap_loops.errors import UnsupportedVariableCount
from kmap_loops.loops import Corner, CornerFragment, RoundedRect
from kmap_loops.pipeline import solve_and_build


def test_axis_labels():
    assert axis_labels(2) == ("A", ["0", "1"], "B", ["0", "1"])
    assert axis_labels(3) == ("A", ["0", "1"], "BC", ["00", "01", "11", "10"])
    assert axis_labels(4) == ("AB", ["00", "01", "11", "10"], "CD", ["00", "01", "11", "10"])


def test_outline_to_path_codes():
    path = outline_to_path(CornerFragment(Corner.TOP_LEFT, 0, 0, 1, 1, 0.25).outline())
    assert list(path.codes) == [
        Path.MOVETO, Path.LINETO, Path.CURVE3, Path.CURVE3, Path.LINETO,
    ]
    closed = outline_to_path(RoundedRect(0, 0, 1, 1, 0.1).outline())
    assert closed.codes[-1] == Path.CLOSEPOLY


def test_outline_to_path_rejects_unknown():
    with pytest.raises(ValueError):
        outline_to_path([("M", (0, 0)), ("C", (1, 1))])


def test_shape_to_patch_kinds():
    assert isinstance(shape_to_patch(RoundedRect(0, 0, 1, 1, 0.2), "#000"), FancyBboxPatch)
    fragment = CornerFragment(Corner.BOTTOM_LEFT, 0, 0, 1, 1, 0.2)
    assert isinstance(shape_to_patch(fragment, "#000"), PathPatch)


def test_loop_style_helpers():
    assert loop_alpha(4, 4) == pytest.approx(0.7)
    assert loop_alpha(2, 4) == pytest.approx(0.5)
    assert loop_color(0) == loop_color(8)


def test_draw_kmap_adds_one_patch_per_shape():
    solution = solve_and_build(4, [0, 2, 8, 10, 5, 7])
    loops = solution.report.loops
    fig = draw_kmap(4, [0, 2, 8, 10, 5, 7], [], loops)
    try:
        assert len(fig.axes[0].patches) == sum(len(loop.shapes) for loop in loops)
        assert figure_to_png(fig).startswith(b"\x89PNG")
    finally:
        plt.close(fig)


def test_draw_kmap_rejects_maps_without_a_grid():
    figures = plt.get_fignums()
    with pytest.raises(UnsupportedVariableCount):
        draw_kmap(5, [0], [])
    assert plt.get_fignums() == figures
