"""Convenience exports for core K-Map loop helpers."""

from .errors import (
    InvalidGroupShape,
    KMapError,
    MalformedExpression,
    UnsupportedVariableCount,
)
from .logic import (
    Implicant,
    SolveResult,
    covered_minterms,
    parse_expression,
    render_expression,
    render_term,
    solve_minterms,
    term_to_minterms,
    variable_names,
)
from .kmap_engine import (
    GroupRegion,
    RegionKind,
    classify_group,
    idx_to_rc,
    map_dimensions,
    map_minterms_to_cells,
    rc_to_idx,
)
from .loops import (
    CellBox,
    Corner,
    CornerFragment,
    LoopStyle,
    OpenSidedPath,
    RoundedRect,
    Side,
    synthesize_shapes,
    unit_cell_geometry,
)
from .pipeline import ImplicantLoop, LoopReport, build_loops, solve_and_build
from .grid_state import CellState, KMapGrid

__all__ = [
    "CellBox",
    "CellState",
    "Corner",
    "CornerFragment",
    "GroupRegion",
    "Implicant",
    "ImplicantLoop",
    "InvalidGroupShape",
    "KMapError",
    "KMapGrid",
    "LoopReport",
    "LoopStyle",
    "MalformedExpression",
    "OpenSidedPath",
    "RegionKind",
    "RoundedRect",
    "Side",
    "SolveResult",
    "UnsupportedVariableCount",
    "build_loops",
    "classify_group",
    "covered_minterms",
    "idx_to_rc",
    "map_dimensions",
    "map_minterms_to_cells",
    "parse_expression",
    "rc_to_idx",
    "render_expression",
    "render_term",
    "solve_and_build",
    "solve_minterms",
    "synthesize_shapes",
    "term_to_minterms",
    "unit_cell_geometry",
    "variable_names",
]
