"""Solve, classify and outline: one loop per implicant."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from .errors import InvalidGroupShape
from .kmap_engine import GRID_VARS, GroupRegion, classify_group, map_dimensions
from .logic import Implicant, SolveResult, Solver, covered_minterms, solve_minterms
from .loops import (
    DEFAULT_STYLE,
    CellBox,
    LoopStyle,
    ShapeDescriptor,
    synthesize_shapes,
    unit_cell_geometry,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImplicantLoop:
    """A drawable implicant; ``index`` is its position in the solver output."""

    index: int
    implicant: Implicant
    region: GroupRegion
    shapes: Tuple[ShapeDescriptor, ...]

    @property
    def term(self) -> str:
        return self.implicant.term


@dataclass(frozen=True)
class SkippedImplicant:
    index: int
    implicant: Implicant
    error: InvalidGroupShape


@dataclass(frozen=True)
class LoopReport:
    nvars: int
    loops: Tuple[ImplicantLoop, ...]
    skipped: Tuple[SkippedImplicant, ...]

    @property
    def diagnostics(self) -> List[str]:
        return [
            f"Group {item.index + 1} ({item.implicant.pattern}) was not drawn: {item.error.reason}"
            for item in self.skipped
        ]


@dataclass(frozen=True)
class KMapSolution:
    result: SolveResult
    report: Optional[LoopReport]


def _check_consistency(implicant: Implicant, nvars: int) -> None:
    try:
        expected = covered_minterms(implicant.pattern, nvars)
    except ValueError as exc:
        raise InvalidGroupShape(implicant.minterms, str(exc)) from exc
    if set(expected) != set(implicant.minterms):
        raise InvalidGroupShape(
            implicant.minterms,
            f"minterms do not match the pattern {implicant.pattern}",
        )


def build_loops(
    nvars: int,
    implicants: Sequence[Implicant],
    geometry: Optional[Mapping[Tuple[int, int], CellBox]] = None,
    style: LoopStyle = DEFAULT_STYLE,
    cross_check: bool = True,
) -> LoopReport:
    """Outline every implicant, skipping (and reporting) the ones that cannot be drawn."""
    map_dimensions(nvars)
    if geometry is None:
        geometry = unit_cell_geometry(nvars)

    loops: List[ImplicantLoop] = []
    skipped: List[SkippedImplicant] = []
    for index, implicant in enumerate(implicants):
        try:
            if cross_check:
                _check_consistency(implicant, nvars)
            region = classify_group(nvars, implicant.minterms)
            shapes = synthesize_shapes(region, geometry, style)
        except InvalidGroupShape as exc:
            logger.warning(
                "skipping implicant %d (%s): %s", index, implicant.pattern, exc.reason
            )
            skipped.append(SkippedImplicant(index, implicant, exc))
            continue
        logger.debug(
            "implicant %d (%s) -> %s, %d shape(s)",
            index, implicant.pattern, region.kind.value, len(shapes),
        )
        loops.append(ImplicantLoop(index, implicant, region, tuple(shapes)))
    return LoopReport(nvars=nvars, loops=tuple(loops), skipped=tuple(skipped))


def solve_and_build(
    nvars: int,
    minterms: Sequence[int],
    dontcares: Sequence[int] = (),
    solver: Solver = solve_minterms,
    geometry: Optional[Mapping[Tuple[int, int], CellBox]] = None,
    style: LoopStyle = DEFAULT_STYLE,
) -> KMapSolution:
    """Run ``solver`` and outline its implicants; maps above 4 variables get no report."""
    result = solver(nvars, list(minterms), list(dontcares))
    if nvars not in GRID_VARS:
        return KMapSolution(result=result, report=None)
    return KMapSolution(
        result=result,
        report=build_loops(nvars, result.implicants, geometry, style),
    )


__all__ = [
    "ImplicantLoop",
    "KMapSolution",
    "LoopReport",
    "SkippedImplicant",
    "build_loops",
    "solve_and_build",
]
