"""Boolean logic utilities: SOP text <-> minterms, and the SymPy minimizer."""

from __future__ import annotations

import itertools
import logging
import unicodedata
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from sympy import And, Not, Or, Symbol, symbols
from sympy.logic.boolalg import SOPform, true

from .errors import MalformedExpression, UnsupportedVariableCount

logger = logging.getLogger(__name__)

MIN_VARS = 2
MAX_VARS = 6
VAR_NAMES = "ABCDEF"

# accepted right after a variable to complement it
NEGATION_MARKS = frozenset("'\u2019`!\u0305\u0304")


def _check_nvars(n: int) -> None:
    if not MIN_VARS <= n <= MAX_VARS:
        raise UnsupportedVariableCount(n, range(MIN_VARS, MAX_VARS + 1))


def variable_names(n: int) -> Tuple[str, ...]:
    """Return the variable letters (A, B, C, ...) for ``n`` inputs."""
    _check_nvars(n)
    return tuple(VAR_NAMES[:n])


def get_variables(n: int):
    """Return SymPy symbols (A, B, C, ...) for the requested variable count."""
    return symbols(" ".join(variable_names(n)), seq=True)


def _term_literals(term: str, names: Sequence[str]) -> Tuple[Dict[int, int], bool]:
    """Map variable position -> required bit, and flag a contradictory term.

    Characters that are not a variable of this map are skipped, as is a
    negation marker with no variable before it.
    """
    literals: Dict[int, int] = {}
    contradiction = False
    i = 0
    while i < len(term):
        ch = term[i]
        if ch in names:
            var = names.index(ch)
            bit = 1
            if i + 1 < len(term) and term[i + 1] in NEGATION_MARKS:
                bit = 0
                i += 1
            if literals.get(var, bit) != bit:
                contradiction = True
            literals[var] = bit
        i += 1
    return literals, contradiction


def _literals_to_minterms(literals: Dict[int, int], n: int) -> List[int]:
    free = [v for v in range(n) if v not in literals]
    mins = []
    for bits in itertools.product([0, 1], repeat=len(free)):
        assignment = dict(literals)
        assignment.update(zip(free, bits))
        idx = 0
        for v in range(n):
            idx = (idx << 1) | assignment[v]
        mins.append(idx)
    return sorted(mins)


def _normalize(raw: str) -> str:
    text = "".join((raw or "").split()).upper()
    return unicodedata.normalize("NFD", text)


def term_to_minterms(term: str, n: int) -> List[int]:
    """Return the minterms of a single product term such as ``AB'C``."""
    names = variable_names(n)
    text = _normalize(term)
    if text == "1":
        return list(range(1 << n))
    if text == "0":
        return []
    literals, contradiction = _term_literals(text, names)
    if not literals:
        raise MalformedExpression(term, f"no variable among {', '.join(names)}")
    return [] if contradiction else _literals_to_minterms(literals, n)


def parse_expression(expression: str, n: int) -> List[int]:
    """Parse SOP text (``A'BC + AB'``) into its sorted minterm list.

    Empty terms and unrecognized characters are skipped. The expression is
    malformed only when no term holds a variable or a ``1``/``0`` constant.
    """
    names = variable_names(n)
    text = _normalize(expression)

    found = set()
    recognized = False
    for term in filter(None, text.split("+")):
        if term in ("0", "1"):
            recognized = True
            if term == "1":
                found.update(range(1 << n))
            continue
        literals, contradiction = _term_literals(term, names)
        if not literals:
            logger.debug("ignoring term %r with no variable of %s", term, names)
            continue
        recognized = True
        if not contradiction:
            found.update(_literals_to_minterms(literals, n))
    if not recognized:
        raise MalformedExpression(
            expression, f"no term uses the variables {', '.join(names)}"
        )
    return sorted(found)


def _check_pattern(pattern: str, n: int) -> None:
    _check_nvars(n)
    if len(pattern) != n or set(pattern) - set("01-"):
        raise ValueError(f"Bit pattern {pattern!r} must be {n} characters of 0, 1 or -.")


def covered_minterms(pattern: str, n: int) -> List[int]:
    """Return every minterm consistent with the fixed bits of ``pattern``."""
    _check_pattern(pattern, n)
    literals = {v: int(bit) for v, bit in enumerate(pattern) if bit != "-"}
    return _literals_to_minterms(literals, n)


def render_term(pattern: str, n: int) -> str:
    """Render a bit pattern (``0-1``) as a product term (``A'C``)."""
    _check_pattern(pattern, n)
    names = variable_names(n)
    pieces: List[str] = []
    for name, bit in zip(names, pattern):
        if bit == "1":
            pieces.append(name)
        elif bit == "0":
            pieces.append(f"{name}'")
    return "".join(pieces) if pieces else "1"


def render_expression(patterns: Iterable[str], n: int) -> str:
    """Join rendered terms into SOP text; an empty sum is ``0``."""
    terms = [render_term(p, n) for p in patterns]
    return " + ".join(terms) if terms else "0"


def validate_minterm_range(minterms: Iterable[int], n: int) -> None:
    """Ensure all minterms are within the range for the current variable count."""
    max_valid = (1 << n) - 1
    invalid = [m for m in minterms if m < 0 or m > max_valid]
    if invalid:
        raise ValueError(
            f"Minterms out of range for {n} variables (0-{max_valid}): {sorted(set(invalid))}"
        )


def validate_disjoint(minterms: Iterable[int], dontcares: Iterable[int]) -> None:
    """Ensure no index is both a minterm and a don't care."""
    both = set(minterms) & set(dontcares)
    if both:
        raise ValueError(f"Values cannot be both minterms and don't cares: {sorted(both)}")


@dataclass(frozen=True)
class Implicant:
    """One product term of a solution and the minterms it covers."""

    pattern: str
    minterms: Tuple[int, ...]

    @property
    def literal_count(self) -> int:
        return sum(1 for bit in self.pattern if bit != "-")

    @property
    def term(self) -> str:
        return render_term(self.pattern, len(self.pattern))


@dataclass(frozen=True)
class SolveResult:
    nvars: int
    expression: str
    implicants: Tuple[Implicant, ...]


Solver = Callable[[int, Sequence[int], Sequence[int]], SolveResult]


def _term_to_pattern(term, vars_tuple) -> str:
    factors = list(term.args) if isinstance(term, And) else [term]
    bits = ["-"] * len(vars_tuple)
    for factor in factors:
        if isinstance(factor, Symbol):
            bits[vars_tuple.index(factor)] = "1"
        elif isinstance(factor, Not) and isinstance(factor.args[0], Symbol):
            bits[vars_tuple.index(factor.args[0])] = "0"
        else:
            raise ValueError("Unsupported factor within implicant.")
    return "".join(bits)


def solve_minterms(
    nvars: int, minterms: Sequence[int], dontcares: Optional[Sequence[int]] = None
) -> SolveResult:
    """Minimize with SymPy's ``SOPform`` and report each chosen implicant."""
    _check_nvars(nvars)
    mins = sorted(set(minterms))
    dcs = sorted(set(dontcares or []))
    validate_minterm_range(mins, nvars)
    validate_minterm_range(dcs, nvars)
    validate_disjoint(mins, dcs)
    if not mins:
        return SolveResult(nvars=nvars, expression="0", implicants=())

    vars_tuple = tuple(get_variables(nvars))
    expr = SOPform(vars_tuple, mins, dcs)
    if expr == true:
        patterns = ["-" * nvars]
    else:
        terms = list(expr.args) if isinstance(expr, Or) else [expr]
        patterns = [_term_to_pattern(term, vars_tuple) for term in terms]

    implicants = sorted(
        (Implicant(p, tuple(covered_minterms(p, nvars))) for p in patterns),
        key=lambda imp: (imp.literal_count, imp.pattern),
    )
    expression = render_expression((imp.pattern for imp in implicants), nvars)
    logger.debug(
        "solved n=%d minterms=%s dontcares=%s -> %s", nvars, mins, dcs, expression
    )
    return SolveResult(nvars=nvars, expression=expression, implicants=tuple(implicants))


__all__ = [
    "Implicant",
    "MAX_VARS",
    "MIN_VARS",
    "SolveResult",
    "Solver",
    "covered_minterms",
    "get_variables",
    "parse_expression",
    "render_expression",
    "render_term",
    "solve_minterms",
    "term_to_minterms",
    "validate_disjoint",
    "validate_minterm_range",
    "variable_names",
]
