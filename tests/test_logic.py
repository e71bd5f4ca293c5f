import itertools

import pytest

from kmap_loops.errors import MalformedExpression, UnsupportedVariableCount
from kmap_loops.logic import (
    Implicant,
    covered_minterms,
    parse_expression,
    render_expression,
    render_term,
    solve_minterms,
    term_to_minterms,
    variable_names,
)


def test_parse_example():
    assert parse_expression("A'BC + AB'", 3) == [3, 4, 5]


@pytest.mark.parametrize("nvars", [2, 3, 4, 5])
def test_render_then_parse_covers_same_minterms(nvars):
    for bits in itertools.product("01-", repeat=nvars):
        pattern = "".join(bits)
        assert parse_expression(render_term(pattern, nvars), nvars) == covered_minterms(pattern, nvars)


@pytest.mark.parametrize(
    "pattern, term",
    [("0--", "A'"), ("----", "1"), ("1010", "AB'CD'"), ("-1", "B"), ("1-0-1-", "AC'E")],
)
def test_render_term(pattern, term):
    assert render_term(pattern, len(pattern)) == term


def test_render_expression():
    assert render_expression(["0--", "-11"], 3) == "A' + BC"
    assert render_expression([], 3) == "0"


@pytest.mark.parametrize(
    "text",
    ["A!B", "A\u2019B", "A`B", "\u0100B", "A\u0305B", "a'b", "A' * B", "A'\u00b7B", " A ' B "],
)
def test_negation_and_and_markers(text):
    assert parse_expression(text, 2) == [1]


def test_constants_and_contradictions():
    assert parse_expression("1", 2) == [0, 1, 2, 3]
    assert parse_expression("0", 2) == []
    assert parse_expression("AA'", 2) == []
    assert parse_expression("AA' + B", 2) == [1, 3]
    assert term_to_minterms("1", 3) == list(range(8))
    assert term_to_minterms("AB", 3) == [6, 7]


def test_duplicates_are_merged():
    assert parse_expression("A + A + AB", 2) == [2, 3]


@pytest.mark.parametrize(
    "text, nvars, expected",
    [
        ("AB +", 2, [3]),
        ("F = A'BC + AB'", 3, [3, 4, 5]),
        ("ABC", 2, [3]),
        ("A++B", 2, [1, 2, 3]),
        ("'A", 2, [2, 3]),
        ("A''", 2, [0, 1]),
        ("A + X", 2, [2, 3]),
    ],
)
def test_unrecognized_characters_and_empty_terms_are_skipped(text, nvars, expected):
    assert parse_expression(text, nvars) == expected


@pytest.mark.parametrize("text", ["", "   ", "+", "++", "*", "X", "2", "'", "G'H"])
def test_malformed(text):
    with pytest.raises(MalformedExpression):
        parse_expression(text, 3)


def test_no_variable_of_the_map():
    with pytest.raises(MalformedExpression) as info:
        parse_expression("E + F'", 4)
    assert "A, B, C, D" in info.value.reason
    with pytest.raises(MalformedExpression):
        term_to_minterms("XY", 3)


@pytest.mark.parametrize("nvars", [1, 7])
def test_codec_variable_range(nvars):
    with pytest.raises(UnsupportedVariableCount):
        parse_expression("A", nvars)
    with pytest.raises(UnsupportedVariableCount):
        variable_names(nvars)


def test_bad_patterns():
    with pytest.raises(ValueError):
        render_term("01", 3)
    with pytest.raises(ValueError):
        covered_minterms("0x1", 3)


def test_covered_minterms():
    assert covered_minterms("1-0", 3) == [4, 6]
    assert covered_minterms("---", 3) == list(range(8))


def test_solve_full_row():
    result = solve_minterms(3, [0, 1, 2, 3])
    assert result.expression == "A'"
    assert result.implicants == (Implicant("0--", (0, 1, 2, 3)),)


def test_solve_four_corners():
    result = solve_minterms(4, [0, 2, 8, 10])
    assert result.expression == "B'D'"
    assert result.implicants[0].minterms == (0, 2, 8, 10)


def test_solve_orders_by_literal_count():
    result = solve_minterms(3, [0, 1, 2, 3, 4])
    assert [imp.pattern for imp in result.implicants] == ["0--", "-00"]
    assert result.expression == "A' + B'C'"


def test_solve_with_dont_cares():
    result = solve_minterms(3, [1, 3], [5, 7])
    assert result.expression == "C"
    assert result.implicants[0].minterms == (1, 3, 5, 7)


def test_solve_constants():
    assert solve_minterms(2, []).expression == "0"
    result = solve_minterms(2, [0, 1, 2, 3])
    assert result.expression == "1"
    assert result.implicants[0].pattern == "--"


def test_solve_rejects_bad_input():
    with pytest.raises(ValueError):
        solve_minterms(3, [1, 2], [2])
    with pytest.raises(ValueError):
        solve_minterms(3, [8])
    with pytest.raises(UnsupportedVariableCount):
        solve_minterms(7, [0])


def test_solve_five_variables():
    result = solve_minterms(5, [0, 1, 2, 3, 4, 5, 6, 7])
    assert result.expression == "A'B'"
