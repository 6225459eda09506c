from __future__ import annotations

from mathscript.compiler.scanner import (
    find_abs_pair,
    find_closing,
    find_opening,
    find_top_level,
    read_group,
    split_top_level,
)


# ---------------------------------------------------------------------------
# find_closing / find_opening
# ---------------------------------------------------------------------------

def test_find_closing_counts_nested_pairs() -> None:
    assert find_closing("(a(b)c)", 1) == 6


def test_find_closing_reports_unbalanced_group() -> None:
    assert find_closing("(a(b", 1) == -1


def test_find_closing_braces_and_pipes() -> None:
    assert find_closing("{x}", 1, "{", "}") == 2
    assert find_closing("|x|", 1, "|", "|") == 2


def test_find_opening_walks_backwards() -> None:
    assert find_opening("f((a)+b)", 7) == 1


def test_find_opening_requires_closer_at_index() -> None:
    assert find_opening("abc", 1) == -1
    assert find_opening("a)", 1) == -1


# ---------------------------------------------------------------------------
# Groups and top-level splitting
# ---------------------------------------------------------------------------

def test_read_group() -> None:
    assert read_group("(ab)c", 0) == ("ab", 4)
    assert read_group("(ab", 0) is None
    assert read_group("ab", 0) is None


def test_split_top_level_ignores_nested_separators() -> None:
    assert split_top_level("f(a, b), c") == ["f(a, b)", " c"]
    assert split_top_level("{1, 2}, [3, 4]") == ["{1, 2}", " [3, 4]"]
    assert split_top_level("a") == ["a"]


def test_find_top_level() -> None:
    assert find_top_level("{a:b}:c", ":") == 5
    assert find_top_level("(a|b)", "|") == -1


# ---------------------------------------------------------------------------
# Absolute-value pipes
# ---------------------------------------------------------------------------

def test_find_abs_pair_simple() -> None:
    assert find_abs_pair("|x|") == (0, 2)
    assert find_abs_pair("|a - b| + 1") == (0, 6)


def test_find_abs_pair_returns_innermost_first() -> None:
    assert find_abs_pair("||x| + |y||") == (1, 3)
    assert find_abs_pair("| |a| - |b| |") == (2, 4)


def test_find_abs_pair_rejects_inconsistent_pipes() -> None:
    assert find_abs_pair("P(A|B)") is None
    assert find_abs_pair("|a|b|c|") is None
    assert find_abs_pair("|||||") is None
    assert find_abs_pair("x + y") is None
