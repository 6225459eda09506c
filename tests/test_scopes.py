from __future__ import annotations

from mathscript.compiler.scopes import CLOSE_SPACER, ScopeHeader, ScopeTracker


def test_match_header_with_title() -> None:
    header = ScopeTracker().match_header("Theorem Pythagoras {")
    assert header == ScopeHeader(keyword="Theorem", title="Pythagoras", italic=False)


def test_match_header_is_case_insensitive() -> None:
    header = ScopeTracker().match_header("proof {")
    assert header is not None
    assert header.keyword == "Proof"
    assert header.italic


def test_non_headers() -> None:
    tracker = ScopeTracker()
    assert tracker.match_header("x = {1, 2}") is None
    assert tracker.match_header("Theorem") is None
    assert tracker.match_header("Partial {") is None


def test_open_renders_sized_header_and_pushes() -> None:
    tracker = ScopeTracker()
    assert tracker.open(ScopeHeader("Theorem", "1")) == "{\\huge \\textbf{\\text{Theorem 1}}}"
    assert tracker.depth == 1
    assert tracker.spacer() == "\\phantom{.} \\\\[1em]"
    assert tracker.open(ScopeHeader("Proof", "", italic=True)) == "\\quad {\\Large \\textit{\\text{Proof}}}"
    assert tracker.indent == "\\quad \\quad "


def test_header_title_is_escaped() -> None:
    tracker = ScopeTracker()
    assert tracker.open(ScopeHeader("Problem", "#3 (50%)")) == "{\\huge \\textbf{\\text{Problem \\#3 (50\\%)}}}"


def test_deep_levels_share_smallest_tier() -> None:
    tracker = ScopeTracker()
    for _ in range(5):
        tracker.open(ScopeHeader("Case", ""))
    assert tracker.spacer() == "\\phantom{.} \\\\[0.2em]"
    assert "\\normalsize" in tracker.open(ScopeHeader("Case", ""))


def test_close_never_underflows() -> None:
    tracker = ScopeTracker()
    assert tracker.close() == CLOSE_SPACER
    assert tracker.depth == 0
    tracker.open(ScopeHeader("Part", "A"))
    tracker.close()
    tracker.close()
    assert tracker.depth == 0


def test_is_close() -> None:
    tracker = ScopeTracker()
    assert tracker.is_close("  }  ")
    assert not tracker.is_close("}}")
