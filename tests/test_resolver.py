from __future__ import annotations

from mathscript.compiler.base import PlaceholderTable
from mathscript.compiler.resolver import PlaceholderResolver


def test_nested_markers_resolve() -> None:
    table = PlaceholderTable()
    inner = table.add("x^{2}")
    table.add(f"\\sqrt{{{inner}}}")
    resolution = PlaceholderResolver(table).resolve("__PH1__ + 1")
    assert resolution.latex == "\\sqrt{x^{2}} + 1"
    assert resolution.passes == 2
    assert not resolution.unresolved


def test_line_without_markers_is_untouched() -> None:
    resolution = PlaceholderResolver(PlaceholderTable()).resolve("x + y")
    assert resolution.latex == "x + y"
    assert resolution.passes == 0


def test_unknown_marker_is_left_visible() -> None:
    resolution = PlaceholderResolver(PlaceholderTable()).resolve("a __PH7__")
    assert resolution.latex == "a __PH7__"
    assert resolution.unresolved


def test_cycle_stops_at_pass_ceiling() -> None:
    table = PlaceholderTable()
    table.add("__PH1__")
    table.add("__PH0__")
    resolution = PlaceholderResolver(table, max_passes=5).resolve("__PH0__")
    assert resolution.passes == 5
    assert resolution.unresolved
