from __future__ import annotations

from mathscript.compiler.macros import MacroTable, is_definition


def test_parse_definition_registers_shortcut() -> None:
    table = MacroTable()
    assert table.parse_definition("#define R Math.reals") == ("R", "Math.reals")
    assert "R" in table
    assert len(table) == 1


def test_replacement_keeps_remainder_of_line() -> None:
    table = MacroTable()
    assert table.parse_definition("#define cont f is continuous") == ("cont", "f is continuous")


def test_malformed_definitions_are_rejected() -> None:
    table = MacroTable()
    assert table.parse_definition("#define") is None
    assert table.parse_definition("#define foo") is None
    assert len(table) == 0


def test_expand_respects_word_boundaries() -> None:
    table = MacroTable()
    table.define("N", "Math.naturals")
    assert table.expand("AND N") == "AND Math.naturals"
    assert table.expand("N_1") == "N_1"


def test_expand_is_single_pass() -> None:
    table = MacroTable()
    table.define("x", "y")
    table.define("y", "z")
    assert table.expand("x y") == "y z"


def test_redefinition_overwrites_value_and_keeps_order() -> None:
    table = MacroTable()
    table.define("a", "1")
    table.define("b", "2")
    table.define("a", "3")
    assert table.as_dict() == {"a": "3", "b": "2"}
    assert list(table.as_dict()) == ["a", "b"]
    assert table.expand("a + b") == "3 + 2"


def test_expand_without_macros_returns_line() -> None:
    assert MacroTable().expand("x + y") == "x + y"


def test_is_definition() -> None:
    assert is_definition("  #define x y")
    assert not is_definition("x = 1")
