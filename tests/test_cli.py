from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from mathscript.cli import main


def _write_source(tmp_path: Path, text: str) -> Path:
    source = tmp_path / "notes.math"
    source.write_text(text, encoding="utf-8")
    return source


def test_compile_to_html(tmp_path: Path) -> None:
    source = _write_source(tmp_path, "x^2 + y^2 = z^2\n")
    output = tmp_path / "out" / "notes.html"

    result = CliRunner().invoke(main, ["compile", str(source), "-o", str(output), "--line-numbers"])

    assert result.exit_code == 0, result.output
    assert "Rendered:" in result.output
    html = output.read_text(encoding="utf-8")
    assert "<title>notes</title>" in html
    assert 'data-latex="x^{2} + y^{2} = z^{2}"' in html


def test_compile_to_tex_with_metadata(tmp_path: Path) -> None:
    source = _write_source(tmp_path, "a/b\n")
    output = tmp_path / "notes.tex"

    result = CliRunner().invoke(
        main,
        ["compile", str(source), "-o", str(output), "--title", "Homework", "--author", "Ada", "--date", "2025-01-01"],
    )

    assert result.exit_code == 0, result.output
    tex = output.read_text(encoding="utf-8")
    assert "\\title{Homework}" in tex
    assert "\\author{Ada}" in tex
    assert "\\date{2025-01-01}" in tex
    assert "\\frac{a}{b}" in tex


def test_compile_to_json(tmp_path: Path) -> None:
    source = _write_source(tmp_path, "#define R Math.reals\nR\n")
    output = tmp_path / "notes.json"

    result = CliRunner().invoke(main, ["compile", str(source), "-o", str(output)])

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["output_lines"][0]["latex"] == "\\mathbb{R}"
    assert data["macros"] == {"R": "Math.reals"}


def test_unsupported_output_suffix(tmp_path: Path) -> None:
    source = _write_source(tmp_path, "x\n")

    result = CliRunner().invoke(main, ["compile", str(source), "-o", str(tmp_path / "notes.pdf")])

    assert result.exit_code != 0
    assert "Unsupported output type: notes.pdf" in result.output
    assert not (tmp_path / "notes.pdf").exists()


def test_warnings_are_echoed(tmp_path: Path) -> None:
    source = _write_source(tmp_path, "Problem {\nx\n")

    result = CliRunner().invoke(main, ["compile", str(source), "-o", str(tmp_path / "notes.json")])

    assert result.exit_code == 0, result.output
    assert "[warning]" in result.output


def test_reference_command() -> None:
    result = CliRunner().invoke(main, ["--log-level", "debug", "reference"])

    assert result.exit_code == 0, result.output
    assert "Basic Math" in result.output
    assert "\\frac{a}{b}" in result.output
    assert "Document Structure" in result.output
