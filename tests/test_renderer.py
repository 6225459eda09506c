from __future__ import annotations

from mathscript.compiler import compile_document
from mathscript.compiler.base import CompilationResult, OutputLine
from mathscript.renderer.html_renderer import HTMLRenderer, classify_line, number_lines
from mathscript.renderer.tex_renderer import TeXRenderer

DOCUMENT = "Theorem {\na/b\n}\nx < y"


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------

def test_classify_line() -> None:
    assert classify_line(OutputLine("spacer-1", "\\phantom{.} \\\\[1em]", 2)) == "spacer"
    assert classify_line(OutputLine("line-3", "\\\\[0.5em]", 4)) == "spacer"
    assert classify_line(OutputLine("line-0", "{\\huge \\textbf{\\text{Theorem}}}", 1)) == "header"
    assert classify_line(OutputLine("line-2", "\\quad {\\Large \\textit{\\text{Proof}}}", 3)) == "header"
    assert classify_line(OutputLine("line-4", "   ", 5)) == "empty"
    assert classify_line(OutputLine("line-5", "x", 6)) == "math"


def test_number_lines_counts_math_only() -> None:
    numbered = number_lines(compile_document(DOCUMENT).output_lines)
    assert [line.kind for line in numbered] == ["header", "math", "spacer", "math"]
    assert [line.number for line in numbered] == [None, 1, None, 2]


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

def test_html_export() -> None:
    html = HTMLRenderer().render(
        compile_document(DOCUMENT),
        title="Notes",
        author="Ada",
        date_text="2025-01-01",
        show_line_numbers=True,
        dark_mode=True,
    )

    assert "<title>Notes</title>" in html
    assert "katex.min.js" in html
    assert "displayMode: true" in html
    assert "mathscript-dark-mode" in html
    assert "Ada" in html
    assert "2025-01-01" in html
    assert 'data-latex="\\quad \\frac{a}{b}"' in html
    assert 'data-latex="x &lt; y"' in html
    assert '<span class="line-number">1</span>' in html
    assert "math-header" in html


def test_html_defaults() -> None:
    html = HTMLRenderer().render(compile_document("x"))
    assert "<title>Untitled</title>" in html
    assert "mathscript-light-mode" in html
    assert "line-number" not in html.split("<main", 1)[1]


def test_html_empty_line_renders_gap() -> None:
    result = CompilationResult(output_lines=[OutputLine("line-0", "", 1)])
    html = HTMLRenderer().render(result)
    assert 'class="math-gap"' in html


# ---------------------------------------------------------------------------
# TeX
# ---------------------------------------------------------------------------

def test_tex_export() -> None:
    tex = TeXRenderer().render(
        compile_document(DOCUMENT),
        title="Notes & Proofs",
        author="Ada",
        date_text="2025-01-01",
    )

    assert tex.startswith("\\documentclass")
    assert "\\usepackage{amsmath}" in tex
    assert "\\usepackage{amssymb}" in tex
    assert "\\title{Notes \\& Proofs}" in tex
    assert "\\[\n  \\quad \\frac{a}{b}\n\\]" in tex
    assert "\\vspace{0.5em}" in tex
    assert "\\begin{equation}" not in tex
    assert tex.rstrip().endswith("\\end{document}")


def test_tex_line_numbers_use_equation() -> None:
    tex = TeXRenderer().render(compile_document(DOCUMENT), show_line_numbers=True)
    assert "\\begin{equation}\n  \\quad \\frac{a}{b}\n\\end{equation}" in tex
    assert "\\[\n  {\\huge \\textbf{\\text{Theorem}}}\n\\]" in tex
