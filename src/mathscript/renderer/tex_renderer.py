"""Render a CompilationResult as a standalone LaTeX document."""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from mathscript.compiler.base import CompilationResult
from mathscript.compiler.symbols import escape_text

from .html_renderer import number_lines

_GAP_RE = re.compile(r"\\\\\[([^\]]+)\]\s*$")


def _block(kind: str, latex: str, numbered: bool) -> str:
    if kind == "spacer":
        gap = _GAP_RE.search(latex)
        return f"\\vspace{{{gap.group(1) if gap else '0.5em'}}}"
    if kind == "empty":
        return "\\medskip"
    if numbered and kind == "math":
        return f"\\begin{{equation}}\n  {latex}\n\\end{{equation}}"
    return f"\\[\n  {latex}\n\\]"


class TeXRenderer:
    """Fill the ``document.tex`` template; jinja2 runs with LaTeX-safe delimiters."""

    def __init__(self, template_path: Path | None = None) -> None:
        if template_path is None:
            template_path = Path(__file__).resolve().parent.parent / "template" / "document.tex"

        loader = FileSystemLoader(str(template_path.parent))
        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            block_start_string=r"\BLOCK{",
            block_end_string="}",
            variable_start_string=r"\VAR{",
            variable_end_string="}",
            comment_start_string=r"\#{",
            comment_end_string="}",
        )
        self._template_name = template_path.name

    def render(
        self,
        result: CompilationResult,
        *,
        title: str | None = None,
        author: str | None = None,
        date_text: str | None = None,
        show_line_numbers: bool = False,
    ) -> str:
        blocks = [_block(line.kind, line.latex, show_line_numbers) for line in number_lines(result.output_lines)]
        template = self._env.get_template(self._template_name)
        return template.render(
            title=escape_text(title or "Untitled"),
            author=escape_text(author) if author else "",
            date_text=escape_text(date_text or date.today().isoformat()),
            blocks=blocks,
        )
