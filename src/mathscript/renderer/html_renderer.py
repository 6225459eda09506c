"""Render a CompilationResult into a self-contained, printable HTML page."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from mathscript.compiler.base import CompilationResult, OutputLine
from mathscript.compiler.scopes import CLOSE_SPACER

KATEX_VERSION = "0.16.9"

_HEADER_RE = re.compile(r"^(?:\\quad )*\{\\(?:huge|Large|large|normalsize) \\text(?:bf|it)\{")


@dataclass(slots=True)
class RenderedLine:
    id: str
    latex: str
    kind: str
    number: int | None


def classify_line(line: OutputLine) -> str:
    """Return ``spacer``, ``header``, ``empty`` or ``math`` for an output line."""
    if line.id.startswith("spacer-") or line.latex == CLOSE_SPACER:
        return "spacer"
    if not line.latex.strip():
        return "empty"
    if _HEADER_RE.match(line.latex):
        return "header"
    return "math"


def number_lines(lines: list[OutputLine]) -> list[RenderedLine]:
    """Attach a running number to every ``math`` line."""
    rendered: list[RenderedLine] = []
    counter = 0
    for line in lines:
        kind = classify_line(line)
        number = None
        if kind == "math":
            counter += 1
            number = counter
        rendered.append(RenderedLine(id=line.id, latex=line.latex, kind=kind, number=number))
    return rendered


class HTMLRenderer:
    """Render compiled lines through the KaTeX export template."""

    def __init__(self, template_path: Path | None = None) -> None:
        if template_path is None:
            template_path = Path(__file__).resolve().parent.parent / "template" / "export.html"

        loader = FileSystemLoader(str(template_path.parent))
        self._env = Environment(loader=loader, autoescape=True, trim_blocks=True, lstrip_blocks=True)
        self._template_name = template_path.name

    def render(
        self,
        result: CompilationResult,
        *,
        title: str | None = None,
        author: str | None = None,
        date_text: str | None = None,
        show_line_numbers: bool = False,
        dark_mode: bool = False,
    ) -> str:
        template = self._env.get_template(self._template_name)
        return template.render(
            page_title=title or "Untitled",
            author=author,
            date_text=date_text or date.today().isoformat(),
            lines=[asdict(line) for line in number_lines(result.output_lines)],
            show_line_numbers=show_line_numbers,
            dark_mode=dark_mode,
            katex_version=KATEX_VERSION,
        )
