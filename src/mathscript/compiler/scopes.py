"""Structural block headers (``Theorem ... {``) and their closing braces."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .symbols import escape_text

BOLD_SCOPES: tuple[str, ...] = (
    "Problem", "Subproblem", "Section", "Part", "Theorem", "Lemma",
    "Definition", "Corollary", "Proposition", "Case",
)
ITALIC_SCOPES: tuple[str, ...] = ("Proof", "Claim", "Remark", "Example")
_CANONICAL = {keyword.lower(): keyword for keyword in BOLD_SCOPES + ITALIC_SCOPES}

_HEADER_RE = re.compile(
    r"^(" + "|".join(BOLD_SCOPES + ITALIC_SCOPES) + r")\b\s*(.*?)\s*\{\s*$",
    flags=re.IGNORECASE,
)

# (spacer gap, size command) per depth; the last tier covers every deeper level.
_TIERS: tuple[tuple[str, str], ...] = (
    ("1.5em", "\\huge"),
    ("1em", "\\Large"),
    ("0.5em", "\\large"),
    ("0.2em", "\\normalsize"),
)

CLOSE_SPACER = "\\\\[0.5em]"


@dataclass(slots=True)
class ScopeHeader:
    keyword: str
    title: str
    italic: bool = False


@dataclass(slots=True)
class ScopeTracker:
    """Stack of open blocks; depth drives indentation and header size."""

    indent_token: str = "\\quad "
    stack: list[ScopeHeader] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.stack)

    @property
    def indent(self) -> str:
        return self.indent_token * self.depth

    def match_header(self, line: str) -> ScopeHeader | None:
        match = _HEADER_RE.match(line.strip())
        if not match:
            return None
        keyword = _CANONICAL[match.group(1).lower()]
        italic = keyword in ITALIC_SCOPES
        return ScopeHeader(keyword=keyword, title=match.group(2).strip(), italic=italic)

    def is_close(self, line: str) -> bool:
        return line.strip() == "}"

    def spacer(self) -> str:
        gap, _size = _tier(self.depth)
        return f"\\phantom{{.}} \\\\[{gap}]"

    def open(self, header: ScopeHeader) -> str:
        """Render *header* at the current depth, then push it."""
        _gap, size = _tier(self.depth)
        label = escape_text(f"{header.keyword} {header.title}".strip())
        style = "\\textit" if header.italic else "\\textbf"
        latex = f"{self.indent}{{{size} {style}{{\\text{{{label}}}}}}}"
        self.stack.append(header)
        return latex

    def close(self) -> str:
        if self.stack:
            self.stack.pop()
        return CLOSE_SPACER


def _tier(depth: int) -> tuple[str, str]:
    return _TIERS[min(depth, len(_TIERS) - 1)]
