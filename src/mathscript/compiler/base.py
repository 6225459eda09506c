"""Core data model shared by the compiler stages and the renderers."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum

PLACEHOLDER_RE = re.compile(r"__PH(\d+)__")


class SegmentKind(str, Enum):
    TEXT = "TEXT"
    MATH = "MATH"
    SPACE = "SPACE"


@dataclass(slots=True)
class Segment:
    kind: SegmentKind
    content: str


@dataclass(slots=True)
class OutputLine:
    id: str
    latex: str
    original_line_number: int


@dataclass(slots=True)
class LogEntry:
    level: str
    message: str
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


@dataclass(slots=True)
class CompilationResult:
    output_lines: list[OutputLine] = field(default_factory=list)
    log_entries: list[LogEntry] = field(default_factory=list)
    macros: dict[str, str] = field(default_factory=dict)

    @property
    def latex_lines(self) -> list[str]:
        return [line.latex for line in self.output_lines]

    def to_dict(self) -> dict:
        return asdict(self)


class PlaceholderTable:
    """Per-line store of resolved LaTeX fragments addressed by marker."""

    def __init__(self) -> None:
        self._fragments: list[str] = []

    def add(self, latex: str) -> str:
        marker = f"__PH{len(self._fragments)}__"
        self._fragments.append(latex)
        return marker

    def get(self, index: int) -> str | None:
        if 0 <= index < len(self._fragments):
            return self._fragments[index]
        return None

    def __len__(self) -> int:
        return len(self._fragments)

    @property
    def fragments(self) -> list[str]:
        return list(self._fragments)


def contains_placeholder(text: str) -> bool:
    return PLACEHOLDER_RE.search(text) is not None

