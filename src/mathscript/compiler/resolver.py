"""Substitute placeholder markers back into a rendered line."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .base import PLACEHOLDER_RE, PlaceholderTable, contains_placeholder

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Resolution:
    latex: str
    passes: int
    unresolved: bool


class PlaceholderResolver:
    """Bounded fixpoint substitution; never raises on dangling markers."""

    def __init__(self, table: PlaceholderTable, *, max_passes: int = 20) -> None:
        self.table = table
        self.max_passes = max_passes

    def resolve(self, line: str) -> Resolution:
        passes = 0
        while passes < self.max_passes and contains_placeholder(line):
            passes += 1
            updated = PLACEHOLDER_RE.sub(self._lookup, line)
            if updated == line:
                break
            line = updated
        unresolved = contains_placeholder(line)
        if unresolved:
            logger.warning("Placeholder markers left after %d passes: %s", passes, line)
        return Resolution(latex=line, passes=passes, unresolved=unresolved)

    def _lookup(self, match) -> str:
        fragment = self.table.get(int(match.group(1)))
        return match.group(0) if fragment is None else fragment
