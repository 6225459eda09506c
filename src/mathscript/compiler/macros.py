"""User-defined ``#define`` shortcuts."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

DEFINE_PREFIX = "#define"

_DEFINE_RE = re.compile(r"^#define(?:\s+(\S+))?(?:\s+(.*?))?\s*$")


class MacroTable:
    """Ordered shortcut -> replacement mapping scoped to one compilation."""

    def __init__(self) -> None:
        self._macros: dict[str, str] = {}
        self._pattern: re.Pattern[str] | None = None

    def define(self, name: str, replacement: str) -> None:
        # dict assignment keeps the first insertion position on redefinition
        self._macros[name] = replacement
        self._pattern = None

    def parse_definition(self, line: str) -> tuple[str, str] | None:
        """Parse a ``#define shortcut replacement`` line and register it.

        Returns the ``(name, replacement)`` pair, or ``None`` when the line
        has no shortcut or no replacement text.
        """
        match = _DEFINE_RE.match(line.strip())
        if not match or not match.group(1) or not match.group(2):
            return None
        name, replacement = match.group(1), match.group(2).strip()
        self.define(name, replacement)
        logger.debug("Defined macro %r -> %r", name, replacement)
        return name, replacement

    def expand(self, line: str) -> str:
        """Substitute every shortcut on word boundaries in a single pass."""
        if not self._macros:
            return line
        if self._pattern is None:
            alternatives = "|".join(re.escape(name) for name in self._macros)
            self._pattern = re.compile(rf"(?<![A-Za-z0-9_])(?:{alternatives})(?![A-Za-z0-9_])")
        return self._pattern.sub(lambda m: self._macros[m.group(0)], line)

    def as_dict(self) -> dict[str, str]:
        return dict(self._macros)

    def __contains__(self, name: object) -> bool:
        return name in self._macros

    def __len__(self) -> int:
        return len(self._macros)


def is_definition(line: str) -> bool:
    return line.strip().startswith(DEFINE_PREFIX)
