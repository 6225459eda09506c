"""Balanced-delimiter scanning used by every construct extractor."""

from __future__ import annotations

_PAIRS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {close: open_ for open_, close in _PAIRS.items()}


def find_closing(text: str, start: int, opener: str = "(", closer: str = ")") -> int:
    """Return the index of the delimiter closing the one just before *start*.

    *start* is the index immediately after the opening delimiter. Nested
    same-kind pairs are counted. Returns ``-1`` when the text ends before the
    depth returns to zero. With identical delimiters (``|``) nesting cannot be
    told apart, so the next occurrence closes the span.
    """
    if opener == closer:
        return text.find(closer, start)

    depth = 1
    for i in range(start, len(text)):
        ch = text[i]
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
    return -1


def find_opening(text: str, close_index: int, opener: str = "(", closer: str = ")") -> int:
    """Backward counterpart of :func:`find_closing`.

    *close_index* points at a closing delimiter; the index of its matching
    opener is returned, or ``-1``.
    """
    if close_index < 0 or close_index >= len(text) or text[close_index] != closer:
        return -1

    depth = 1
    for i in range(close_index - 1, -1, -1):
        ch = text[i]
        if ch == closer:
            depth += 1
        elif ch == opener:
            depth -= 1
            if depth == 0:
                return i
    return -1


def read_group(text: str, open_index: int, opener: str = "(", closer: str = ")") -> tuple[str, int] | None:
    """Read the group opened at *open_index*.

    Returns ``(content, end)`` where *end* is the index just past the closing
    delimiter, or ``None`` if the group never closes.
    """
    if open_index >= len(text) or text[open_index] != opener:
        return None
    close = find_closing(text, open_index + 1, opener, closer)
    if close == -1:
        return None
    return text[open_index + 1 : close], close + 1


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split on *separator* only where no bracket of any kind is open."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in text:
        if ch in _PAIRS:
            depth += 1
        elif ch in _CLOSERS and depth > 0:
            depth -= 1
        if ch == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return parts


def find_top_level(text: str, target: str) -> int:
    """Index of the first *target* character outside any bracket, or ``-1``."""
    depth = 0
    for i, ch in enumerate(text):
        if ch in _PAIRS:
            depth += 1
        elif ch in _CLOSERS and depth > 0:
            depth -= 1
        elif ch == target and depth == 0:
            return i
    return -1


_PIPE_OPENERS = frozenset("=<>!+-*/,;:([{")


def find_abs_pair(text: str) -> tuple[int, int] | None:
    """Return the innermost ``|...|`` pair as ``(open, close)`` indices.

    A pipe may open at the start of the text, after whitespace, an operator,
    an opening bracket or another opening pipe; any other pipe closes. A pipe
    that may open but is not followed by an operand closes the innermost open
    pipe, unless it directly follows it. Returns ``None`` when the pipes do
    not pair up, in which case they should be left literal.
    """
    stack: list[int] = []
    first: tuple[int, int] | None = None
    for i, ch in enumerate(text):
        if ch != "|":
            continue
        prev = text[i - 1] if i > 0 else ""
        nxt = text[i + 1] if i + 1 < len(text) else ""
        after_open = bool(stack) and stack[-1] == i - 1
        can_open = not prev or prev.isspace() or prev in _PIPE_OPENERS or after_open
        starts_operand = bool(nxt) and (nxt.isalnum() or nxt in "(\\_-")
        if can_open and (starts_operand or not stack or after_open):
            stack.append(i)
        elif stack:
            opening = stack.pop()
            if first is None:
                first = (opening, i)
        else:
            return None
    if stack:
        return None
    return first
