"""Split a residual line into prose and math and regroup the prose."""

from __future__ import annotations

import re

from .base import Segment, SegmentKind
from .symbols import MATH_KEYWORDS, SYMBOL_MAP, TEXT_STOP_WORDS, escape_text

_TOKEN_RE = re.compile(r"([=<>!+\-*/()\[\]{}|.,;:]+|\s+)")
_PUNCTUATION_RE = re.compile(r"[=<>!+\-*/()\[\]{}|.,;:]+")
_PRIMED_RE = re.compile(r"[A-Za-z]'+")
_WORD_RE = re.compile(r"[A-Za-z]{2,}")

_ARTICLES = frozenset({"a", "A", "I"})
_OPENERS = ("(", "[", "{")
_CLOSERS = (")", "]", "}", ",", ".", ";", ":", "!", "?", "\\}")
_MATH_ESCAPES = str.maketrans({"%": "\\%", "#": "\\#", "&": "\\&", "$": "\\$"})

# Operators whose LaTeX is a control word; spaced so a following letter cannot run into it.
_OPERATOR_COMMANDS = frozenset(
    latex for token, latex in SYMBOL_MAP.items() if _PUNCTUATION_RE.fullmatch(token)
)


def tokenize(line: str) -> list[str]:
    return [token for token in _TOKEN_RE.split(line) if token]


def classify(tokens: list[str]) -> list[Segment]:
    """Assign a :class:`SegmentKind` to every token.

    MATH tokens found in the symbol table come back already substituted.
    """
    segments: list[Segment] = []
    for index, token in enumerate(tokens):
        segment = _classify_token(token, _next_word(tokens, index))
        if segment.kind is SegmentKind.MATH and not token.startswith("\\"):
            segment.content = segment.content.translate(_MATH_ESCAPES)
        segments.append(segment)
    return segments


def _classify_token(token: str, next_word: str | None) -> Segment:
    if token.isspace():
        return Segment(SegmentKind.SPACE, token)
    if token.startswith("\\") or "_" in token or "^" in token:
        return Segment(SegmentKind.MATH, token)
    if _PUNCTUATION_RE.fullmatch(token):
        return Segment(SegmentKind.MATH, SYMBOL_MAP.get(token, token))
    if token[0].isdigit():
        return Segment(SegmentKind.MATH, token)
    if token in MATH_KEYWORDS:
        return Segment(SegmentKind.MATH, SYMBOL_MAP.get(token, token))
    if token.lower() in TEXT_STOP_WORDS:
        return Segment(SegmentKind.TEXT, token)
    if token in _ARTICLES:
        if next_word is not None and _WORD_RE.fullmatch(next_word) and next_word not in MATH_KEYWORDS:
            return Segment(SegmentKind.TEXT, token)
        return Segment(SegmentKind.MATH, token)
    if _PRIMED_RE.fullmatch(token):
        return Segment(SegmentKind.MATH, token)
    if len(token) > 1:
        return Segment(SegmentKind.TEXT, token)
    return Segment(SegmentKind.MATH, token)


def _next_word(tokens: list[str], index: int) -> str | None:
    for token in tokens[index + 1 :]:
        if not token.isspace():
            return token
    return None


def merge_text_runs(segments: list[Segment]) -> list[Segment]:
    """Collapse TEXT tokens separated only by spaces into one TEXT segment."""
    merged: list[Segment] = []
    i = 0
    while i < len(segments):
        segment = segments[i]
        if segment.kind is not SegmentKind.TEXT:
            merged.append(segment)
            i += 1
            continue
        words = [segment.content]
        j = i + 1
        while True:
            k = j
            while k < len(segments) and segments[k].kind is SegmentKind.SPACE:
                k += 1
            if k > j and k < len(segments) and segments[k].kind is SegmentKind.TEXT:
                words.append(segments[k].content)
                j = k + 1
                continue
            break
        merged.append(Segment(SegmentKind.TEXT, " ".join(words)))
        i = j
    return merged


def render(segments: list[Segment]) -> str:
    parts: list[str] = []
    for index, segment in enumerate(segments):
        if segment.kind is SegmentKind.MATH:
            parts.append(_spaced_operator(segments, index))
            continue
        before = _neighbour(segments, index, -1)
        after = _neighbour(segments, index, 1)
        if segment.kind is SegmentKind.SPACE:
            adjacent_before = segments[index - 1] if index > 0 else None
            adjacent_after = segments[index + 1] if index + 1 < len(segments) else None
            if _is_math(adjacent_before) and _is_math(adjacent_after):
                parts.append(" ")
            continue
        prefix = "\\ " if _is_math(before) and not before.content.endswith(_OPENERS) else ""
        suffix = "\\ " if _is_math(after) and not after.content.startswith(_CLOSERS) else ""
        parts.append(f"{prefix}\\text{{{escape_text(segment.content)}}}{suffix}")
    return "".join(parts)


def _spaced_operator(segments: list[Segment], index: int) -> str:
    content = segments[index].content
    if content not in _OPERATOR_COMMANDS:
        return content
    if index > 0 and _is_math(segments[index - 1]):
        content = " " + content
    if index + 1 < len(segments) and _is_math(segments[index + 1]):
        content += " "
    return content


def _neighbour(segments: list[Segment], index: int, step: int) -> Segment | None:
    index += step
    while 0 <= index < len(segments):
        if segments[index].kind is not SegmentKind.SPACE:
            return segments[index]
        index += step
    return None


def _is_math(segment: Segment | None) -> bool:
    return segment is not None and segment.kind is SegmentKind.MATH


def segment_line(line: str, *, prose: bool = True) -> str:
    """Classify, merge and render *line* in one go.

    With ``prose=False`` every word stays math; keywords are still substituted.
    """
    segments = classify(tokenize(line))
    if not prose:
        segments = [_as_math(segment) for segment in segments]
    return render(merge_text_runs(segments))


def _as_math(segment: Segment) -> Segment:
    if segment.kind is not SegmentKind.TEXT:
        return segment
    return Segment(SegmentKind.MATH, segment.content.translate(_MATH_ESCAPES))
