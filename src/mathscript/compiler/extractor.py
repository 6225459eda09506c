"""Recursive construct extraction.

Every recognised construct is replaced in the working line by a placeholder
marker, and the LaTeX it stands for is stored in the shared
:class:`~mathscript.compiler.base.PlaceholderTable`. Construct arguments are
run through the same pipeline before they are wrapped, so a fraction inside
an exponent inside a trig call comes out fully rendered once the markers are
resolved.

The steps run in a fixed order. Later steps see earlier output only as
opaque markers.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from .base import PlaceholderTable
from .scanner import find_abs_pair, find_closing, find_opening, find_top_level, split_top_level
from .segmenter import segment_line
from .symbols import MATH_FUNCTIONS, substitute_set_keywords

logger = logging.getLogger(__name__)

_CALL_GUARD = r"(?<![\\A-Za-z0-9_])"

_FACTORIAL_RE = re.compile(_CALL_GUARD + r"factorial\s*\(")
_BOUNDED_RE = re.compile(_CALL_GUARD + r"(integral|sum|lim)\s*_?\s*\(")
_SQRT_VEC_RE = re.compile(_CALL_GUARD + r"(sqrt|vec)\s*\(")
_FLOOR_CEIL_RE = re.compile(_CALL_GUARD + r"(floor|ceil)\s*\(")
_FUNCTION_RE = re.compile(
    _CALL_GUARD + r"(" + "|".join(sorted(MATH_FUNCTIONS, key=len, reverse=True)) + r")\s*\("
)
_CHOOSE_RE = re.compile(_CALL_GUARD + r"choose\s*\(")
_VECTOR_RE = re.compile(r"<(?![\s=<])([^<>]*?,[^<>]*?)(?<![\s=\-])>")
_PAREN_SUBSCRIPT_RE = re.compile(r"([A-Za-z])_\(")
_BARE_SUBSCRIPT_RE = re.compile(r"([A-Za-z])_([A-Za-z0-9]+)")
_BARE_EXPONENT_RE = re.compile(r"([A-Za-z0-9})])\^(__PH\d+__|[A-Za-z0-9]+)")
_MARKER_EXPONENT_RE = re.compile(r"(__PH\d+__)\^(\{[^{}]+\}|[A-Za-z0-9]+)")

_ATOM_BEFORE_RE = re.compile(r"\\?[A-Za-z0-9_]+$")
_ATOM_AFTER_RE = re.compile(r"\\?[A-Za-z0-9_]+")
_IDENTIFIER_BEFORE_RE = re.compile(r"(?<![A-Za-z0-9_\\])\\?[A-Za-z][A-Za-z0-9']*$")
_MARKER_BEFORE_RE = re.compile(r"__PH\d+__$")
_LATEX_COMMAND_BEFORE_RE = re.compile(r"\\[A-Za-z]+\s*$")
_FACTORIAL_WRAP_RE = re.compile(r"[\s+\-*/^]")

_FUNCTION_TEMPLATES = {
    "sqrt": "\\sqrt{{{}}}",
    "vec": "\\vec{{{}}}",
    "floor": "\\lfloor {} \\rfloor",
    "ceil": "\\lceil {} \\rceil",
}

# Light normalisation for operator bounds; these never recurse.
_BOUND_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"([A-Za-z])_\(([^()]*)\)"), r"\1_{\2}"),
    (re.compile(r"([A-Za-z])_([A-Za-z0-9]+)"), r"\1_{\2}"),
    (re.compile(r"([A-Za-z0-9}])\^\(([^()]*)\)"), r"\1^{\2}"),
    (re.compile(r"([A-Za-z0-9}])\^([A-Za-z0-9]+)"), r"\1^{\2}"),
)


def normalize_bound(text: str) -> str:
    """Brace sub/superscripts and map ``+-``/``-+`` inside an operator bound."""
    text = text.strip()
    for pattern, replacement in _BOUND_RULES:
        text = pattern.sub(replacement, text)
    return text.replace("+-", "\\pm").replace("-+", "\\mp")


class ConstructExtractor:
    """Replace math constructs in a line with placeholder markers."""

    def __init__(
        self,
        table: PlaceholderTable | None = None,
        *,
        max_iterations: int = 64,
        max_depth: int = 32,
    ) -> None:
        self.table = table if table is not None else PlaceholderTable()
        self.max_iterations = max_iterations
        self.max_depth = max_depth
        self._depth = 0
        self._steps: tuple[Callable[[str], str], ...] = (
            self._extract_factorials,
            self._extract_bounded_operators,
            self._extract_sqrt_vec,
            self._extract_floor_ceil,
            self._extract_functions,
            self._extract_vectors,
            self._extract_binomials,
            self._extract_set_builders,
            self._extract_absolute_values,
            self._extract_fractions,
            self._extract_subscripts,
            self._extract_exponents,
        )

    def extract(self, text: str) -> str:
        """Run every extraction step over *text* and return the rewritten line."""
        if self._depth >= self.max_depth:
            logger.debug("Nesting ceiling reached; keeping %r literally", text)
            return text
        self._depth += 1
        try:
            for step in self._steps:
                text = step(text)
        finally:
            self._depth -= 1
        return text

    def _inner(self, text: str, *, prose: bool = True) -> str:
        """Extract and segment a construct argument.

        Script arguments pass ``prose=False`` so that ``x_(ij)`` keeps ``ij``
        as math. Past the nesting ceiling the argument is kept literally.
        """
        text = text.strip()
        if self._depth >= self.max_depth:
            logger.debug("Nesting ceiling reached; keeping %r literally", text)
            return text
        return segment_line(self.extract(text), prose=prose)

    def _placeholder(self, latex: str) -> str:
        return self.table.add(latex)

    # ------------------------------------------------------------------
    # Call-shaped constructs
    # ------------------------------------------------------------------

    def _rewrite_calls(
        self,
        text: str,
        pattern: re.Pattern[str],
        build: Callable[[re.Match[str], str], str | None],
    ) -> str:
        """Replace ``name(...)`` spans matched by *pattern*.

        *pattern* must end on the opening parenthesis. A call whose group never
        closes, or for which *build* returns ``None``, is left as it is.
        """
        pos = 0
        for _ in range(self.max_iterations):
            match = pattern.search(text, pos)
            if match is None:
                break
            close = find_closing(text, match.end())
            if close == -1:
                pos = match.end()
                continue
            latex = build(match, text[match.end() : close])
            if latex is None:
                pos = match.end()
                continue
            marker = self._placeholder(latex)
            text = text[: match.start()] + marker + text[close + 1 :]
            pos = match.start() + len(marker)
        return text

    def _extract_factorials(self, text: str) -> str:
        def build(_match: re.Match[str], arg: str) -> str:
            raw = arg.strip()
            inner = self._inner(raw)
            if _FACTORIAL_WRAP_RE.search(raw):
                return f"({inner})!"
            return f"{inner}!"

        return self._rewrite_calls(text, _FACTORIAL_RE, build)

    def _extract_bounded_operators(self, text: str) -> str:
        def build(match: re.Match[str], arg: str) -> str:
            name = match.group(1)
            command = {"integral": "\\int", "sum": "\\sum", "lim": "\\lim"}[name]
            if not arg.strip():
                return command
            arrow = arg.find("->")
            if arrow == -1:
                return f"{command}_{{{normalize_bound(arg)}}}"
            lower = normalize_bound(arg[:arrow])
            upper = normalize_bound(arg[arrow + 2 :])
            if name == "lim":
                return f"\\lim_{{{lower} \\to {upper}}}"
            return f"{command}_{{{lower}}}^{{{upper}}}"

        return self._rewrite_calls(text, _BOUNDED_RE, build)

    def _extract_sqrt_vec(self, text: str) -> str:
        return self._rewrite_calls(
            text, _SQRT_VEC_RE, lambda m, arg: _FUNCTION_TEMPLATES[m.group(1)].format(self._inner(arg))
        )

    def _extract_floor_ceil(self, text: str) -> str:
        return self._rewrite_calls(
            text, _FLOOR_CEIL_RE, lambda m, arg: _FUNCTION_TEMPLATES[m.group(1)].format(self._inner(arg))
        )

    def _extract_functions(self, text: str) -> str:
        return self._rewrite_calls(
            text, _FUNCTION_RE, lambda m, arg: f"\\{m.group(1)}({self._inner(arg)})"
        )

    def _extract_binomials(self, text: str) -> str:
        def build(_match: re.Match[str], arg: str) -> str | None:
            parts = split_top_level(arg)
            if len(parts) != 2 or not all(part.strip() for part in parts):
                return None
            top, bottom = (self._inner(part) for part in parts)
            return f"\\binom{{{top}}}{{{bottom}}}"

        return self._rewrite_calls(text, _CHOOSE_RE, build)

    # ------------------------------------------------------------------
    # Bracketed constructs
    # ------------------------------------------------------------------

    def _extract_vectors(self, text: str) -> str:
        def replace(match: re.Match[str]) -> str:
            components = [self._inner(part) for part in split_top_level(match.group(1))]
            return self._placeholder("\\langle " + ",\\; ".join(components) + " \\rangle")

        for _ in range(self.max_iterations):
            updated = _VECTOR_RE.sub(replace, text)
            if updated == text:
                break
            text = updated
        return text

    def _extract_set_builders(self, text: str) -> str:
        pos = 0
        for _ in range(self.max_iterations):
            open_index = text.find("{", pos)
            if open_index == -1:
                break
            if _is_group_argument(text, open_index):
                pos = open_index + 1
                continue
            close = find_closing(text, open_index + 1, "{", "}")
            if close == -1:
                text = text[:open_index] + "\\{" + text[open_index + 1 :]
                pos = open_index + 2
                continue
            marker = self._placeholder(self._set_builder(text[open_index + 1 : close]))
            text = text[:open_index] + marker + text[close + 1 :]
            pos = open_index + len(marker)
        return text

    def _set_builder(self, content: str) -> str:
        separator = find_top_level(content, ":")
        if separator == -1:
            separator = find_top_level(content, "|")
        if separator == -1:
            return f"\\{{{self._inner(substitute_set_keywords(content))}\\}}"
        element = self._inner(substitute_set_keywords(content[:separator]))
        condition = self._inner(substitute_set_keywords(content[separator + 1 :]))
        return f"\\{{{element} \\mid {condition}\\}}"

    def _extract_absolute_values(self, text: str) -> str:
        for _ in range(self.max_iterations):
            pair = find_abs_pair(text)
            if pair is None:
                break
            opening, close = pair
            marker = self._placeholder(f"\\left|{self._inner(text[opening + 1 : close])}\\right|")
            text = text[:opening] + marker + text[close + 1 :]
        return text

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _extract_fractions(self, text: str) -> str:
        # Parenthesised operands bind first, then bare ones left to right.
        for grouped in (True, False):
            for _ in range(self.max_iterations):
                found = _find_fraction(text, grouped)
                if found is None:
                    break
                start, end, numerator, denominator = found
                text = text[:start] + self._fraction(numerator, denominator) + text[end:]
        return text

    def _fraction(self, numerator: str, denominator: str) -> str:
        return self._placeholder(f"\\frac{{{self._inner(numerator)}}}{{{self._inner(denominator)}}}")

    def _extract_subscripts(self, text: str) -> str:
        text = self._rewrite_calls(
            text, _PAREN_SUBSCRIPT_RE, lambda m, arg: f"{m.group(1)}_{{{self._inner(arg, prose=False)}}}"
        )
        return _BARE_SUBSCRIPT_RE.sub(lambda m: self._placeholder(f"{m.group(1)}_{{{m.group(2)}}}"), text)

    def _extract_exponents(self, text: str) -> str:
        pos = 0
        for _ in range(self.max_iterations):
            caret = text.find("^(", pos)
            if caret == -1:
                break
            close = find_closing(text, caret + 2)
            base = _exponent_base(text, caret)
            if close == -1 or base is None:
                pos = caret + 2
                continue
            base_start, base_latex = base
            exponent = self._inner(text[caret + 2 : close], prose=False)
            marker = self._placeholder(f"{base_latex}^{{{exponent}}}")
            text = text[:base_start] + marker + text[close + 1 :]
            pos = base_start

        text = _BARE_EXPONENT_RE.sub(lambda m: self._placeholder(f"{m.group(1)}^{{{m.group(2)}}}"), text)

        for _ in range(self.max_iterations):
            match = _MARKER_EXPONENT_RE.search(text)
            if match is None:
                break
            exponent = match.group(2)
            if exponent.startswith("{"):
                exponent = exponent[1:-1]
            marker = self._placeholder(f"{{{match.group(1)}}}^{{{exponent}}}")
            text = text[: match.start()] + marker + text[match.end() :]
        return text


def _is_group_argument(text: str, open_index: int) -> bool:
    """True when the brace at *open_index* belongs to a command, ``_`` or ``^``."""
    before = text[:open_index]
    if not before:
        return False
    if before[-1] in "\\_^":
        return True
    return _LATEX_COMMAND_BEFORE_RE.search(before) is not None


def _find_fraction(text: str, grouped: bool) -> tuple[int, int, str, str] | None:
    """Locate the first ``/`` whose operands both parse.

    With *grouped* set, at least one operand must be parenthesised. Returns
    ``(start, end, numerator, denominator)`` for the span to replace, or
    ``None``.
    """
    slash = text.find("/")
    while slash != -1:
        left = _fraction_operand_before(text, slash)
        right = _fraction_operand_after(text, slash)
        if left and right and (not grouped or left[2] or right[2]):
            return left[0], right[0], left[1], right[1]
        slash = text.find("/", slash + 1)
    return None


def _fraction_operand_before(text: str, slash: int) -> tuple[int, str, bool] | None:
    end = slash
    while end > 0 and text[end - 1].isspace():
        end -= 1
    start = _operand_start(text, end)
    if start is None:
        return None
    # x^2/2: the scripted base is the numerator, not the exponent
    while start > 0 and text[start - 1] in "^_":
        base = _operand_start(text, start - 1)
        if base is None:
            break
        start = base
    return start, _operand_text(text, start, end), text[end - 1] == ")"


def _fraction_operand_after(text: str, slash: int) -> tuple[int, str, bool] | None:
    start = slash + 1
    while start < len(text) and text[start].isspace():
        start += 1
    end = _operand_end(text, start)
    if end is None:
        return None
    grouped = text[start] == "("
    while end < len(text) and text[end] in "^_":
        scripted = _operand_end(text, end + 1)
        if scripted is None:
            break
        end = scripted
    return end, _operand_text(text, start, end), grouped


def _operand_start(text: str, end: int) -> int | None:
    """Start of the atom, call or parenthesised group that ends at *end*."""
    if end == 0:
        return None
    if text[end - 1] == ")":
        opening = find_opening(text, end - 1)
        if opening == -1:
            return None
        identifier = _IDENTIFIER_BEFORE_RE.search(text, 0, opening)
        if identifier is not None:
            # f(x)/(2): keep the call intact in the numerator
            return identifier.start()
        return opening
    atom = _ATOM_BEFORE_RE.search(text, 0, end)
    if atom is None:
        return None
    return atom.start()


def _operand_end(text: str, start: int) -> int | None:
    """End of the atom or parenthesised group that starts at *start*."""
    if start >= len(text):
        return None
    if text[start] == "(":
        close = find_closing(text, start + 1)
        if close == -1:
            return None
        return close + 1
    atom = _ATOM_AFTER_RE.match(text, start)
    if atom is None:
        return None
    end = atom.end()
    if text[end - 1] == "_" and text.startswith("(", end) and _MARKER_BEFORE_RE.search(text, 0, end) is None:
        # x_(n): the group is a subscript, not part of the name
        end -= 1
    if end <= start:
        return None
    return end


def _operand_text(text: str, start: int, end: int) -> str:
    """Operand source, without the parentheses when it is exactly one group."""
    if text[start] == "(" and find_closing(text, start + 1) == end - 1:
        return text[start + 1 : end - 1]
    return text[start:end]


def _exponent_base(text: str, caret: int) -> tuple[int, str] | None:
    """Find the base in front of ``^`` at *caret* as ``(start, latex)``."""
    if caret == 0:
        return None
    marker = _MARKER_BEFORE_RE.search(text, 0, caret)
    if marker is not None:
        return marker.start(), "{" + marker.group(0) + "}"
    previous = text[caret - 1]
    if previous == ")":
        opening = find_opening(text, caret - 1)
        if opening != -1:
            return opening, text[opening:caret]
        return None
    if previous.isalnum() or previous == "}":
        return caret - 1, previous
    return None
