"""Static symbol tables and the substitution passes built on them."""

from __future__ import annotations

import re

GREEK_LETTERS: dict[str, str] = {
    # Lowercase
    "alpha": "\\alpha",
    "beta": "\\beta",
    "gamma": "\\gamma",
    "delta": "\\delta",
    "epsilon": "\\epsilon",
    "zeta": "\\zeta",
    "eta": "\\eta",
    "theta": "\\theta",
    "iota": "\\iota",
    "kappa": "\\kappa",
    "lambda": "\\lambda",
    "mu": "\\mu",
    "nu": "\\nu",
    "xi": "\\xi",
    "pi": "\\pi",
    "rho": "\\rho",
    "sigma": "\\sigma",
    "tau": "\\tau",
    "upsilon": "\\upsilon",
    "phi": "\\phi",
    "chi": "\\chi",
    "psi": "\\psi",
    "omega": "\\omega",
    # Uppercase
    "Delta": "\\Delta",
    "Gamma": "\\Gamma",
    "Theta": "\\Theta",
    "Lambda": "\\Lambda",
    "Sigma": "\\Sigma",
    "Omega": "\\Omega",
    "Pi": "\\Pi",
    "Phi": "\\Phi",
    "Psi": "\\Psi",
    "Xi": "\\Xi",
}

# ``Math.*`` package constants, substituted before construct extraction.
MATH_CONSTANTS: dict[str, str] = {
    "Math.pi": "\\pi",
    "Math.e": "e",
    "Math.inf": "\\infty",
    "Math.reals": "\\mathbb{R}",
    "Math.naturals": "\\mathbb{N}",
    "Math.integers": "\\mathbb{Z}",
    "Math.rationals": "\\mathbb{Q}",
    "Math.complex": "\\mathbb{C}",
    "Math.sqrt": "sqrt",
}

MATH_FUNCTIONS: tuple[str, ...] = (
    "sin", "cos", "tan", "sec", "csc", "cot",
    "arcsin", "arccos", "arctan",
    "sinh", "cosh", "tanh",
    "log", "ln", "exp",
)

# Keywords and operators recognised by the segmenter.
SYMBOL_MAP: dict[str, str] = {
    # Quantifiers & logic
    "exists": "\\exists",
    "forall": "\\forall",
    "in": "\\in",
    "notin": "\\notin",
    "subset": "\\subset",
    "union": "\\cup",
    "intersect": "\\cap",
    "implies": "\\implies",
    "iff": "\\iff",
    "suchthat": "\\text{ s.t. }",
    "AND": "\\land",
    "OR": "\\lor",
    "NOT": "\\neg",
    # Operators
    "->": "\\to",
    "=>": "\\implies",
    "<=>": "\\iff",
    "!=": "\\neq",
    "<=": "\\le",
    ">=": "\\ge",
    "+-": "\\pm",
    "-+": "\\mp",
    "|": "\\mid",
    "dot": "\\cdot",
    # Calculus and friends used without an argument list
    "integral": "\\int",
    "sum": "\\sum",
    "lim": "\\lim",
    "sup": "\\sup",
    "max": "\\max",
    "min": "\\min",
    "det": "\\det",
    # Special
    "inf": "\\infty",
    "QED": "\\quad \\blacksquare",
    **GREEK_LETTERS,
    **{fn: f"\\{fn}" for fn in MATH_FUNCTIONS},
}

# Always math, even though they have no LaTeX substitute.
MATH_KEYWORDS: frozenset[str] = frozenset(
    {"dx", "dy", "dz", "dt", "du", "dv", "Math"} | set(SYMBOL_MAP)
)

# Prose that is always rendered as text.
TEXT_STOP_WORDS: frozenset[str] = frozenset(
    {
        "is", "are", "was", "be", "the", "an", "of", "and", "or", "if", "then", "else",
        "for", "with", "to", "on", "at", "by", "as", "let", "assume", "suppose", "since",
        "because", "therefore", "thus", "hence", "so", "we", "have", "has", "show", "prove",
        "find", "calculate", "compute", "given", "where", "when", "that", "this", "it",
        "continuous", "differentiable", "integrable", "bounded", "converges", "diverges",
        "function", "set", "sequence", "series", "exist", "some", "all", "every", "each",
        "any", "there", "which", "such", "note", "consider", "claim", "clearly", "recall",
    }
)

# Keywords replaced inside set-builder braces, before the segmenter runs.
SET_KEYWORDS: dict[str, str] = {
    "in": "\\in",
    "notin": "\\notin",
    "subset": "\\subset",
    "union": "\\cup",
    "intersect": "\\cap",
}

# Order matters: longer operators before their prefixes.
_POST_OPERATORS: dict[str, str] = {
    "<=>": "\\iff",
    "=>": "\\implies",
    "->": "\\to",
    "<=": "\\le",
    ">=": "\\ge",
    "!=": "\\neq",
    "+-": "\\pm",
    "-+": "\\mp",
}

_POST_WORDS: dict[str, str] = {
    **GREEK_LETTERS,
    "inf": "\\infty",
    "forall": "\\forall",
    "exists": "\\exists",
    "in": "\\in",
    "notin": "\\notin",
    "subset": "\\subset",
    "union": "\\cup",
    "intersect": "\\cap",
}

_CONSTANT_RE = re.compile(
    r"(?<![A-Za-z0-9_.])(" + "|".join(re.escape(k) for k in sorted(MATH_CONSTANTS, key=len, reverse=True)) + r")(?![A-Za-z0-9_])"
)
_POST_WORD_RE = re.compile(
    r"(?<![\\A-Za-z0-9])(" + "|".join(sorted(_POST_WORDS, key=len, reverse=True)) + r")(?![A-Za-z0-9])"
)
_POST_OPERATOR_RE = re.compile("|".join(re.escape(op) for op in _POST_OPERATORS))
_SET_KEYWORD_RE = re.compile(r"(?<![\\A-Za-z0-9_])(" + "|".join(SET_KEYWORDS) + r")(?![A-Za-z0-9_])")
_TEXT_SPAN_RE = re.compile(r"(\\text\{(?:\\.|[^{}\\])*\})")
_TEXT_ESCAPES = {"\\": "\\textbackslash ", "{": "\\{", "}": "\\}", "#": "\\#", "$": "\\$", "%": "\\%", "&": "\\&", "_": "\\_"}


def substitute_constants(line: str) -> str:
    """Replace ``Math.*`` names with their LaTeX form."""
    return _CONSTANT_RE.sub(lambda m: MATH_CONSTANTS[m.group(1)], line)


def substitute_set_keywords(text: str) -> str:
    return _SET_KEYWORD_RE.sub(lambda m: SET_KEYWORDS[m.group(1)], text)


def apply_symbol_pass(latex: str) -> str:
    """Substitute Greek names and bare operators in resolved LaTeX.

    ``\\text{...}`` spans are left untouched, and a name already preceded by a
    backslash is not escaped again, so the pass is idempotent.
    """
    parts = _TEXT_SPAN_RE.split(latex)
    for idx in range(0, len(parts), 2):
        parts[idx] = _substitute_math_symbols(parts[idx])
    return "".join(parts)


def _substitute_math_symbols(text: str) -> str:
    text = _POST_WORD_RE.sub(lambda m: _POST_WORDS[m.group(1)], text)
    return _POST_OPERATOR_RE.sub(_operator_command, text)


def _operator_command(match: re.Match[str]) -> str:
    command = _POST_OPERATORS[match.group(0)]
    # x->y: the command must not run into the next letter
    if match.string[match.end() : match.end() + 1].isalpha():
        command += " "
    return command


def escape_text(text: str) -> str:
    """Escape characters that are special inside ``\\text{...}``."""
    return "".join(_TEXT_ESCAPES.get(ch, ch) for ch in text)
