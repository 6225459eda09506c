"""Syntax reference built from the compiler's own tables.

Outputs are produced by running each example through the compiler, so the
reference cannot drift from what ``compile`` actually emits.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mathscript.compiler.scopes import BOLD_SCOPES, ITALIC_SCOPES, ScopeTracker
from mathscript.compiler.symbols import MATH_CONSTANTS, MATH_FUNCTIONS, SYMBOL_MAP
from mathscript.compiler.transpiler import MathScriptCompiler


@dataclass(slots=True)
class SyntaxItem:
    syntax: str
    output: str
    description: str | None = None


@dataclass(slots=True)
class SyntaxCategory:
    title: str
    items: list[SyntaxItem] = field(default_factory=list)


_BASIC_MATH = (
    ("a/b", "Fraction"),
    ("(a+b)/(c+d)", "Complex fraction"),
    ("x^2", "Superscript/power"),
    ("x^(1/n)", "Fractional exponent"),
    ("x_i", "Subscript"),
    ("x_ij", "Multi-char subscript"),
    ("|x|", "Absolute value"),
    ("<1, 2, 3>", "Vector notation"),
)

_CALLS = (
    ("sqrt(x)", "Square root"),
    ("floor(x)", "Floor function"),
    ("ceil(x)", "Ceiling function"),
    ("vec(v)", "Vector arrow"),
    ("factorial(n)", "Factorial"),
    ("choose(n, k)", "Binomial coefficient"),
)

_CALCULUS = (
    ("integral(a -> b)", "Definite integral"),
    ("sum(i=1 -> n)", "Summation"),
    ("lim(x -> 0)", "Limit"),
)

_GREEK = (
    ("alpha, beta, gamma", None),
    ("delta, epsilon, theta", None),
    ("lambda, sigma, omega", None),
    ("pi, phi, psi", None),
    ("mu, nu, rho, tau", None),
    ("Delta, Gamma, Sigma", "Uppercase"),
)

_LOGIC = (
    ("forall", "For all"),
    ("exists", "There exists"),
    ("AND", "Logical and"),
    ("OR", "Logical or"),
    ("NOT", "Logical not"),
    ("=>", "Implies"),
    ("<=>", "If and only if"),
    ("suchthat", "Such that"),
)

_SETS = (
    ("in", "Element of"),
    ("notin", "Not element of"),
    ("subset", "Subset"),
    ("union", "Union"),
    ("intersect", "Intersection"),
    ("{x in A : x > 0}", "Set-builder notation"),
)

_OPERATORS = (
    ("!=", "Not equal"),
    ("<=", "Less or equal"),
    (">=", "Greater or equal"),
    ("+-", "Plus-minus"),
    ("-+", "Minus-plus"),
    ("->", "Maps to / tends to"),
    ("dot", "Centered dot"),
    ("inf", "Infinity"),
    ("QED", "End of proof"),
)


def build_reference(compiler: MathScriptCompiler | None = None) -> list[SyntaxCategory]:
    compiler = compiler or MathScriptCompiler()

    def compiled(items) -> list[SyntaxItem]:
        return [SyntaxItem(syntax, compiler.compile_expression(syntax)[0], description) for syntax, description in items]

    functions = [
        SyntaxItem(f"{name}(x)", compiler.compile_expression(f"{name}(x)")[0], name.capitalize())
        for name in MATH_FUNCTIONS
    ]
    constants = [
        SyntaxItem(name, latex, name.removeprefix("Math.").capitalize())
        for name, latex in MATH_CONSTANTS.items()
        if latex != "sqrt"
    ]
    logic = [SyntaxItem(syntax, SYMBOL_MAP[syntax], description) for syntax, description in _LOGIC]

    return [
        SyntaxCategory("Basic Math", compiled(_BASIC_MATH)),
        SyntaxCategory("Functions", functions + compiled(_CALLS)),
        SyntaxCategory("Calculus", compiled(_CALCULUS)),
        SyntaxCategory("Greek Letters", compiled(_GREEK)),
        SyntaxCategory("Math Constants", constants),
        SyntaxCategory("Logic & Quantifiers", logic),
        SyntaxCategory("Sets", compiled(_SETS)),
        SyntaxCategory("Comparisons & Operators", compiled(_OPERATORS)),
        SyntaxCategory("Document Structure", _structure_items()),
    ]


def _structure_items() -> list[SyntaxItem]:
    items = []
    for keyword in BOLD_SCOPES + ITALIC_SCOPES:
        tracker = ScopeTracker()
        header = tracker.match_header(f"{keyword} {{")
        style = "Italic" if keyword in ITALIC_SCOPES else "Bold"
        items.append(SyntaxItem(f"{keyword} Title {{ ... }}", tracker.open(header), f"{style} block header"))
    items.append(SyntaxItem("#define name replacement", "", "Define a shortcut for later lines"))
    items.append(SyntaxItem("// comment", "", "Ignored line"))
    return items
