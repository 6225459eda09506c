"""MathScript compiler package."""

from .base import CompilationResult, LogEntry, OutputLine, PlaceholderTable, Segment, SegmentKind
from .extractor import ConstructExtractor
from .macros import MacroTable
from .resolver import PlaceholderResolver
from .scopes import ScopeTracker
from .transpiler import MathScriptCompiler, compile_document

__all__ = [
    "CompilationResult",
    "LogEntry",
    "OutputLine",
    "PlaceholderTable",
    "Segment",
    "SegmentKind",
    "ConstructExtractor",
    "MacroTable",
    "PlaceholderResolver",
    "ScopeTracker",
    "MathScriptCompiler",
    "compile_document",
]
