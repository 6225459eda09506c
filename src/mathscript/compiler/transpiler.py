"""Compile a MathScript document into display-mode LaTeX lines."""

from __future__ import annotations

import logging

from mathscript.config import CompilerSettings

from .base import CompilationResult, LogEntry, OutputLine, PlaceholderTable
from .extractor import ConstructExtractor
from .macros import MacroTable, is_definition
from .resolver import PlaceholderResolver
from .scopes import ScopeTracker
from .segmenter import segment_line
from .symbols import apply_symbol_pass, escape_text, substitute_constants

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "//"

_LOG_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class _Compilation:
    """Mutable state for a single ``compile`` call."""

    def __init__(self, settings: CompilerSettings) -> None:
        self.settings = settings
        self.macros = MacroTable()
        self.scopes = ScopeTracker(indent_token=settings.indent)
        self.result = CompilationResult()

    def log(self, level: str, message: str) -> None:
        logger.log(_LOG_LEVELS[level], message)
        self.result.log_entries.append(LogEntry(level=level, message=message))

    def emit(self, line_id: str, latex: str, line_number: int) -> None:
        self.result.output_lines.append(OutputLine(id=line_id, latex=latex, original_line_number=line_number))


class MathScriptCompiler:
    """Line-oriented MathScript to LaTeX transpiler.

    The compiler itself holds only settings; every call to :meth:`compile`
    builds its own macro table, scope stack and placeholder tables, so one
    instance can be shared between threads.
    """

    def __init__(self, settings: CompilerSettings | None = None) -> None:
        self.settings = settings or CompilerSettings()

    def compile(self, source: str) -> CompilationResult:
        state = _Compilation(self.settings)
        lines = [line.rstrip("\r") for line in source.split("\n")]
        state.log("info", f"Compiling {len(lines)} lines")

        for index, raw in enumerate(lines):
            stripped = raw.strip()
            if not stripped or stripped.startswith(COMMENT_PREFIX):
                continue
            if is_definition(stripped):
                self._define(state, stripped, index)
                continue
            try:
                self._compile_line(state, stripped, index)
            except Exception as exc:
                logger.exception("Failed to compile line %d", index + 1)
                state.log("error", f"Line {index + 1}: {exc}")
                state.emit(f"line-{index}", f"{state.scopes.indent}\\text{{{escape_text(stripped)}}}", index + 1)

        if state.scopes.depth:
            state.log("warning", f"{state.scopes.depth} block(s) left open at end of document")
        state.result.macros = state.macros.as_dict()
        state.log("success", f"Compiled {len(state.result.output_lines)} output lines")
        return state.result

    def _define(self, state: _Compilation, line: str, index: int) -> None:
        parsed = state.macros.parse_definition(line)
        if parsed is None:
            state.log("warning", f"Line {index + 1}: ignoring malformed macro definition")
            return
        name, replacement = parsed
        state.log("info", f"Defined macro {name} -> {replacement}")

    def _compile_line(self, state: _Compilation, line: str, index: int) -> None:
        scopes = state.scopes
        header = scopes.match_header(line)
        if header is not None:
            if index > 0:
                state.emit(f"spacer-{index}", scopes.spacer(), index + 1)
            state.emit(f"line-{index}", scopes.open(header), index + 1)
            return
        if scopes.is_close(line):
            state.emit(f"line-{index}", scopes.close(), index + 1)
            return

        latex, unresolved = self.compile_expression(state.macros.expand(line))
        if unresolved:
            state.log("warning", f"Line {index + 1}: unresolved placeholders remain")
        state.emit(f"line-{index}", scopes.indent + latex, index + 1)

    def compile_expression(self, line: str) -> tuple[str, bool]:
        """Run one content line through extraction, segmentation and resolution.

        Returns the LaTeX and whether any placeholder marker was left over.
        """
        table = PlaceholderTable()
        extractor = ConstructExtractor(
            table,
            max_iterations=self.settings.max_iterations,
            max_depth=self.settings.max_depth,
        )
        working = extractor.extract(substitute_constants(line))
        segmented = segment_line(working)
        resolution = PlaceholderResolver(table, max_passes=self.settings.max_resolution_passes).resolve(segmented)
        return apply_symbol_pass(resolution.latex), resolution.unresolved


def compile_document(text: str, settings: CompilerSettings | None = None) -> CompilationResult:
    return MathScriptCompiler(settings).compile(text)
