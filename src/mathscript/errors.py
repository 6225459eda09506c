"""Exceptions raised outside the compiler core."""

from __future__ import annotations


class MathScriptError(Exception):
    """Base class for MathScript errors."""


class UnsupportedOutputError(MathScriptError):
    """The requested export format is not known."""

    def __init__(self, path: str, supported: tuple[str, ...]) -> None:
        self.path = path
        self.supported = supported
        super().__init__(f"Unsupported output type: {path} (expected one of {', '.join(supported)})")
