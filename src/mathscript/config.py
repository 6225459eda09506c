"""Configuration management for MathScript."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(1, int(raw))
    except ValueError:
        return default


def _path_env(name: str) -> Path | None:
    raw = os.getenv(name)
    return Path(raw).expanduser() if raw else None


@dataclass(frozen=True)
class CompilerSettings:
    """Limits and layout knobs for one compiler instance."""

    max_resolution_passes: int = 20
    max_iterations: int = 64
    max_depth: int = 32
    indent: str = "\\quad "


@dataclass
class Settings:
    """Application settings."""

    log_level: str = os.getenv("MATHSCRIPT_LOG_LEVEL", "INFO").upper()
    log_file: Path | None = _path_env("MATHSCRIPT_LOG_FILE")
    max_resolution_passes: int = _int_env("MATHSCRIPT_MAX_PASSES", 20)
    max_iterations: int = _int_env("MATHSCRIPT_MAX_ITERATIONS", 64)
    max_depth: int = _int_env("MATHSCRIPT_MAX_DEPTH", 32)
    indent: str = os.getenv("MATHSCRIPT_INDENT", "\\quad ")

    def compiler_settings(self) -> CompilerSettings:
        return CompilerSettings(
            max_resolution_passes=self.max_resolution_passes,
            max_iterations=self.max_iterations,
            max_depth=self.max_depth,
            indent=self.indent,
        )


settings = Settings()
