"""Logging utilities for MathScript."""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from mathscript.config import settings

logger = logging.getLogger("mathscript")

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def init_logging(level: str | None = None, log_file: Path | None = None) -> None:
    """Initialize logging with a console handler and an optional rotating file."""
    logger.setLevel((level or settings.log_level).upper())
    if logger.handlers:
        return

    formatter = logging.Formatter(_FORMAT)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = log_file or settings.log_file
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=1_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
