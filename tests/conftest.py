"""Pytest configuration for tests."""
from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers ``init_logging`` attached during a CLI test."""
    yield
    package_logger = logging.getLogger("mathscript")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
