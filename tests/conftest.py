"""Shared pytest configuration for the ytd-size test suite.

Guidelines
----------
* No internet access in any test.
* yt-dlp must be mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_ytd_size_logger() -> Iterator[None]:
    """Undo handlers installed by ``configure_logging`` between tests."""
    yield
    logger = logging.getLogger("ytd_size")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
