# topmark:header:start
#
#   project      : TestFeed
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the TestFeed test suite.

This file sets up global fixtures and customizes the logging configuration for test runs.

Notes:
    `yachalk` styling is process-global. Every test starts with colors switched
    off so rendered text can be compared literally; tests that check styling
    switch colors on explicitly with the `colors_on` fixture.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from yachalk import chalk
from yachalk.types import ColorMode as ChalkColorMode

from testfeed.config import logging


@pytest.fixture(autouse=True)
def silence_testfeed_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure TestFeed's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("TESTFEED_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@pytest.fixture(autouse=True)
def plain_chalk() -> Iterator[None]:
    """Disable `yachalk` colors for the duration of a test, then restore them."""
    previous = chalk.get_color_mode()
    chalk.set_color_mode(ChalkColorMode.AllOff)
    yield
    chalk.set_color_mode(previous)


@pytest.fixture
def colors_on() -> None:
    """Enable basic 16-color `yachalk` output for one test."""
    chalk.set_color_mode(ChalkColorMode.Basic16)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure logging for the test suite.

    Sets the logging level to TRACE so detailed output is captured during test
    execution.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)
