# topmark:header:start
#
#   project      : TestFeed
#   file         : errors.py
#   file_relpath : src/testfeed/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the TestFeed library (no Click dependency).

The CLI translates these into `testfeed.cli.errors` exceptions carrying
exit codes; API callers can catch them directly.
"""

from __future__ import annotations


class TestfeedCoreError(Exception):
    """Base class for all library-level TestFeed errors."""

    __test__ = False


class EventDecodeError(TestfeedCoreError):
    """Raised when a wire event cannot be decoded.

    Attributes:
        line_number (int | None): 1-based input line of the offending event, when known.
    """

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class ReporterProtocolError(TestfeedCoreError):
    """Raised when the event stream breaks the start/pass/fail bracket structure."""
