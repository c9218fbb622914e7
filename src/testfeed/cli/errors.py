# topmark:header:start
#
#   project      : TestFeed
#   file         : errors.py
#   file_relpath : src/testfeed/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the TestFeed CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Library errors (`testfeed.core.errors`) are
    translated into these at the command boundary.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from testfeed.core.exit_codes import ExitCode


class TestfeedError(click.ClickException):
    """Base class for all TestFeed CLI errors."""

    __test__ = False

    exit_code = ExitCode.UNEXPECTED_ERROR

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class TestfeedUsageError(TestfeedError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class TestfeedConfigError(TestfeedError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class TestfeedFileNotFoundError(TestfeedError):
    """Error when the events file does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class TestfeedIOError(TestfeedError):
    """Error for I/O errors reading the event stream."""

    exit_code = ExitCode.IO_ERROR


class TestfeedDataError(TestfeedError):
    """Error for malformed event input (invalid JSON or event shape)."""

    exit_code = ExitCode.DATA_ERROR


class TestfeedProtocolError(TestfeedError):
    """Error when the event stream breaks the start/pass/fail nesting contract."""

    exit_code = ExitCode.PROTOCOL_ERROR
