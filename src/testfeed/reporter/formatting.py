# topmark:header:start
#
#   project      : TestFeed
#   file         : formatting.py
#   file_relpath : src/testfeed/reporter/formatting.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure rendering helpers used by the reporter.

Nothing in this module keeps state: every function maps its inputs to text
(colorized with `yachalk`). The reporter decides *when* to emit the text; these
helpers only decide *what* it looks like.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from yachalk import chalk

from testfeed.constants import CANCELLED_BY_PARENT, TEST_FAILURE_CODE
from testfeed.events.model import ErrorInfo
from testfeed.reporter.diff import diff_values

if TYPE_CHECKING:
    from testfeed.events.model import TestStart
    from testfeed.reporter.diagnostics import GlobalDiagnostics

CANCELLED_TITLE = "Test cancelled by parent error"
CANCELLED_EXPLANATION = (
    "    This test was cancelled due to an error in its parent suite/it or test/it, "
    "or in one of its before/beforeEach"
)
MISSING_ERROR_TITLE = "Test failed without error details"


def indent(text: str, spaces: int) -> str:
    """Prefix every line of ``text`` with ``spaces`` spaces, the first line included.

    Blank lines (and the position after a trailing newline) receive the padding
    too, so they become whitespace-only rather than being dropped.

    Args:
        text (str): Possibly multi-line text.
        spaces (int): Number of spaces to prepend.

    Returns:
        str: The indented text.
    """
    padding = " " * spaces
    return "\n".join(padding + line for line in text.split("\n"))


def _unwrap(error: ErrorInfo) -> ErrorInfo:
    # node:test wraps every failure in ERR_TEST_FAILURE; the interesting error is its cause
    if error.code == TEST_FAILURE_CODE and error.cause is not None:
        return error.cause
    return error


def _default_format(error: ErrorInfo) -> str:
    if error.stack:
        return error.stack
    if error.message:
        return f"{error.name}: {error.message}"
    return error.name


def _split_title(error: ErrorInfo, representation: str) -> tuple[str, str]:
    if not error.message:
        title, _, stack = representation.partition("\n")
        return title, stack.lstrip("\r\n")

    index = representation.find(error.message)
    if index == -1:
        return error.message, error.stack or ""

    end = index + len(error.message)
    return representation[:end], representation[end:].lstrip("\r\n")


def get_error_diff(error: ErrorInfo) -> str | None:
    """Return the expected/actual diff for ``error``, or None when not applicable.

    Args:
        error (ErrorInfo): The (already unwrapped) error.

    Returns:
        str | None: The rendered diff, or None if the error carries no
            expected/actual pair or opts out with ``show_diff=False``.
    """
    if not error.is_diffable:
        return None
    if error.show_diff is False:
        return None
    return diff_values(error.expected, error.actual)


def format_error(error: ErrorInfo | BaseException | None) -> str:
    """Render an error for the failure summary.

    Args:
        error (ErrorInfo | BaseException | None): The failure payload. Live
            exceptions are converted with `ErrorInfo.from_exception`.

    Returns:
        str: A red title, an optional diff block, and a gray stack.
    """
    if error is None:
        return chalk.red(MISSING_ERROR_TITLE)
    if isinstance(error, BaseException):
        error = ErrorInfo.from_exception(error)

    error = _unwrap(error)
    if error.failure_type == CANCELLED_BY_PARENT:
        return chalk.red(CANCELLED_TITLE) + "\n" + chalk.gray(CANCELLED_EXPLANATION)

    title, stack = _split_title(error, _default_format(error))
    parts: list[str] = [chalk.red(title)]

    diff_result = get_error_diff(error)
    if diff_result is not None:
        parts.append(diff_result)
        if stack:
            parts.append("")

    if stack:
        parts.append(chalk.gray(stack))

    return "\n".join(parts)


def _count(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def format_global_diagnostics(diagnostics: GlobalDiagnostics) -> str:
    """Render the run totals.

    Always renders ``"<pass> passing (<ms>ms)"``; the ``failing``, ``skipped``,
    ``todo`` and ``cancelled`` lines follow, in that order, only when their
    count is strictly positive.

    Args:
        diagnostics (GlobalDiagnostics): Folded run counters.

    Returns:
        str: The colorized summary (no trailing newline).
    """
    result = chalk.green(f"{_count(diagnostics.pass_)} passing") + chalk.gray(
        f" ({math.floor(diagnostics.duration_ms)}ms)"
    )

    if diagnostics.fail > 0:
        result += "\n" + chalk.red(f"{_count(diagnostics.fail)} failing")
    if diagnostics.skipped > 0:
        result += "\n" + chalk.cyan(f"{_count(diagnostics.skipped)} skipped")
    if diagnostics.todo > 0:
        result += "\n" + chalk.blue(f"{_count(diagnostics.todo)} todo")
    if diagnostics.cancelled > 0:
        result += "\n" + chalk.gray(f"{_count(diagnostics.cancelled)} cancelled")

    return result


@dataclass(frozen=True)
class ParentStack:
    """Lazy, restartable breadcrumb rendering of an ancestor chain.

    Iterating yields text fragments: each ancestor on its own line, indented by
    ``2 * (nesting + 1)`` spaces. ``prefix`` (e.g. ``"3) "``) is written before
    the first ancestor; later ancestors get matching extra padding so the names
    stay aligned. ``suffix`` (e.g. ``":"``) closes the last line, followed by a
    newline. Each iteration starts over from the first ancestor.
    """

    parents: Sequence[TestStart]
    prefix: str = ""
    suffix: str = ""

    def __iter__(self) -> Iterator[str]:
        prefix_length = len(self.prefix)
        for i, parent in enumerate(self.parents):
            if i != 0:
                yield "\n"
            yield " " * ((parent.nesting + 1) * 2 + (prefix_length if i else 0))
            if i == 0 and self.prefix:
                yield self.prefix
            yield parent.name
        yield self.suffix + "\n"

    def render(self) -> str:
        """Return the whole breadcrumb as one string."""
        return "".join(self)


def print_parent_stack(
    parent_stack: Sequence[TestStart],
    prefix: str = "",
    suffix: str = "",
) -> ParentStack:
    """Return the breadcrumb fragments for ``parent_stack``.

    Args:
        parent_stack (Sequence[TestStart]): Ancestors, outermost first.
        prefix (str): Text written before the first ancestor's name.
        suffix (str): Text appended after the last ancestor's name.

    Returns:
        ParentStack: An iterable of fragments that can be consumed repeatedly.
    """
    return ParentStack(tuple(parent_stack), prefix, suffix)
