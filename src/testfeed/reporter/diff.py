# topmark:header:start
#
#   project      : TestFeed
#   file         : diff.py
#   file_relpath : src/testfeed/reporter/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Expected/actual diff rendering for assertion failures.

Values are serialized to lines (strings as-is, everything else as indented JSON
with one key or element per line) and compared with `difflib.ndiff`, so only
the fields that differ are marked. The output uses the
``- Expected`` / ``+ Received`` layout familiar from JavaScript test runners:
lines only in the expected value are green, lines only in the actual value are
red, shared lines are dimmed.
"""

from __future__ import annotations

import difflib
import json
import pprint
from typing import Any

from yachalk import chalk

NO_VISUAL_DIFFERENCE = "Compared values have no visual difference."


def _serialize(value: Any) -> list[str]:
    if isinstance(value, str):
        return value.splitlines() or [""]
    try:
        text = json.dumps(value, indent=2, sort_keys=True, default=repr)
    except (TypeError, ValueError):
        # Mixed key types or self-referencing containers
        text = pprint.pformat(value, width=1, sort_dicts=True)
    return text.splitlines()


def _type_label(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def render_diff_lines(lines: list[str]) -> str:
    """Colorize ``ndiff`` output lines, dropping its ``?`` hint lines.

    Args:
        lines (list[str]): Lines produced by `difflib.ndiff`.

    Returns:
        str: The colorized lines joined by newlines.
    """

    def process_line(line: str) -> str | None:
        match line[:1]:
            case "-":
                return chalk.green(line)
            case "+":
                return chalk.red(line)
            case "?":
                return None
            case _:
                return chalk.dim(line)

    rendered = (process_line(line) for line in lines)
    return "\n".join(line for line in rendered if line is not None)


def diff_values(expected: Any, actual: Any) -> str:
    """Render a structural diff between ``expected`` and ``actual``.

    Args:
        expected (Any): The value the assertion expected.
        actual (Any): The value the assertion received.

    Returns:
        str: The colorized diff block, or a one-line notice when the values have
            different kinds or render identically.
    """
    expected_type, actual_type = _type_label(expected), _type_label(actual)
    if expected_type != actual_type:
        return (
            "Comparing two different types of values. "
            f"Expected {chalk.green(expected_type)} but received {chalk.red(actual_type)}."
        )

    expected_lines = _serialize(expected)
    actual_lines = _serialize(actual)
    if expected_lines == actual_lines:
        return chalk.dim(NO_VISUAL_DIFFERENCE)

    header = f"{chalk.green('- Expected')}\n{chalk.red('+ Received')}\n"
    return f"{header}\n{render_diff_lines(list(difflib.ndiff(expected_lines, actual_lines)))}"
