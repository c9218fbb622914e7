# topmark:header:start
#
#   project      : TestFeed
#   file         : color.py
#   file_relpath : src/testfeed/cli_shared/color.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-independent color helpers for TestFeed.

This module provides:

- The `ColorMode` enum (user intent from ``--color``).
- Color-mode resolution based on CLI flags, environment, and TTY status.
- `apply_color_mode`, which switches `yachalk` on or off globally. All report
  and log styling goes through `yachalk`, so this is the single switch.
"""

from __future__ import annotations

import os
import sys
from enum import Enum

from yachalk import chalk
from yachalk.types import ColorMode as ChalkColorMode

from testfeed.config.logging import get_logger

logger = get_logger(__name__)


class ColorMode(str, Enum):
    """User intent for colorized terminal output.

    Attributes:
        AUTO: Enable color only when appropriate (typically when stdout is a TTY).
        ALWAYS: Force-enable color regardless of TTY status.
        NEVER: Disable color entirely.
    """

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    color_mode_override: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Decision precedence:
        1. **CLI override**: `ALWAYS` → True; `NEVER` → False.
        2. **Environment**:
            - `FORCE_COLOR` (set and not equal to `"0"`) → True
            - `NO_COLOR` (set to any value) → False
        3. **Auto**: return `stdout.isatty()`.

    Args:
        color_mode_override: Parsed `ColorMode` from `--color`; `None` means "not provided".
        stdout_isatty: Optional override for TTY detection. When `None`, the function
            calls `sys.stdout.isatty()` and falls back to `False` on error.

    Returns:
        True if ANSI color should be enabled; False otherwise.
    """
    if color_mode_override == ColorMode.ALWAYS:
        return True
    if color_mode_override == ColorMode.NEVER:
        return False

    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False

    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (OSError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def apply_color_mode(enable_color: bool) -> None:
    """Switch `yachalk` styling on or off for the whole process.

    When enabling, a terminal-detected mode richer than 16 colors is kept.

    Args:
        enable_color (bool): Whether ANSI styles should be emitted.
    """
    if not enable_color:
        chalk.set_color_mode(ChalkColorMode.AllOff)
    elif chalk.get_color_mode() == ChalkColorMode.AllOff:
        chalk.set_color_mode(ChalkColorMode.Basic16)
    logger.debug("Color output %s", "enabled" if enable_color else "disabled")
