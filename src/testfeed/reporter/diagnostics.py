# topmark:header:start
#
#   project      : TestFeed
#   file         : diagnostics.py
#   file_relpath : src/testfeed/reporter/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fold top-level diagnostic lines into run-wide counters.

At the end of a run the engine emits nesting-0 ``test:diagnostic`` events such
as ``"pass 12"`` or ``"duration_ms 431.2"``. The text is owned by the engine
and may grow new counters, so folding is tolerant: unknown names and
unparseable numbers are logged as warnings and skipped, never raised.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from testfeed.config.logging import get_logger

if TYPE_CHECKING:
    from testfeed.config.logging import TestfeedLogger
    from testfeed.events.model import TestDiagnostic

logger: TestfeedLogger = get_logger(__name__)


@dataclass
class GlobalDiagnostics:
    """Run-wide counters reported by the engine; all zero until reported."""

    tests: float = 0
    suites: float = 0
    pass_: float = 0
    fail: float = 0
    cancelled: float = 0
    skipped: float = 0
    todo: float = 0
    duration_ms: float = 0

    def __getattr__(self, name: str) -> float:
        # ``pass`` is a keyword; expose it under its wire name too
        if name == "pass":
            return self.pass_
        raise AttributeError(name)

    def __getitem__(self, name: str) -> float:
        """Return a counter by its wire name (e.g. ``diagnostics["pass"]``)."""
        return getattr(self, COUNTER_FIELDS[name])


# Wire counter name -> attribute name
COUNTER_FIELDS: dict[str, str] = {f.name.rstrip("_"): f.name for f in fields(GlobalDiagnostics)}


def _as_number(value: float) -> float:
    # Integral counts render as "3", not "3.0"
    if value.is_integer():
        return int(value)
    return value


def process_global_diagnostics(diagnostics: Iterable[TestDiagnostic]) -> GlobalDiagnostics:
    """Fold nesting-0 diagnostics into a `GlobalDiagnostics` record.

    Each message is split on spaces into a counter name and a number. The last
    value seen for a counter wins. Diagnostics at any other nesting are left for
    verbatim display by the reporter.

    Args:
        diagnostics (Iterable[TestDiagnostic]): Buffered diagnostic events, in arrival order.

    Returns:
        GlobalDiagnostics: The folded counters.
    """
    result = GlobalDiagnostics()

    for diagnostic in diagnostics:
        if diagnostic.nesting != 0:
            continue

        parts = diagnostic.message.split(" ")
        if len(parts) < 2 or not parts[0] or not parts[1]:
            logger.warning("Malformed global diagnostic message: %r", diagnostic.message)
            continue
        name, number_string = parts[0], parts[1]

        attribute = COUNTER_FIELDS.get(name)
        if attribute is None:
            logger.warning("Invalid global diagnostic name: %r", name)
            continue

        try:
            value = float(number_string)
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            logger.warning("Invalid global diagnostic message: %r", diagnostic.message)
            continue

        setattr(result, attribute, _as_number(value))

    return result
