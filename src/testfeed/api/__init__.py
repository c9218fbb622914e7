# topmark:header:start
#
#   project      : TestFeed
#   file         : __init__.py
#   file_relpath : src/testfeed/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public TestFeed API (stable surface).

This module exposes a **small, typed API** for integrations that want to
render an event stream programmatically without going through the CLI.

Configuration contract
----------------------
- Public functions accept either a plain **mapping** (mirroring the TOML shape of
  ``[tool.testfeed]``) or a frozen `testfeed.config.ReporterConfig`.
- The mapping is normalized through `MutableReporterConfig` and frozen before
  the run starts, so a run never observes config changes.

```python
import sys

from testfeed import api
from testfeed.events import iter_ndjson_events

with open("events.ndjson", encoding="utf-8") as fh:
    result = api.write_report(
        iter_ndjson_events(fh),
        sys.stdout,
        config={"slow_test_threshold_ms": 200},
    )
sys.exit(1 if result.failure_count else 0)
```
"""

from __future__ import annotations

from collections.abc import AsyncIterable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TextIO

from testfeed.config.logging import get_logger
from testfeed.config.model import MutableReporterConfig, ReporterConfig
from testfeed.reporter.diagnostics import GlobalDiagnostics
from testfeed.reporter.engine import FailureRecord, TreeReporter

if TYPE_CHECKING:
    from testfeed.config.logging import TestfeedLogger
    from testfeed.events.model import Event

logger: TestfeedLogger = get_logger(__name__)

__all__ = [
    "ReportResult",
    "render_report",
    "write_report",
    "write_report_async",
]


@dataclass(frozen=True)
class ReportResult:
    """Outcome of a finished report run.

    Attributes:
        summary (GlobalDiagnostics): Run totals reported by the engine.
        failures (tuple[FailureRecord, ...]): Failing leaves in report order.
        text (str | None): The full report, for `render_report`; ``None`` when it
            was streamed to a sink.
    """

    summary: GlobalDiagnostics
    failures: tuple[FailureRecord, ...]
    text: str | None = None

    @property
    def failure_count(self) -> int:
        """Number of failing leaf tests."""
        return len(self.failures)


def _resolve_config(config: Mapping[str, Any] | ReporterConfig | None) -> ReporterConfig:
    if config is None:
        return ReporterConfig()
    if isinstance(config, ReporterConfig):
        return config
    return MutableReporterConfig.from_toml_dict(dict(config)).freeze()


def _result(reporter: TreeReporter, text: str | None = None) -> ReportResult:
    return ReportResult(
        summary=reporter.summary or GlobalDiagnostics(),
        failures=reporter.failures,
        text=text,
    )


def write_report(
    events: Iterable[Event],
    stream: TextIO,
    *,
    config: Mapping[str, Any] | ReporterConfig | None = None,
) -> ReportResult:
    """Render ``events`` into ``stream`` as they arrive.

    Each fragment is written (and the stream flushed at line ends) before the
    next event is pulled, so a live run shows progress immediately.

    Args:
        events (Iterable[Event]): Event source.
        stream (TextIO): Text sink, e.g. ``sys.stdout``.
        config (Mapping[str, Any] | ReporterConfig | None): Reporter settings.

    Returns:
        ReportResult: Totals and failures of the run.
    """
    reporter = TreeReporter(_resolve_config(config))
    for fragment in reporter.report(events):
        stream.write(fragment)
        if fragment.endswith("\n"):
            stream.flush()
    stream.flush()
    logger.debug("Report finished with %d failure(s)", reporter.failure_count)
    return _result(reporter)


async def write_report_async(
    events: AsyncIterable[Event],
    stream: TextIO,
    *,
    config: Mapping[str, Any] | ReporterConfig | None = None,
) -> ReportResult:
    """Asynchronous counterpart of `write_report` for async event sources."""
    reporter = TreeReporter(_resolve_config(config))
    async for fragment in reporter.areport(events):
        stream.write(fragment)
        if fragment.endswith("\n"):
            stream.flush()
    stream.flush()
    return _result(reporter)


def render_report(
    events: Iterable[Event],
    *,
    config: Mapping[str, Any] | ReporterConfig | None = None,
) -> ReportResult:
    """Render ``events`` to a string.

    Args:
        events (Iterable[Event]): Event source.
        config (Mapping[str, Any] | ReporterConfig | None): Reporter settings.

    Returns:
        ReportResult: Totals, failures and the report text.
    """
    reporter = TreeReporter(_resolve_config(config))
    text = "".join(reporter.report(events))
    return _result(reporter, text)
