# topmark:header:start
#
#   project      : TestFeed
#   file         : engine.py
#   file_relpath : src/testfeed/reporter/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Streaming tree reporter.

`TreeReporter` turns an event stream into text fragments in a single pass:

* Leaf results are rendered as they arrive, under a breadcrumb of their
  ancestors. The breadcrumb is printed only when it changed since the last
  leaf, tracked by the *print cursor* (index of the deepest ancestor already
  on screen, ``-1`` when nothing is).
* Failures are numbered in arrival order and recorded together with a snapshot
  of their ancestor chain; the full error output is deferred to the end.
* Once the source is exhausted the run totals, nested diagnostics and the
  numbered failure list are rendered.

Output is demand-driven: both `TreeReporter.report` and
`TreeReporter.areport` are generators, and a single event is fully handled
between two pulls from the source.
"""

from __future__ import annotations

import math
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from yachalk import chalk

from testfeed.config.logging import get_logger
from testfeed.config.model import ReporterConfig
from testfeed.core.errors import ReporterProtocolError
from testfeed.events.model import (
    TestComplete,
    TestCoverage,
    TestDequeue,
    TestDiagnostic,
    TestEnqueue,
    TestFail,
    TestPass,
    TestPlan,
    TestStart,
    TestStderr,
    TestStdout,
    TestWatchDrained,
)
from testfeed.reporter.diagnostics import GlobalDiagnostics, process_global_diagnostics
from testfeed.reporter.formatting import (
    format_error,
    format_global_diagnostics,
    indent,
    print_parent_stack,
)

if TYPE_CHECKING:
    from testfeed.config.logging import TestfeedLogger
    from testfeed.events.model import Event

logger: TestfeedLogger = get_logger(__name__)

NOTHING_PRINTED = -1
COVERAGE_NOTICE = "\nTest coverage not supported by this reporter\n"


@dataclass(frozen=True)
class FailureRecord:
    """A failing leaf and the ancestor chain it failed under (leaf included)."""

    data: TestFail
    parent_stack: tuple[TestStart, ...]


@dataclass
class _RunState:
    stack: list[TestStart] = field(default_factory=lambda: [])
    last_printed_index: int = NOTHING_PRINTED
    diagnostics: list[TestDiagnostic] = field(default_factory=lambda: [])
    failures: list[FailureRecord] = field(default_factory=lambda: [])


class TreeReporter:
    """Render a test-engine event stream as a hierarchical console report.

    A reporter instance can be reused; every call to `report` / `areport`
    starts from a fresh ancestor stack and failure list. After a run has
    finished, `summary` and `failures` describe it.

    Args:
        config (ReporterConfig | None): Rendering settings; defaults apply when omitted.

    Attributes:
        config (ReporterConfig): Rendering settings.
        summary (GlobalDiagnostics | None): Run totals of the last finished run.
        failures (tuple[FailureRecord, ...]): Failures of the last finished run.
    """

    def __init__(self, config: ReporterConfig | None = None) -> None:
        self.config = config or ReporterConfig()
        self.summary: GlobalDiagnostics | None = None
        self.failures: tuple[FailureRecord, ...] = ()

    @property
    def failure_count(self) -> int:
        """Number of failing leaf tests in the last finished run."""
        return len(self.failures)

    def report(self, source: Iterable[Event]) -> Iterator[str]:
        """Consume ``source`` and yield report fragments.

        Args:
            source (Iterable[Event]): Events in emission order.

        Yields:
            str: Text fragments; concatenated they form the report.

        Raises:
            ReporterProtocolError: If a pass/fail event closes nothing.
        """
        state = _RunState()
        for event in source:
            yield from self._handle(state, event)
        yield from self._finalize(state)

    async def areport(self, source: AsyncIterable[Event]) -> AsyncIterator[str]:
        """Asynchronous counterpart of `report` for async event sources."""
        state = _RunState()
        async for event in source:
            for fragment in self._handle(state, event):
                yield fragment
        for fragment in self._finalize(state):
            yield fragment

    # ------------------------------------------------------------------ events

    def _handle(self, state: _RunState, event: Event) -> Iterator[str]:
        logger.trace("Handling %r", event)
        match event:
            case TestDiagnostic():
                state.diagnostics.append(event)
            case TestStart():
                state.stack.append(event)
            case TestPass() | TestFail():
                if event.details.is_suite:
                    yield from self._close_suite(state, event)
                else:
                    yield from self._close_test(state, event)
            case TestStdout() | TestStderr():
                yield event.message
            case TestPlan() | TestEnqueue() | TestDequeue() | TestWatchDrained() | TestComplete():
                pass
            case TestCoverage():
                yield chalk.red(COVERAGE_NOTICE)
            case _:
                logger.warning("Unsupported test event type %r: %r", event.type, event)

    @staticmethod
    def _check_open(state: _RunState, event: TestPass | TestFail) -> None:
        if not state.stack:
            raise ReporterProtocolError(
                f"{event.type.value} for {event.name!r} (nesting {event.nesting}) "
                "does not close any started suite or test"
            )

    def _pop(self, state: _RunState, event: TestPass | TestFail) -> None:
        self._check_open(state, event)
        state.stack.pop()

    def _close_suite(self, state: _RunState, event: TestPass | TestFail) -> Iterator[str]:
        self._pop(state, event)

        if event.nesting == 0:
            state.last_printed_index = NOTHING_PRINTED
            yield "\n"
        elif state.last_printed_index >= len(state.stack):
            # The closed suite's breadcrumb line is no longer current context
            state.last_printed_index = max(state.last_printed_index - 1, NOTHING_PRINTED)

    def _close_test(self, state: _RunState, event: TestPass | TestFail) -> Iterator[str]:
        self._check_open(state, event)

        parent_index = len(state.stack) - 2
        if state.last_printed_index != parent_index:
            missing = state.stack[state.last_printed_index + 1 : -1]
            if missing:
                yield from print_parent_stack(missing)
            state.last_printed_index = parent_index

        yield " " * ((event.nesting + 1) * 2)

        if isinstance(event, TestPass):
            if event.is_skipped:
                yield chalk.cyan(f"- {event.name}")
            elif event.is_todo:
                yield chalk.blue(f"+ {event.name}")
            else:
                yield chalk.gray(f"{self.config.success_symbol} {event.name}")
        else:
            state.failures.append(FailureRecord(data=event, parent_stack=tuple(state.stack)))
            yield chalk.red(f"{len(state.failures)}) {event.name}")

        duration_ms = event.details.duration_ms
        if duration_ms > self.config.slow_test_threshold_ms:
            yield " "
            yield chalk.red(chalk.italic(f"({math.floor(duration_ms)}ms)"))

        yield "\n"

        self._pop(state, event)

        # Top-level tests are separated by an empty line
        if event.nesting == 0:
            yield "\n"

    # ------------------------------------------------------------ finalization

    def _finalize(self, state: _RunState) -> Iterator[str]:
        if state.stack:
            logger.warning(
                "Event stream ended with %d unterminated suite(s)/test(s): %s",
                len(state.stack),
                " > ".join(entry.name for entry in state.stack),
            )

        self.summary = process_global_diagnostics(state.diagnostics)
        self.failures = tuple(state.failures)

        # Only nesting-0 diagnostics are folded into the totals
        diagnostic_messages = "\n".join(
            f"{self.config.info_symbol} {diagnostic.message}"
            for diagnostic in state.diagnostics
            if diagnostic.nesting != 0
        )

        yield "\n"
        yield format_global_diagnostics(self.summary)

        if diagnostic_messages:
            yield "\n"
            yield chalk.gray(diagnostic_messages)

        yield "\n\n"

        for i, record in enumerate(self.failures, 1):
            yield from print_parent_stack(record.parent_stack, f"{i}) ", ":")
            yield "\n"
            yield indent(format_error(record.data.details.error), self.config.failure_indent)
            yield "\n\n"
