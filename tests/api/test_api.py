# topmark:header:start
#
#   project      : TestFeed
#   file         : test_api.py
#   file_relpath : tests/api/test_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public API: `render_report`, `write_report` and `write_report_async`."""

from __future__ import annotations

import asyncio
import io
from collections.abc import AsyncIterator

import pytest

from tests.event_builders import diag, failing_leaf, leaf, passed, start
from testfeed import api
from testfeed.config.model import ReporterConfig
from testfeed.events.model import Event


def _events() -> list[Event]:
    return [
        start("A", 0),
        *leaf("a1", 1, duration_ms=100.0),
        *failing_leaf("a2", 1),
        passed("A", 0, suite=True),
        diag("pass 1"),
        diag("fail 1"),
    ]


def test_render_report_returns_text_and_totals() -> None:
    result = api.render_report(_events())
    assert result.text is not None
    assert result.text.startswith("  A\n    ✔ a1 (100ms)\n    1) a2\n")
    assert result.failure_count == 1
    assert result.summary["pass"] == 1
    assert result.summary.fail == 1


def test_render_report_accepts_mapping_config() -> None:
    result = api.render_report(
        _events(), config={"slow_test_threshold_ms": 500, "symbols": {"success": "ok"}}
    )
    assert result.text is not None
    assert "    ok a1\n" in result.text


def test_render_report_accepts_frozen_config() -> None:
    result = api.render_report(_events(), config=ReporterConfig(success_symbol="+"))
    assert result.text is not None
    assert "    + a1 (100ms)\n" in result.text


def test_invalid_mapping_config_raises() -> None:
    with pytest.raises(ValueError, match="must not be negative"):
        api.render_report([], config={"failure_indent": -3})


def test_write_report_streams_to_sink() -> None:
    sink = io.StringIO()
    result = api.write_report(_events(), sink)
    assert result.text is None
    assert sink.getvalue() == api.render_report(_events()).text
    assert [record.data.name for record in result.failures] == ["a2"]


def test_write_report_async() -> None:
    async def source() -> AsyncIterator[Event]:
        for event in _events():
            yield event

    sink = io.StringIO()
    result = asyncio.run(api.write_report_async(source(), sink))
    assert sink.getvalue() == api.render_report(_events()).text
    assert result.failure_count == 1


def test_empty_stream_has_zero_summary() -> None:
    result = api.render_report([])
    assert result.failure_count == 0
    assert result.summary.tests == 0
    assert result.text == "\n0 passing (0ms)\n\n"


class _FlushRecorder(io.StringIO):
    """Text sink remembering its content at every flush."""

    def __init__(self) -> None:
        super().__init__()
        self.flushed: list[str] = []

    def flush(self) -> None:
        super().flush()
        self.flushed.append(self.getvalue())


def test_write_report_flushes_at_line_ends() -> None:
    sink = _FlushRecorder()
    api.write_report(_events(), sink)
    assert sink.flushed[0] == "  A\n"
    assert sink.flushed[-1] == sink.getvalue()


def test_write_report_async_flushes_at_line_ends() -> None:
    seen_at_second_leaf: list[str] = []
    sink = _FlushRecorder()

    async def source() -> AsyncIterator[Event]:
        for event in _events():
            if event == start("a2", 1):
                seen_at_second_leaf.append(sink.flushed[-1])
            yield event

    asyncio.run(api.write_report_async(source(), sink))
    assert seen_at_second_leaf == ["  A\n    ✔ a1 (100ms)\n"]
    assert sink.flushed[-1] == sink.getvalue()
