# topmark:header:start
#
#   project      : TestFeed
#   file         : __init__.py
#   file_relpath : src/testfeed/events/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Event vocabulary consumed by the reporter, and its NDJSON wire decoding."""

from __future__ import annotations

from testfeed.events.decode import decode_error, decode_event, iter_ndjson_events
from testfeed.events.model import (
    DetailsType,
    ErrorInfo,
    Event,
    EventType,
    TestComplete,
    TestCoverage,
    TestDequeue,
    TestDetails,
    TestDiagnostic,
    TestEnqueue,
    TestFail,
    TestPass,
    TestPlan,
    TestStart,
    TestStderr,
    TestStdout,
    TestWatchDrained,
    UnknownEvent,
)

__all__ = [
    "DetailsType",
    "ErrorInfo",
    "Event",
    "EventType",
    "TestComplete",
    "TestCoverage",
    "TestDequeue",
    "TestDetails",
    "TestDiagnostic",
    "TestEnqueue",
    "TestFail",
    "TestPass",
    "TestPlan",
    "TestStart",
    "TestStderr",
    "TestStdout",
    "TestWatchDrained",
    "UnknownEvent",
    "decode_error",
    "decode_event",
    "iter_ndjson_events",
]
