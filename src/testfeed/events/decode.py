# topmark:header:start
#
#   project      : TestFeed
#   file         : decode.py
#   file_relpath : src/testfeed/events/decode.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Decode wire events into `testfeed.events.model` instances.

The wire form is one JSON object per event, ``{"type": "<tag>", "data": {...}}``,
as produced by serializing the ``node:test`` reporter stream. Newline-delimited
JSON (NDJSON) files hold one such object per line; blank lines are ignored.

Unknown tags decode to `UnknownEvent` so the reporter can warn about them;
structurally broken input (invalid JSON, missing tag, wrong field types) raises
`EventDecodeError`.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable, cast

from testfeed.config.logging import get_logger
from testfeed.core.errors import EventDecodeError
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

logger = get_logger(__name__)

Payload = Mapping[str, Any]


def _require_str(data: Payload, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise EventDecodeError(f"field {key!r} must be a string, got {value!r}")
    return value


def _optional_str(data: Payload, key: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise EventDecodeError(f"field {key!r} must be a string, got {value!r}")


def _int(data: Payload, key: str, default: int | None = None) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise EventDecodeError(f"field {key!r} must be an integer, got {value!r}")
    return value


def _flag(data: Payload, key: str) -> bool | str:
    # node:test sends `true`/`false`, or the skip/todo reason as a string
    value = data.get(key, False)
    if value is None:
        return False
    if isinstance(value, (bool, str)):
        return value
    raise EventDecodeError(f"field {key!r} must be a boolean or string, got {value!r}")


def _first_key(data: Payload, *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def decode_error(data: Any) -> ErrorInfo | None:
    """Decode a serialized error payload.

    Unknown keys are ignored and missing keys default, so a partial payload
    always yields a usable `ErrorInfo`. Both camelCase (wire) and snake_case
    spellings are accepted for ``failureType`` and ``showDiff``. A bare string
    is treated as the error message.

    Args:
        data (Any): The ``details.error`` value.

    Returns:
        ErrorInfo | None: The decoded error, or ``None`` when no payload was sent.
    """
    if data is None:
        return None
    if isinstance(data, str):
        return ErrorInfo(message=data)
    if not isinstance(data, Mapping):
        raise EventDecodeError(f"error payload must be an object, got {data!r}")

    payload = cast("Payload", data)
    message = payload.get("message")
    name = payload.get("name")
    stack = payload.get("stack")
    code = payload.get("code")
    failure_type = _first_key(payload, "failureType", "failure_type")
    show_diff = _first_key(payload, "showDiff", "show_diff")
    return ErrorInfo(
        message=message if isinstance(message, str) else "",
        name=name if isinstance(name, str) else "Error",
        stack=stack if isinstance(stack, str) else None,
        code=code if isinstance(code, str) else None,
        failure_type=failure_type if isinstance(failure_type, str) else None,
        cause=_decode_cause(payload.get("cause")),
        expected=payload.get("expected"),
        actual=payload.get("actual"),
        has_expected="expected" in payload,
        has_actual="actual" in payload,
        show_diff=show_diff if isinstance(show_diff, bool) else None,
    )


def _decode_cause(data: Any) -> ErrorInfo | None:
    # Only structured causes are errors; node:test also uses plain strings here
    if isinstance(data, Mapping):
        return decode_error(data)
    return None


def _details(data: Payload) -> TestDetails:
    raw = data.get("details") or {}
    if not isinstance(raw, Mapping):
        raise EventDecodeError(f"field 'details' must be an object, got {raw!r}")
    details = cast("Payload", raw)

    kind = details.get("type", DetailsType.TEST.value)
    try:
        details_type = DetailsType(kind)
    except ValueError as exc:
        raise EventDecodeError(f"details.type must be 'test' or 'suite', got {kind!r}") from exc

    duration = details.get("duration_ms", 0)
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        raise EventDecodeError(f"details.duration_ms must be a number, got {duration!r}")

    return TestDetails(
        type=details_type,
        duration_ms=float(duration),
        error=decode_error(details.get("error")),
    )


def _start(data: Payload) -> Event:
    return TestStart(
        name=_require_str(data, "name"),
        nesting=_int(data, "nesting"),
        file=_optional_str(data, "file"),
    )


def _pass(data: Payload) -> Event:
    return TestPass(
        name=_require_str(data, "name"),
        nesting=_int(data, "nesting"),
        details=_details(data),
        skip=_flag(data, "skip"),
        todo=_flag(data, "todo"),
    )


def _fail(data: Payload) -> Event:
    return TestFail(
        name=_require_str(data, "name"),
        nesting=_int(data, "nesting"),
        details=_details(data),
        skip=_flag(data, "skip"),
        todo=_flag(data, "todo"),
    )


def _diagnostic(data: Payload) -> Event:
    return TestDiagnostic(message=_require_str(data, "message"), nesting=_int(data, "nesting", 0))


def _coverage(data: Payload) -> Event:
    summary = data.get("summary")
    return TestCoverage(summary=summary if isinstance(summary, Mapping) else {})


_DECODERS: dict[EventType, Callable[[Payload], Event]] = {
    EventType.START: _start,
    EventType.PASS: _pass,
    EventType.FAIL: _fail,
    EventType.DIAGNOSTIC: _diagnostic,
    EventType.STDOUT: lambda data: TestStdout(message=_require_str(data, "message")),
    EventType.STDERR: lambda data: TestStderr(message=_require_str(data, "message")),
    EventType.PLAN: lambda data: TestPlan(
        nesting=_int(data, "nesting", 0), count=_int(data, "count", 0)
    ),
    EventType.ENQUEUE: lambda data: TestEnqueue(
        name=_optional_str(data, "name") or "", nesting=_int(data, "nesting", 0)
    ),
    EventType.DEQUEUE: lambda data: TestDequeue(
        name=_optional_str(data, "name") or "", nesting=_int(data, "nesting", 0)
    ),
    EventType.WATCH_DRAINED: lambda data: TestWatchDrained(),
    EventType.COMPLETE: lambda data: TestComplete(
        name=_optional_str(data, "name") or "",
        nesting=_int(data, "nesting", 0),
        details=_details(data),
    ),
    EventType.COVERAGE: _coverage,
}


def decode_event(raw: Mapping[str, Any]) -> Event:
    """Decode one ``{"type": ..., "data": ...}`` mapping into an event.

    Args:
        raw (Mapping[str, Any]): The wire object.

    Returns:
        Event: The typed event; `UnknownEvent` for unrecognized tags.

    Raises:
        EventDecodeError: If the tag is missing or the payload has the wrong shape.
    """
    tag = raw.get("type")
    if not isinstance(tag, str):
        raise EventDecodeError(f"event has no string 'type' tag: {raw!r}")
    data = raw.get("data") or {}
    if not isinstance(data, Mapping):
        raise EventDecodeError(f"'data' of {tag!r} must be an object, got {data!r}")
    payload = cast("Payload", data)

    try:
        event_type = EventType(tag)
    except ValueError:
        return UnknownEvent(type=tag, data=payload)
    return _DECODERS[event_type](payload)


def iter_ndjson_events(lines: Iterable[str]) -> Iterator[Event]:
    """Lazily decode an NDJSON stream of wire events.

    Lines are decoded one at a time, so the reporter can start rendering before
    the producer is done.

    Args:
        lines (Iterable[str]): Text lines (e.g. an open file or ``sys.stdin``).

    Yields:
        Event: One decoded event per non-blank line.

    Raises:
        EventDecodeError: On invalid JSON or malformed events, tagged with the line number.
    """
    for line_number, line in enumerate(lines, 1):
        text = line.strip()
        if not text:
            continue
        try:
            raw: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise EventDecodeError(f"invalid JSON: {exc.msg}", line_number=line_number) from exc
        if not isinstance(raw, Mapping):
            raise EventDecodeError("event must be a JSON object", line_number=line_number)
        try:
            event = decode_event(cast("Mapping[str, Any]", raw))
        except EventDecodeError as exc:
            raise EventDecodeError(str(exc), line_number=line_number) from exc
        logger.trace("Decoded line %d: %r", line_number, event)
        yield event
