# topmark:header:start
#
#   project      : TestFeed
#   file         : model.py
#   file_relpath : src/testfeed/events/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Test-engine event types.

Events form a closed tagged union: one frozen dataclass per ``node:test``
event type, each exposing its wire tag as the ``type`` class attribute.
`UnknownEvent` is the single forward-compatibility variant; it carries the
raw tag and payload of anything the decoder does not recognize.

`ErrorInfo` is the error-like payload attached to failures. Every field is
optional: the engine owns the payload and may omit any of it.
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union


class EventType(str, Enum):
    """Wire tags of the events TestFeed understands."""

    START = "test:start"
    PASS = "test:pass"
    FAIL = "test:fail"
    DIAGNOSTIC = "test:diagnostic"
    STDOUT = "test:stdout"
    STDERR = "test:stderr"
    PLAN = "test:plan"
    ENQUEUE = "test:enqueue"
    DEQUEUE = "test:dequeue"
    WATCH_DRAINED = "test:watch:drained"
    COMPLETE = "test:complete"
    COVERAGE = "test:coverage"


class DetailsType(str, Enum):
    """Kind of node that closed: a container (suite) or a leaf (test)."""

    TEST = "test"
    SUITE = "suite"


@dataclass(frozen=True)
class ErrorInfo:
    """Error-like payload reported by the engine for a failing test.

    Attributes:
        message (str): Error message; empty when the engine sent none.
        name (str): Error class name, e.g. ``"AssertionError"``.
        stack (str | None): Pre-rendered stack text, starting with ``"<name>: <message>"``.
        code (str | None): Machine code such as ``"ERR_TEST_FAILURE"``.
        failure_type (str | None): Harness failure category, e.g. ``"testCodeFailure"``.
        cause (ErrorInfo | None): Wrapped error.
        expected (Any): Expected value of a failed assertion.
        actual (Any): Actual value of a failed assertion.
        has_expected (bool): Whether ``expected`` was present at all (``None`` is a valid value).
        has_actual (bool): Whether ``actual`` was present at all.
        show_diff (bool | None): ``False`` opts out of diff rendering.
    """

    message: str = ""
    name: str = "Error"
    stack: str | None = None
    code: str | None = None
    failure_type: str | None = None
    cause: ErrorInfo | None = None
    expected: Any = None
    actual: Any = None
    has_expected: bool = False
    has_actual: bool = False
    show_diff: bool | None = None

    @property
    def is_diffable(self) -> bool:
        """Return True if both an expected and an actual value were reported."""
        return self.has_expected and self.has_actual

    @classmethod
    def from_exception(cls, exc: BaseException) -> ErrorInfo:
        """Build an `ErrorInfo` from a live Python exception.

        Attributes commonly set by assertion libraries (``expected``, ``actual``,
        ``show_diff``, ``code``, ``failure_type``) are picked up when present;
        ``__cause__`` becomes `cause`.

        Args:
            exc (BaseException): The exception to describe.

        Returns:
            ErrorInfo: The converted payload.
        """
        message = str(exc)
        name = type(exc).__name__
        frames = "".join(traceback.format_tb(exc.__traceback__)) if exc.__traceback__ else ""
        header = f"{name}: {message}" if message else name
        cause = exc.__cause__
        return cls(
            message=message,
            name=name,
            stack=f"{header}\n{frames}".rstrip("\n"),
            code=_str_or_none(getattr(exc, "code", None)),
            failure_type=_str_or_none(getattr(exc, "failure_type", None)),
            cause=cls.from_exception(cause) if cause is not None else None,
            expected=getattr(exc, "expected", None),
            actual=getattr(exc, "actual", None),
            has_expected=hasattr(exc, "expected"),
            has_actual=hasattr(exc, "actual"),
            show_diff=getattr(exc, "show_diff", None),
        )


def _str_or_none(value: object) -> str | None:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class TestDetails:
    """Outcome details attached to ``test:pass`` / ``test:fail`` events."""

    __test__ = False

    type: DetailsType = DetailsType.TEST
    duration_ms: float = 0.0
    error: ErrorInfo | None = None

    @property
    def is_suite(self) -> bool:
        """Return True if the closed node is a suite rather than a leaf test."""
        return self.type == DetailsType.SUITE


@dataclass(frozen=True)
class TestStart:
    """A suite or test started; opens one level of the ancestor tree."""

    __test__ = False
    type: ClassVar[EventType] = EventType.START

    name: str
    nesting: int
    file: str | None = None


@dataclass(frozen=True)
class _TestResult:
    name: str
    nesting: int
    details: TestDetails = field(default_factory=TestDetails)
    skip: bool | str = False
    todo: bool | str = False

    @property
    def is_skipped(self) -> bool:
        """Return True if the engine marked this node as skipped (a string is the reason)."""
        return self.skip is True or isinstance(self.skip, str)

    @property
    def is_todo(self) -> bool:
        """Return True if the engine marked this node as todo (a string is the reason)."""
        return self.todo is True or isinstance(self.todo, str)


@dataclass(frozen=True)
class TestPass(_TestResult):
    """A suite or test passed (skipped and todo nodes also report as passes)."""

    __test__ = False
    type: ClassVar[EventType] = EventType.PASS


@dataclass(frozen=True)
class TestFail(_TestResult):
    """A suite or test failed."""

    __test__ = False
    type: ClassVar[EventType] = EventType.FAIL


@dataclass(frozen=True)
class TestDiagnostic:
    """Free-text diagnostic; nesting-0 messages carry ``"<counter> <number>"`` totals."""

    __test__ = False
    type: ClassVar[EventType] = EventType.DIAGNOSTIC

    message: str
    nesting: int = 0


@dataclass(frozen=True)
class TestStdout:
    """Captured standard output of a test file."""

    __test__ = False
    type: ClassVar[EventType] = EventType.STDOUT

    message: str


@dataclass(frozen=True)
class TestStderr:
    """Captured standard error of a test file."""

    __test__ = False
    type: ClassVar[EventType] = EventType.STDERR

    message: str


@dataclass(frozen=True)
class TestPlan:
    __test__ = False
    type: ClassVar[EventType] = EventType.PLAN

    nesting: int = 0
    count: int = 0


@dataclass(frozen=True)
class TestEnqueue:
    __test__ = False
    type: ClassVar[EventType] = EventType.ENQUEUE

    name: str = ""
    nesting: int = 0


@dataclass(frozen=True)
class TestDequeue:
    __test__ = False
    type: ClassVar[EventType] = EventType.DEQUEUE

    name: str = ""
    nesting: int = 0


@dataclass(frozen=True)
class TestWatchDrained:
    __test__ = False
    type: ClassVar[EventType] = EventType.WATCH_DRAINED


@dataclass(frozen=True)
class TestComplete:
    __test__ = False
    type: ClassVar[EventType] = EventType.COMPLETE

    name: str = ""
    nesting: int = 0
    details: TestDetails = field(default_factory=TestDetails)


@dataclass(frozen=True)
class TestCoverage:
    """Coverage summary; TestFeed only acknowledges it with a notice."""

    __test__ = False
    type: ClassVar[EventType] = EventType.COVERAGE

    summary: Mapping[str, Any] = field(default_factory=lambda: {})


@dataclass(frozen=True)
class UnknownEvent:
    """An event whose tag is not part of the known vocabulary."""

    type: str
    data: Mapping[str, Any] = field(default_factory=lambda: {})


Event = Union[
    TestStart,
    TestPass,
    TestFail,
    TestDiagnostic,
    TestStdout,
    TestStderr,
    TestPlan,
    TestEnqueue,
    TestDequeue,
    TestWatchDrained,
    TestComplete,
    TestCoverage,
    UnknownEvent,
]
