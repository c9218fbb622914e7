# topmark:header:start
#
#   project      : TestFeed
#   file         : test_error_info.py
#   file_relpath : tests/events/test_error_info.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""`ErrorInfo` built from live Python exceptions."""

from __future__ import annotations

import pytest

from testfeed.events.model import ErrorInfo, TestFail, TestPass


class _AssertionWithValues(AssertionError):
    def __init__(self, message: str, expected: object, actual: object) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.show_diff = False


def test_from_exception_plain() -> None:
    with pytest.raises(KeyError) as info:
        {}["missing"]  # pylint: disable=pointless-statement
    error = ErrorInfo.from_exception(info.value)
    assert error.name == "KeyError"
    assert error.message == "'missing'"
    assert error.stack is not None
    assert error.stack.startswith("KeyError: 'missing'\n")
    assert not error.is_diffable


def test_from_exception_without_traceback() -> None:
    error = ErrorInfo.from_exception(RuntimeError())
    assert error.stack == "RuntimeError"
    assert error.message == ""


def test_from_exception_picks_up_assertion_values() -> None:
    error = ErrorInfo.from_exception(_AssertionWithValues("differ", expected=[1], actual=[2]))
    assert error.is_diffable
    assert error.expected == [1]
    assert error.actual == [2]
    assert error.show_diff is False


def test_from_exception_chains_cause() -> None:
    try:
        try:
            raise ValueError("inner")
        except ValueError as inner:
            raise RuntimeError("outer") from inner
    except RuntimeError as outer:
        error = ErrorInfo.from_exception(outer)

    assert error.cause is not None
    assert error.cause.name == "ValueError"
    assert error.cause.message == "inner"


@pytest.mark.parametrize(
    ("skip", "todo", "is_skipped", "is_todo"),
    [
        (False, False, False, False),
        (True, False, True, False),
        ("reason", False, True, False),
        (False, "later", False, True),
    ],
)
def test_result_flags(skip: bool | str, todo: bool | str, is_skipped: bool, is_todo: bool) -> None:
    for cls in (TestPass, TestFail):
        event = cls(name="t", nesting=0, skip=skip, todo=todo)
        assert event.is_skipped is is_skipped
        assert event.is_todo is is_todo
