# topmark:header:start
#
#   project      : TestFeed
#   file         : test_diff.py
#   file_relpath : tests/reporter/test_diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Expected/actual diff rendering."""

from __future__ import annotations

from tests.event_builders import strip_ansi
from testfeed.reporter.diff import NO_VISUAL_DIFFERENCE, diff_values, render_diff_lines


def test_object_diff_marks_changed_lines() -> None:
    lines = diff_values({"x": 1}, {"x": 2}).splitlines()
    assert lines[:3] == ["- Expected", "+ Received", ""]
    assert lines[3:] == ["  {", '-   "x": 1', '+   "x": 2', "  }"]


def test_only_changed_keys_are_marked() -> None:
    lines = diff_values({"a": 1, "b": 2, "c": 3}, {"a": 1, "b": 2, "c": 4}).splitlines()
    changed = [line for line in lines[3:] if line.startswith(("-", "+"))]
    assert changed == ['-   "c": 3', '+   "c": 4']
    assert '    "a": 1,' in lines
    assert '    "b": 2,' in lines


def test_nested_arrays_diff_per_element() -> None:
    lines = diff_values({"items": [1, 2, 3]}, {"items": [1, 5, 3]}).splitlines()
    changed = [line for line in lines[3:] if line.startswith(("-", "+"))]
    assert changed == ["-     2,", "+     5,"]


def test_values_json_cannot_encode_still_diff() -> None:
    lines = diff_values({1: "a", "k": "b"}, {1: "a", "k": "c"}).splitlines()
    changed = [line for line in lines[3:] if line.startswith(("-", "+"))]
    assert len(changed) == 2
    assert "'b'" in changed[0]
    assert "'c'" in changed[1]


def test_multiline_strings_are_diffed_line_by_line() -> None:
    lines = diff_values("a\nb\nc", "a\nB\nc").splitlines()
    assert lines[3:] == ["  a", "- b", "+ B", "  c"]


def test_identical_renderings_report_no_visual_difference() -> None:
    assert diff_values([1, 2], [1, 2]) == NO_VISUAL_DIFFERENCE


def test_different_kinds_are_not_line_diffed() -> None:
    rendered = diff_values({"x": 1}, [1])
    assert rendered == "Comparing two different types of values. Expected object but received array."


def test_int_and_float_compare_as_numbers() -> None:
    lines = diff_values(1, 1.5).splitlines()
    assert "- 1" in lines
    assert "+ 1.5" in lines


def test_ndiff_hint_lines_are_dropped() -> None:
    assert render_diff_lines(["- abc", "? ^\n", "+ xbc"]) == "- abc\n+ xbc"


def test_diff_is_colorized(colors_on: None) -> None:
    rendered = diff_values({"x": 1}, {"x": 2})
    assert "\x1b[" in rendered
    assert "- Expected" in strip_ansi(rendered)
