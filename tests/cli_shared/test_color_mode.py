# topmark:header:start
#
#   project      : TestFeed
#   file         : test_color_mode.py
#   file_relpath : tests/cli_shared/test_color_mode.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Color-mode resolution precedence and the global `yachalk` switch."""

from __future__ import annotations

import pytest
from yachalk import chalk
from yachalk.types import ColorMode as ChalkColorMode

from testfeed.cli_shared.color import ColorMode, apply_color_mode, resolve_color_mode


@pytest.mark.parametrize(
    ("override", "isatty", "expected"),
    [
        (ColorMode.ALWAYS, False, True),
        (ColorMode.NEVER, True, False),
        (ColorMode.AUTO, True, True),
        (ColorMode.AUTO, False, False),
        (None, True, True),
    ],
)
def test_cli_override_and_tty(override: ColorMode | None, isatty: bool, expected: bool) -> None:
    assert resolve_color_mode(color_mode_override=override, stdout_isatty=isatty) is expected


def test_force_color_env_beats_tty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert resolve_color_mode(color_mode_override=ColorMode.AUTO, stdout_isatty=False)


def test_force_color_zero_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORCE_COLOR", "0")
    assert not resolve_color_mode(color_mode_override=None, stdout_isatty=False)


def test_no_color_env_beats_tty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "")
    assert not resolve_color_mode(color_mode_override=ColorMode.AUTO, stdout_isatty=True)


def test_cli_override_beats_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    assert resolve_color_mode(color_mode_override=ColorMode.ALWAYS, stdout_isatty=False)


def test_apply_color_mode_toggles_chalk() -> None:
    apply_color_mode(True)
    assert chalk.get_color_mode() != ChalkColorMode.AllOff
    assert chalk.green("x") != "x"

    apply_color_mode(False)
    assert chalk.get_color_mode() == ChalkColorMode.AllOff
    assert chalk.green("x") == "x"


def test_apply_color_mode_keeps_richer_mode() -> None:
    chalk.set_color_mode(ChalkColorMode.FullTrueColor)
    apply_color_mode(True)
    assert chalk.get_color_mode() == ChalkColorMode.FullTrueColor
