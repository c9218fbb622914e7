# topmark:header:start
#
#   project      : TestFeed
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running TestFeed in a controlled working directory.

`run_cli_in()` changes the process working directory to ``tmp_path`` before
invoking the Click CLI, so that config discovery (``pyproject.toml`` /
``testfeed.toml`` in the working directory) only sees files the test created.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator, Sequence
from typing import IO, TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner, Result

from testfeed.cli.main import cli
from testfeed.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Restore root logger handlers and level changed by ``setup_logging`` in the CLI."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


def ndjson(*events: tuple[str, dict[str, Any]]) -> str:
    """Serialize ``(type, data)`` pairs as NDJSON text."""
    return "".join(json.dumps({"type": tag, "data": data}) + "\n" for tag, data in events)


def start(name: str, nesting: int) -> tuple[str, dict[str, Any]]:
    return "test:start", {"name": name, "nesting": nesting}


def outcome(
    tag: str,
    name: str,
    nesting: int,
    *,
    suite: bool = False,
    duration_ms: float = 1,
    error: dict[str, Any] | None = None,
) -> tuple[str, dict[str, Any]]:
    details: dict[str, Any] = {"type": "suite" if suite else "test", "duration_ms": duration_ms}
    if error is not None:
        details["error"] = error
    return tag, {"name": name, "nesting": nesting, "details": details}


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD for the
            command invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["report", "events.ndjson"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input, used with ``report -``.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv, input=input_text)
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does not depend on files in ``tmp_path``
    (e.g. ``version`` or ``--help``).

    Args:
        argv (str | Sequence[str] | None): CLI argument vector.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text)


def assert_SUCCESS(result: Result) -> None:  # noqa: N802
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_TESTS_FAILED(result: Result) -> None:  # noqa: N802
    """Assert that the command rendered the report and found failing tests (code 1)."""
    assert result.exit_code == ExitCode.TESTS_FAILED, result.output
