# topmark:header:start
#
#   project      : TestFeed
#   file         : report.py
#   file_relpath : src/testfeed/cli/commands/report.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TestFeed `report` command.

Reads newline-delimited JSON events from a file (or STDIN via ``-``) and
streams the rendered report to stdout while the input is still being read.

Exit status:
    - `ExitCode.SUCCESS` when no leaf test failed.
    - `ExitCode.TESTS_FAILED` when at least one leaf test failed.
    - An error code from `testfeed.core.exit_codes.ExitCode` when the input or
      configuration is unusable.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from testfeed.cli.errors import (
    TestfeedConfigError,
    TestfeedDataError,
    TestfeedFileNotFoundError,
    TestfeedIOError,
    TestfeedProtocolError,
)
from testfeed.config.io import ConfigLoadError
from testfeed.config.logging import get_logger
from testfeed.config.model import MutableReporterConfig, ReporterConfig
from testfeed.core.errors import EventDecodeError, ReporterProtocolError
from testfeed.core.exit_codes import ExitCode
from testfeed.events.decode import iter_ndjson_events
from testfeed.reporter.engine import TreeReporter

if TYPE_CHECKING:
    from testfeed.cli_shared.console_api import ConsoleLike

logger = get_logger(__name__)


def load_reporter_config(config_path: Path | None, slow_threshold: float | None) -> ReporterConfig:
    """Merge config files and CLI overrides into a frozen `ReporterConfig`.

    Args:
        config_path (Path | None): Explicit ``--config`` file.
        slow_threshold (float | None): ``--slow-threshold`` override in milliseconds.

    Returns:
        ReporterConfig: The effective configuration.

    Raises:
        TestfeedConfigError: If a config file is missing, unreadable or invalid.
    """
    if config_path is not None and not config_path.is_file():
        raise TestfeedConfigError(f"Config file not found: {config_path}")
    try:
        draft = MutableReporterConfig.load_merged(
            extra_config=config_path,
            args={"slow_test_threshold_ms": slow_threshold},
        )
        return draft.freeze()
    except (ConfigLoadError, ValueError) as exc:
        raise TestfeedConfigError(str(exc)) from exc


@click.command(
    name="report",
    help="Render an NDJSON event stream (file or '-' for STDIN) as a console report.",
)
@click.argument(
    "events_file",
    required=False,
    default="-",
    type=click.Path(dir_okay=False, allow_dash=True),
)
@click.option(
    "--slow-threshold",
    "slow_threshold",
    type=click.FloatRange(min=0),
    default=None,
    help="Annotate tests slower than this many milliseconds (default: 75).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read settings from this TOML file (testfeed.toml or pyproject.toml).",
)
def report_command(
    *,
    events_file: str,
    slow_threshold: float | None,
    config_path: Path | None,
) -> None:
    """Render an event stream.

    Args:
        events_file (str): Path to the NDJSON events, or ``-`` for STDIN.
        slow_threshold (float | None): Slow-test threshold override in milliseconds.
        config_path (Path | None): Explicit config file.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    config = load_reporter_config(config_path, slow_threshold)
    reporter = TreeReporter(config)
    logger.info("Reading events from %s", "STDIN" if events_file == "-" else events_file)

    try:
        with click.open_file(events_file, "r", encoding="utf-8") as fh:
            for fragment in reporter.report(iter_ndjson_events(fh)):
                console.write(fragment)
    except FileNotFoundError as exc:
        raise TestfeedFileNotFoundError(f"Events file not found: {events_file}") from exc
    except EventDecodeError as exc:
        raise TestfeedDataError(f"Malformed event in {events_file}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise TestfeedDataError(f"Cannot decode {events_file} as UTF-8: {exc}") from exc
    except ReporterProtocolError as exc:
        raise TestfeedProtocolError(str(exc)) from exc
    except OSError as exc:
        raise TestfeedIOError(f"Cannot read {events_file}: {exc}") from exc

    if reporter.failure_count:
        logger.info("%d failing test(s)", reporter.failure_count)
        ctx.exit(ExitCode.TESTS_FAILED)
