# topmark:header:start
#
#   project      : TestFeed
#   file         : main.py
#   file_relpath : src/testfeed/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TestFeed command-line entry point.

Group-level options (verbosity, color) are resolved once and placed into
``ctx.obj``; subcommands read the shared console and settings from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from testfeed.cli.commands.report import report_command
from testfeed.cli.commands.version import version_command
from testfeed.cli.console import ClickConsole
from testfeed.cli.options import common_color_options, common_verbose_options, resolve_verbosity
from testfeed.cli_shared.color import ColorMode, apply_color_mode, resolve_color_mode
from testfeed.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from testfeed.cli_shared.console_api import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Initialize shared state (logging & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (str | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    # TESTFEED_LOG_LEVEL wins over -v/-q
    log_level = resolve_env_log_level() or resolve_verbosity(verbose, quiet)
    ctx.obj["log_level"] = log_level
    setup_logging(level=log_level)

    effective_color_mode = (
        ColorMode.NEVER if no_color else ColorMode(color_mode) if color_mode else ColorMode.AUTO
    )
    enable_color = resolve_color_mode(color_mode_override=effective_color_mode)
    apply_color_mode(enable_color)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="TestFeed: render test-engine event streams as a live console report.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the TestFeed CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'testfeed report EVENTS.ndjson' to render an event stream.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(report_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
