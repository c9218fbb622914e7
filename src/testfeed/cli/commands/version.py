# topmark:header:start
#
#   project      : TestFeed
#   file         : version.py
#   file_relpath : src/testfeed/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TestFeed `version` command.

Prints the current TestFeed version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from testfeed.constants import TESTFEED_VERSION

if TYPE_CHECKING:
    from testfeed.cli_shared.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of TestFeed.",
)
def version_command() -> None:
    """Show the current version of TestFeed."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    console.print(console.styled(TESTFEED_VERSION, bold=True))
