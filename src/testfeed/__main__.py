# topmark:header:start
#
#   project      : TestFeed
#   file         : __main__.py
#   file_relpath : src/testfeed/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running TestFeed via ``python -m testfeed``.

It delegates directly to :func:`testfeed.cli.main.cli`, so the module and the
``testfeed`` console script share a single CLI entry point.

Examples:
    Render a recorded event stream::

        python -m testfeed report events.ndjson
"""

from __future__ import annotations

from testfeed.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
