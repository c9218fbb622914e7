# topmark:header:start
#
#   project      : TestFeed
#   file         : __init__.py
#   file_relpath : src/testfeed/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TestFeed CLI subcommands."""

from __future__ import annotations
