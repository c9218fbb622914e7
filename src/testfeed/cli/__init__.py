# topmark:header:start
#
#   project      : TestFeed
#   file         : __init__.py
#   file_relpath : src/testfeed/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line interface for TestFeed."""

from __future__ import annotations
