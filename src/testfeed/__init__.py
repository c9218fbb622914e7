# topmark:header:start
#
#   project      : TestFeed
#   file         : __init__.py
#   file_relpath : src/testfeed/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TestFeed package.

TestFeed is a streaming console reporter for test-engine event streams. It
consumes ``node:test`` style lifecycle events, renders a hierarchical tree of
results while the run is in progress, and closes with a numbered failure
summary. It exposes both a CLI and a small typed API for automation.
"""

from __future__ import annotations
