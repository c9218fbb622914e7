# topmark:header:start
#
#   project      : TestFeed
#   file         : __init__.py
#   file_relpath : src/testfeed/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for TestFeed: the reporter config model, TOML loading and logging."""

from __future__ import annotations

from testfeed.config.model import MutableReporterConfig, ReporterConfig

__all__ = [
    "MutableReporterConfig",
    "ReporterConfig",
]
