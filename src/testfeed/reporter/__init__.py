# topmark:header:start
#
#   project      : TestFeed
#   file         : __init__.py
#   file_relpath : src/testfeed/reporter/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reporter pipeline: diagnostics aggregation, formatting and the tree state machine."""

from __future__ import annotations

from testfeed.reporter.diagnostics import GlobalDiagnostics, process_global_diagnostics
from testfeed.reporter.engine import FailureRecord, TreeReporter
from testfeed.reporter.formatting import (
    ParentStack,
    format_error,
    format_global_diagnostics,
    indent,
    print_parent_stack,
)

__all__ = [
    "FailureRecord",
    "GlobalDiagnostics",
    "ParentStack",
    "TreeReporter",
    "format_error",
    "format_global_diagnostics",
    "indent",
    "print_parent_stack",
    "process_global_diagnostics",
]
