# topmark:header:start
#
#   project      : TestFeed
#   file         : constants.py
#   file_relpath : src/testfeed/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TestFeed Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

TESTFEED_VERSION: str = get_version("testfeed")

# Config discovery
TESTFEED_TOML_NAME: str = "testfeed.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "testfeed"

# Environment variables
LOG_LEVEL_ENV_VAR: str = "TESTFEED_LOG_LEVEL"

# Rendering defaults
SUCCESS_SYMBOL: str = "\u2714"  # heavy check mark
INFO_SYMBOL: str = "\u2139"  # information source
SLOW_TEST_THRESHOLD_MS: float = 75
FAILURE_INDENT: int = 3

# Harness failure envelope (node:test wraps every failure in one of these)
TEST_FAILURE_CODE: str = "ERR_TEST_FAILURE"
CANCELLED_BY_PARENT: str = "cancelledByParent"
