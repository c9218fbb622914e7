# topmark:header:start
#
#   project      : TestFeed
#   file         : exit_codes.py
#   file_relpath : src/testfeed/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the TestFeed CLI.

TestFeed aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently. ``TESTS_FAILED = 1`` mirrors what test
runners return when the reported run contained failing tests.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the TestFeed CLI.

    Attributes:
        SUCCESS: The report was rendered and no leaf test failed.
        TESTS_FAILED: The report was rendered and at least one leaf test failed.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: Malformed event input. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        PROTOCOL_ERROR: The event stream broke the nesting contract. Mirrors BSD
            ``EX_PROTOCOL (76)``.
        IO_ERROR: I/O error reading input. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Invalid configuration. Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    TESTS_FAILED = 1

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PROTOCOL_ERROR = 76  # EX_PROTOCOL
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
