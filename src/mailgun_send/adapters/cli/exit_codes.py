"""Exit codes returned by ``mailgun-send`` commands.

Values follow sysexits.h and errno where one fits, so shell scripts wrapping
the CLI can tell a bad argument from a misconfiguration from a rejected send.
Signal codes are listed for reference only; lib_cli_exit_tools produces them.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes.

    Example:
        >>> int(ExitCode.DELIVERY_FAILURE), int(ExitCode.CONFIG_ERROR)
        (69, 78)
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    PERMISSION_DENIED = 13
    INVALID_ARGUMENT = 22
    DELIVERY_FAILURE = 69  # EX_UNAVAILABLE
    CONFIG_ERROR = 78  # EX_CONFIG
    TIMEOUT = 110
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


__all__ = ["ExitCode"]
