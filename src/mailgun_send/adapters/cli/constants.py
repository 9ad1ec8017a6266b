"""Values every ``mailgun-send`` command agrees on.

Contents:
    * :data:`CLICK_CONTEXT_SETTINGS` - ``-h`` and ``--help`` on the root group and each command.
    * :data:`TRACEBACK_SUMMARY_LIMIT` - Error text kept without ``--traceback``.
    * :data:`TRACEBACK_VERBOSE_LIMIT` - Error text kept with ``--traceback``.
"""

from __future__ import annotations

from typing import Final

#: ``send --help`` and ``send -h`` behave the same.
CLICK_CONTEXT_SETTINGS: Final[dict[str, list[str]]] = {"help_option_names": ["-h", "--help"]}

#: Character budget used when printing truncated tracebacks.
TRACEBACK_SUMMARY_LIMIT: Final[int] = 500

#: Character budget used when verbose tracebacks are enabled.
TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
]
