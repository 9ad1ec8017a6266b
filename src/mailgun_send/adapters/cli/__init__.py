"""Command-line interface for mailgun_send (rich-click).

Contents:
    * :func:`.main.main` - Entry point used by the console script and ``python -m``
    * :data:`.root.cli` - Root command group
    * :mod:`.commands` - Subcommands
    * :mod:`.context` - Typed Click context and traceback state helpers
"""

from __future__ import annotations

from .commands import (
    cli_config,
    cli_config_deploy,
    cli_config_generate_examples,
    cli_info,
    cli_logdemo,
    cli_send,
)
from .constants import CLICK_CONTEXT_SETTINGS, TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    CLIContext,
    TracebackState,
    apply_traceback_preferences,
    get_cli_context,
    restore_traceback_state,
    snapshot_traceback_state,
    store_cli_context,
)
from .exit_codes import ExitCode
from .main import main
from .root import cli

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
    "CLIContext",
    "ExitCode",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
    "cli",
    "main",
    "cli_config",
    "cli_config_deploy",
    "cli_config_generate_examples",
    "cli_info",
    "cli_logdemo",
    "cli_send",
]
