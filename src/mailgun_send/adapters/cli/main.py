"""Process entry point shared by the ``mailgun-send`` script and ``python -m``.

Runs the root group with a services factory and turns every outcome into an
exit code: 0 after a send, the command's own code (22, 69, 78) for mapped
failures, Click's 2 for usage errors and lib_cli_exit_tools' code for
anything unexpected. The logging runtime is shut down before returning.

Contents:
    * :func:`main` - The only function the console script calls.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click
import lib_cli_exit_tools
import lib_log_rich.runtime

from mailgun_send import __init__conf__

from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    apply_traceback_preferences,
    restore_traceback_state,
    snapshot_traceback_state,
)

if TYPE_CHECKING:
    from mailgun_send.composition import AppServices


def _run_cli(argv: Sequence[str] | None, *, services_factory: Callable[[], AppServices]) -> int:
    """Invoke the root group once and translate how it ended.

    Args:
        argv: Arguments without the program name; ``None`` reads ``sys.argv``.
        services_factory: Handed to Click as ``obj``.

    Returns:
        ``0``, the code a command raised through ``SystemExit``, Click's usage
        code, or the code lib_cli_exit_tools derives from an unexpected error
        after printing it.
    """
    from .root import cli

    # lib_cli_exit_tools.run_cli cannot pass ``obj``; same handling, inline.
    args = list(argv) if argv is not None else sys.argv[1:]
    try:
        cli.main(
            args=args,
            prog_name=__init__conf__.shell_command,
            obj=services_factory,
            standalone_mode=False,
        )
        return 0
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:  # noqa: BLE001 - CLI boundary
        tracebacks_enabled = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
        apply_traceback_preferences(tracebacks_enabled)
        length_limit = TRACEBACK_VERBOSE_LIMIT if tracebacks_enabled else TRACEBACK_SUMMARY_LIMIT
        lib_cli_exit_tools.print_exception_message(trace_back=tracebacks_enabled, length_limit=length_limit)
        return lib_cli_exit_tools.get_system_exit_code(exc)


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run the CLI and return its exit code.

    Args:
        argv: Arguments without the program name; ``None`` reads ``sys.argv``.
        restore_traceback: Put the previous traceback flags back afterwards.
        services_factory: Builds the :class:`AppServices` for this run,
            ``build_production`` for real use or ``build_testing`` in tests.

    Returns:
        The exit code; the console script passes it to ``sys.exit``.

    Raises:
        ValueError: If ``services_factory`` is missing.

    Example:
        >>> from mailgun_send.composition import build_testing
        >>> main(["info"], services_factory=build_testing)  # doctest: +SKIP
        0
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    previous_state = snapshot_traceback_state()
    try:
        return _run_cli(argv, services_factory=services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(previous_state)
        # Worker threads must not tear down the shared runtime.
        if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
            lib_log_rich.runtime.shutdown()


__all__ = ["main"]
