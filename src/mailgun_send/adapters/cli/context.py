"""Typed Click context shared by the root group and its subcommands.

The root group swaps the services factory in ``ctx.obj`` for a
:class:`CLIContext`; ``send`` and the config commands read it back through
:func:`get_cli_context`. The traceback helpers keep ``--traceback`` and
``lib_cli_exit_tools.config`` in step, and let :func:`~mailgun_send.adapters.cli.main.main`
put the flags back once a run is over.

Contents:
    * :class:`CLIContext` - Configuration, services, profile and overrides.
    * :func:`store_cli_context` / :func:`get_cli_context` - Write and read it.
    * :func:`apply_traceback_preferences`, :func:`snapshot_traceback_state`,
      :func:`restore_traceback_state` - Traceback flag bookkeeping.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

if TYPE_CHECKING:
    from mailgun_send.composition import AppServices

TracebackState = tuple[bool, bool]
"""``(traceback_enabled, force_color)`` as stored in lib_cli_exit_tools."""


@dataclass(slots=True)
class CLIContext:
    """State the root group hands to every subcommand via ``ctx.obj``.

    Attributes:
        traceback: ``--traceback`` as given on the root group.
        config: Layered configuration with ``--set`` already applied.
        services: Ports wired by ``build_production`` or ``build_testing``.
        profile: ``--profile`` of the root group, if any.
        set_overrides: Raw ``--set`` strings, kept so a command that reloads
            configuration for another profile can apply them again.
    """

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None
    set_overrides: tuple[str, ...] = ()


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    config: Config,
    services: AppServices,
    profile: str | None = None,
    set_overrides: tuple[str, ...] = (),
) -> None:
    """Replace ``ctx.obj`` (the services factory) with a :class:`CLIContext`.

    Args:
        ctx: Context of the root group invocation.
        traceback: Whether full tracebacks were requested.
        config: Configuration every subcommand should see.
        services: Ports for this run; ``send`` uses ``send_message``.
        profile: Active configuration profile.
        set_overrides: ``SECTION.KEY=VALUE`` strings from the root group.

    Example:
        >>> from unittest.mock import MagicMock
        >>> ctx = MagicMock()
        >>> store_cli_context(ctx, traceback=True, config=MagicMock(), services=MagicMock(), profile="eu")
        >>> ctx.obj.profile
        'eu'
    """
    ctx.obj = CLIContext(
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the :class:`CLIContext` stored by the root group.

    Args:
        ctx: Context of a subcommand; Click shares ``obj`` with the parent.

    Returns:
        The stored context.

    Raises:
        RuntimeError: A subcommand ran without the root group, so ``ctx.obj``
            is still the factory or something else entirely.

    Example:
        >>> from unittest.mock import MagicMock
        >>> ctx = MagicMock()
        >>> ctx.obj = CLIContext(traceback=False, config=MagicMock(), services=MagicMock(), profile="eu")
        >>> get_cli_context(ctx).profile
        'eu'
    """
    if not isinstance(ctx.obj, CLIContext):
        raise RuntimeError("CLI context not initialized. Call store_cli_context first.")
    return ctx.obj


def apply_traceback_preferences(enabled: bool) -> None:
    """Mirror ``--traceback`` into lib_cli_exit_tools.

    Args:
        enabled: ``True`` prints full, coloured tracebacks on failure;
            ``False`` prints a truncated summary.

    Example:
        >>> apply_traceback_preferences(True)
        >>> lib_cli_exit_tools.config.traceback
        True
    """
    lib_cli_exit_tools.config.traceback = bool(enabled)
    lib_cli_exit_tools.config.traceback_force_color = bool(enabled)


def snapshot_traceback_state() -> TracebackState:
    """Capture the current lib_cli_exit_tools traceback flags.

    Returns:
        ``(traceback, traceback_force_color)``; missing attributes read as
        ``False``.
    """
    return (
        bool(getattr(lib_cli_exit_tools.config, "traceback", False)),
        bool(getattr(lib_cli_exit_tools.config, "traceback_force_color", False)),
    )


def restore_traceback_state(state: TracebackState) -> None:
    """Put back flags captured by :func:`snapshot_traceback_state`.

    Args:
        state: Pair returned by an earlier snapshot.

    Example:
        >>> before = snapshot_traceback_state()
        >>> apply_traceback_preferences(not before[0])
        >>> restore_traceback_state(before)
        >>> snapshot_traceback_state() == before
        True
    """
    lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = state


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
