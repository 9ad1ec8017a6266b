"""Root ``mailgun-send`` command group and its global options.

Every subcommand runs below :func:`cli`, which turns the services factory in
``ctx.obj`` into a :class:`~mailgun_send.adapters.cli.context.CLIContext`:
layered configuration with ``--set`` applied, a started logging runtime and
the traceback preference.

Contents:
    * :func:`cli` - Root group; ``send`` and the config commands hang off it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import rich_click as click
from lib_layered_config import Config

from mailgun_send import __init__conf__
from mailgun_send.adapters.config.overrides import apply_overrides

from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, store_cli_context

if TYPE_CHECKING:
    from mailgun_send.composition import AppServices


def _apply_cli_overrides(config: Config, set_overrides: tuple[str, ...]) -> Config:
    """Layer the root ``--set`` values over ``config``.

    Args:
        config: Configuration as read from the layered sources.
        set_overrides: ``SECTION.KEY=VALUE`` strings, e.g. ``mailgun.zone=eu``.

    Returns:
        A new Config, or ``config`` itself when nothing was given.

    Raises:
        click.UsageError: An override is malformed or would replace a scalar
            with a table; Click reports it with exit code 2.
    """
    try:
        return apply_overrides(config, set_overrides)
    except (ValueError, TypeError) as exc:
        raise click.UsageError(str(exc)) from exc


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--profile",
    type=str,
    default=None,
    help="Load configuration from a named profile (e.g., 'production', 'eu')",
)
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    default=(),
    metavar="SECTION.KEY=VALUE",
    help="Override a configuration setting, e.g. --set mailgun.zone=eu (repeatable).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Load configuration, start logging and hand state to the subcommand.

    ``ctx.obj`` arrives as a services factory and leaves as a
    :class:`~mailgun_send.adapters.cli.context.CLIContext`. The traceback
    preference is mirrored into ``lib_cli_exit_tools.config`` first, so a
    configuration that fails to load is already reported with ``--traceback``.

    Raises:
        RuntimeError: ``ctx.obj`` is not a services factory.

    Example:
        >>> from click.testing import CliRunner
        >>> from mailgun_send.composition import build_testing
        >>> result = CliRunner().invoke(cli, ["info"], obj=build_testing)
        >>> result.exit_code
        0
    """
    if not callable(ctx.obj):
        raise RuntimeError("Services factory not provided. This is a bug.")
    services: AppServices = ctx.obj()  # type: ignore[assignment]
    apply_traceback_preferences(traceback)
    config = _apply_cli_overrides(services.get_config(profile=profile), set_overrides)
    services.init_logging(config)
    store_cli_context(
        ctx,
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Deferred: the command modules import ``cli`` helpers from this package.
def _register_commands() -> None:
    from .commands import (
        cli_config,
        cli_config_deploy,
        cli_config_generate_examples,
        cli_info,
        cli_logdemo,
        cli_send,
    )

    for cmd in (
        cli_info,
        cli_config,
        cli_config_deploy,
        cli_config_generate_examples,
        cli_logdemo,
        cli_send,
    ):
        cli.add_command(cmd)


_register_commands()


__all__ = ["cli"]
