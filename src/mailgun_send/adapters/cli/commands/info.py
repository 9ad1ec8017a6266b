"""``info`` command: name, version, homepage, author and shell command.

Contents:
    * :func:`cli_info` - Print what :func:`mailgun_send.__init__conf__.print_info` reports.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from mailgun_send import __init__conf__

from ..constants import CLICK_CONTEXT_SETTINGS

logger = logging.getLogger(__name__)


@click.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print installed package metadata.

    \f
    Handy in bug reports: shows exactly which ``mailgun-send`` build answered.

    Example:
        >>> from click.testing import CliRunner
        >>> result = CliRunner().invoke(cli_info)  # doctest: +SKIP
        >>> "mailgun_send" in result.output  # doctest: +SKIP
        True
    """
    with lib_log_rich.runtime.bind(job_id="cli-info", extra={"command": "info"}):
        logger.info("Displaying package information")
        __init__conf__.print_info()


__all__ = ["cli_info"]
