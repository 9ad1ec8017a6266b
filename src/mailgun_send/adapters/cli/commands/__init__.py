"""Subcommands registered on the root ``mailgun-send`` group.

Contents:
    * :mod:`.info` - ``info``
    * :mod:`.config` - ``config``, ``config-deploy``, ``config-generate-examples``
    * :mod:`.logging` - ``logdemo``
    * :mod:`.mailgun` - ``send``
"""

from __future__ import annotations

from .config import cli_config, cli_config_deploy, cli_config_generate_examples
from .info import cli_info
from .logging import cli_logdemo
from .mailgun import cli_send

__all__ = [
    "cli_config",
    "cli_config_deploy",
    "cli_config_generate_examples",
    "cli_info",
    "cli_logdemo",
    "cli_send",
]
