"""Mailgun sending commands.

Contents:
    * :mod:`._common` - Config overrides, input parsing and error mapping
    * :mod:`.send` - The ``send`` command
"""

from __future__ import annotations

from .send import cli_send

__all__ = ["cli_send"]
