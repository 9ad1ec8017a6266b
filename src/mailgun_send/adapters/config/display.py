"""Display configuration with the Mailgun API key redacted.

Thin wrapper around lib_layered_config's Rich-styled display_config. Flushes
pending log output first so log lines do not interleave with the display,
and masks ``mailgun.api_key`` so the secret never reaches a terminal.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from mailgun_send.domain.enums import OutputFormat

REDACTED: Final[str] = "[REDACTED]"


def redact_secrets(config: Config) -> Config:
    """Return ``config`` with a non-empty ``mailgun.api_key`` replaced.

    Example:
        >>> cfg = Config({"mailgun": {"api_key": "key-secret"}}, {})
        >>> redact_secrets(cfg)["mailgun"]["api_key"]
        '[REDACTED]'
        >>> empty = Config({"mailgun": {"api_key": ""}}, {})
        >>> redact_secrets(empty) is empty
        True
    """
    section: Any = config.get("mailgun", default={})
    if not isinstance(section, Mapping) or not section.get("api_key"):
        return config
    return config.with_overrides({"mailgun": {"api_key": REDACTED}})


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Print the merged configuration.

    Args:
        config: Loaded layered configuration.
        output_format: HUMAN (TOML-like with provenance) or JSON.
        section: Only display this top-level section.
        console: Rich console to print to; primarily for tests.
        profile: Profile name shown in provenance comments.

    Raises:
        ValueError: If ``section`` does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    lib_format = LibOutputFormat(output_format.value)
    _lib_display(redact_secrets(config), output_format=lib_format, section=section, profile=profile, console=console)


__all__ = ["REDACTED", "display_config", "redact_secrets"]
