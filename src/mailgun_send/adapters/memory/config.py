"""In-memory configuration and logging adapters for testing.

Satisfy the same Protocols as the production adapters without touching the
filesystem. Logging runs, but silently. The in-memory configuration carries a
complete ``[mailgun]`` section so the whole send path can run against a
MailgunSpy with no further setup.
"""

from __future__ import annotations

import copy
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import lib_log_rich.runtime
from lib_layered_config import Config

from mailgun_send import __init__conf__

from ...domain.enums import DeployTarget, OutputFormat

IN_MEMORY_SETTINGS: dict[str, Any] = {
    "mailgun": {
        "domain": "mg.example.test",
        "api_key": "key-in-memory",
        "from_address": "noreply@example.test",
        "from_name": "Example",
    }
}


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return a fresh Config holding :data:`IN_MEMORY_SETTINGS`."""
    return Config(copy.deepcopy(IN_MEMORY_SETTINGS), {})


def get_default_config_path_in_memory() -> Path:
    """Return a synthetic path (not a real file)."""
    return Path(tempfile.gettempdir()) / "mailgun-send" / "defaultconfig.toml"


def deploy_configuration_in_memory(
    *,
    targets: Sequence[DeployTarget],
    force: bool = False,
    profile: str | None = None,
    set_permissions: bool = True,
    dir_mode: int | None = None,
    file_mode: int | None = None,
) -> list[Path]:
    """Simulate deployment; nothing is written, so nothing is reported."""
    return []


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """Reject unknown sections like the real display, otherwise print nothing.

    Raises:
        ValueError: If ``section`` is not present in ``config``.
    """
    if section is not None and section not in config.as_dict():
        raise ValueError(f"Section {section!r} not found in configuration")


IN_MEMORY_RUNTIME: dict[str, Any] = {
    "console_level": "CRITICAL",
    "backend_level": "CRITICAL",
    "enable_ring_buffer": False,
    "queue_enabled": False,
}


def init_logging_in_memory(config: Config) -> None:
    """Start a silent lib_log_rich runtime so commands can ``bind`` context.

    Nothing reaches the console below CRITICAL and no background queue is
    started. An already initialised runtime is left as it is; ``main``
    shuts the runtime down when the command finishes.

    Example:
        >>> init_logging_in_memory(Config({}, {}))  # doctest: +SKIP
        >>> lib_log_rich.runtime.is_initialised()  # doctest: +SKIP
        True
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.runtime.init(
        lib_log_rich.runtime.RuntimeConfig(
            service=__init__conf__.name,
            environment="test",
            **IN_MEMORY_RUNTIME,
        )
    )


__all__ = [
    "IN_MEMORY_RUNTIME",
    "IN_MEMORY_SETTINGS",
    "deploy_configuration_in_memory",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
]
