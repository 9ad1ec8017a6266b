"""Callable protocols the CLI and composition root depend on.

Adapters satisfy these by signature alone; nothing here imports httpx or
lib_layered_config.
"""

from __future__ import annotations

from .ports import (
    DeployConfiguration,
    DisplayConfig,
    GetConfig,
    GetDefaultConfigPath,
    InitLogging,
    LoadMailgunConfigFromDict,
    SendMessage,
)

__all__ = [
    "DeployConfiguration",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadMailgunConfigFromDict",
    "SendMessage",
]
