"""Callable protocols that every adapter implementation must satisfy.

The CLI only ever calls what :class:`~mailgun_send.composition.AppServices`
holds, and each field is typed with one of these protocols. Plain functions
(``send_message``, ``get_config`` ...) and bound methods
(``MailgunSpy.send_message``) fit by signature; nothing subclasses them.

Infrastructure types (``Config``, ``MailgunConfig``, ``SendResponse``) are
imported under ``TYPE_CHECKING`` only, so importing this module never pulls in
httpx or lib_layered_config.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.address import EmailAddress
from ..domain.enums import DeployTarget, OutputFormat
from ..domain.message import Message

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.mailgun.client import SendResponse
    from ..adapters.mailgun.config import MailgunConfig


class GetConfig(Protocol):
    """Merged configuration for an optional profile.

    Production reads every layer (defaults, app, host, user, dotenv, env)
    and caches the result; the in-memory version returns a ready
    ``[mailgun]`` section.
    """

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Location of the bundled ``defaultconfig.toml``."""

    def __call__(self) -> Path: ...


class DeployConfiguration(Protocol):
    """Copy the bundled configuration into app, host or user locations.

    Returns the files actually written; skipped files are not listed.
    Raises ``PermissionError`` when a system location is not writable.
    """

    def __call__(
        self,
        *,
        targets: Sequence[DeployTarget],
        force: bool = ...,
        profile: str | None = ...,
        set_permissions: bool = ...,
        dir_mode: int | None = ...,
        file_mode: int | None = ...,
    ) -> list[Path]: ...


class DisplayConfig(Protocol):
    """Print configuration as text or JSON with the Mailgun key redacted.

    Raises ``ValueError`` for a ``section`` that does not exist.
    """

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class SendMessage(Protocol):
    """Deliver one message through Mailgun and return its queued payload.

    ``sender`` overrides ``config.from_address``/``from_name``. Raises
    ``ConfigurationError`` before any request when domain, key or sender is
    missing, and a ``SendError`` subclass when the exchange fails.
    """

    def __call__(
        self,
        *,
        config: MailgunConfig,
        message: Message,
        sender: EmailAddress | None = ...,
    ) -> SendResponse: ...


class LoadMailgunConfigFromDict(Protocol):
    """Validate the ``[mailgun]`` section of a configuration mapping."""

    def __call__(self, config_dict: Mapping[str, Any]) -> MailgunConfig: ...


class InitLogging(Protocol):
    """Start the lib_log_rich runtime once; later calls do nothing."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DeployConfiguration",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadMailgunConfigFromDict",
    "SendMessage",
]
