"""Composition root: picks the adapter behind every application port.

The CLI receives a zero-argument factory returning :class:`AppServices`;
production passes :func:`build_production`, tests pass :func:`build_testing`
or a ``dataclasses.replace`` of either with single ports swapped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..adapters.config.deploy import deploy_configuration
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config, get_default_config_path
from ..adapters.logging.setup import init_logging
from ..adapters.mailgun.config import load_mailgun_config_from_dict
from ..adapters.mailgun.transport import send_message

# Type-check-time proof that each production function satisfies its port.
if TYPE_CHECKING:
    from ..adapters.memory.mailgun import MailgunSpy
    from ..application.ports import (
        DeployConfiguration,
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadMailgunConfigFromDict,
        SendMessage,
    )

    _assert_send_message: SendMessage = send_message
    _assert_load_mailgun_config_from_dict: LoadMailgunConfigFromDict = load_mailgun_config_from_dict
    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_deploy_configuration: DeployConfiguration = deploy_configuration
    _assert_display_config: DisplayConfig = display_config
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Every port the CLI calls, bundled for one invocation."""

    send_message: SendMessage
    load_mailgun_config_from_dict: LoadMailgunConfigFromDict
    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    deploy_configuration: DeployConfiguration
    display_config: DisplayConfig
    init_logging: InitLogging


def build_production() -> AppServices:
    """Real HTTP sends, layered config on disk, lib_log_rich logging."""
    return AppServices(
        send_message=send_message,
        load_mailgun_config_from_dict=load_mailgun_config_from_dict,
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        deploy_configuration=deploy_configuration,
        display_config=display_config,
        init_logging=init_logging,
    )


def build_testing(*, spy: MailgunSpy | None = None) -> AppServices:
    """No network, no disk: sends land in ``spy`` (a new one when omitted).

    Example:
        >>> from mailgun_send.adapters.memory import MailgunSpy
        >>> from mailgun_send.domain import Message
        >>> spy = MailgunSpy()
        >>> services = build_testing(spy=spy)
        >>> config = services.load_mailgun_config_from_dict(services.get_config().as_dict())
        >>> services.send_message(config=config, message=Message()).message
        'Queued. Thank you.'
        >>> len(spy.sent_messages)
        1
    """
    from ..adapters.memory import (
        MailgunSpy,
        deploy_configuration_in_memory,
        display_config_in_memory,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
        load_mailgun_config_from_dict_in_memory,
    )

    mailgun_spy = spy if spy is not None else MailgunSpy()
    return AppServices(
        send_message=mailgun_spy.send_message,
        load_mailgun_config_from_dict=load_mailgun_config_from_dict_in_memory,
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        deploy_configuration=deploy_configuration_in_memory,
        display_config=display_config_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    "AppServices",
    "build_production",
    "build_testing",
    "deploy_configuration",
    "display_config",
    "get_config",
    "get_default_config_path",
    "init_logging",
    "load_mailgun_config_from_dict",
    "send_message",
]
