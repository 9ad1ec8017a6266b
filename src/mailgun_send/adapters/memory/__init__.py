"""Stand-ins for every port that never touch disk or network.

``build_testing`` wires these. Logging runs silently; ``MailgunSpy`` records
each send so tests can assert on the exact form parameters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    deploy_configuration_in_memory,
    display_config_in_memory,
    get_config_in_memory,
    get_default_config_path_in_memory,
    init_logging_in_memory,
)
from .mailgun import (
    MailgunSpy,
    load_mailgun_config_from_dict_in_memory,
)

# Static conformance assertions
if TYPE_CHECKING:
    from mailgun_send.application.ports import (
        DeployConfiguration,
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadMailgunConfigFromDict,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_deploy_configuration: DeployConfiguration = deploy_configuration_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_mailgun_config: LoadMailgunConfigFromDict = load_mailgun_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory

__all__ = [
    "MailgunSpy",
    "deploy_configuration_in_memory",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
    "load_mailgun_config_from_dict_in_memory",
]
