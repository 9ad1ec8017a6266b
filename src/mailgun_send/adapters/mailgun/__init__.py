"""Mailgun adapter - HTTP API sending.

Provides the Mailgun messages-endpoint adapter built on httpx.

Structure:
    * :mod:`.config` - Mailgun configuration model and loader
    * :mod:`.client` - HTTP client and success payload
    * :mod:`.transport` - Configured send function (application port)
    * :mod:`.validation` - Parsing of user-supplied addresses

Contents:
    * :class:`.config.MailgunConfig` - Mailgun configuration container
    * :func:`.config.load_mailgun_config_from_dict` - Config dict loader
    * :class:`.client.MailgunClient` - Single-message API client
    * :class:`.client.SendResponse` - Success payload
    * :func:`.transport.send_message` - Primary sending interface
"""

from __future__ import annotations

from .client import MailgunClient, SendResponse
from .config import MailgunConfig, load_mailgun_config_from_dict
from .transport import build_client, send_message
from .validation import parse_address, parse_addresses

__all__ = [
    "MailgunClient",
    "MailgunConfig",
    "SendResponse",
    "build_client",
    "load_mailgun_config_from_dict",
    "parse_address",
    "parse_addresses",
    "send_message",
]
