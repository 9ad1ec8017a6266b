"""Public package surface for sending email through the Mailgun HTTP API.

This module provides the stable public API for the package, routing imports
through the proper architectural layers:
- Domain exports: addresses, messages, zones and the error taxonomy
- Adapter exports: the HTTP client and its success payload
- Composition exports: wired configuration access
- Metadata: Package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Adapter exports
from .adapters.mailgun.client import MailgunClient, SendResponse

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain import (
    ConfigurationError,
    EmailAddress,
    MalformedResponseError,
    Message,
    ProviderRejectedError,
    SendError,
    TransportError,
    Zone,
)

__all__ = [
    "ConfigurationError",
    "EmailAddress",
    "MailgunClient",
    "MalformedResponseError",
    "Message",
    "ProviderRejectedError",
    "SendError",
    "SendResponse",
    "TransportError",
    "Zone",
    "get_config",
    "print_info",
]
