"""Domain layer - pure business logic with no I/O or framework dependencies.

Contains the value objects describing a send and the error taxonomy every
layer speaks.

Contents:
    * :mod:`.address` - Sender/recipient addresses (EmailAddress)
    * :mod:`.message` - Message content and form-parameter flattening
    * :mod:`.enums` - Domain enumerations (Zone, OutputFormat, DeployTarget)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .address import EmailAddress
from .enums import DEFAULT_BASE_URL, DeployTarget, OutputFormat, Zone
from .errors import (
    ConfigurationError,
    InvalidRecipientError,
    MalformedResponseError,
    ProviderRejectedError,
    SendError,
    TransportError,
)
from .message import RECIPIENT_VARIABLES_KEY, TEMPLATE_VARIABLES_KEY, Message

__all__ = [
    # Values
    "EmailAddress",
    "Message",
    "RECIPIENT_VARIABLES_KEY",
    "TEMPLATE_VARIABLES_KEY",
    # Enums
    "DEFAULT_BASE_URL",
    "DeployTarget",
    "OutputFormat",
    "Zone",
    # Errors
    "ConfigurationError",
    "InvalidRecipientError",
    "MalformedResponseError",
    "ProviderRejectedError",
    "SendError",
    "TransportError",
]
