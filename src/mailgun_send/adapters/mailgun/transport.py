"""Configured message sending.

Provides the send_message function that resolves credentials, zone and
sender from MailgunConfig and performs one send through MailgunClient.
"""

from __future__ import annotations

import logging

import httpx

from mailgun_send.domain.address import EmailAddress
from mailgun_send.domain.errors import ConfigurationError, SendError
from mailgun_send.domain.message import Message

from .client import MailgunClient, SendResponse
from .config import MailgunConfig

logger = logging.getLogger(__name__)


def _resolve_sender(config: MailgunConfig, sender: EmailAddress | None) -> EmailAddress:
    """Determine the sender from the explicit override or the config default.

    Raises:
        ConfigurationError: When neither override nor config provides a sender.
    """
    resolved = sender if sender is not None else config.default_sender
    if resolved is None:
        raise ConfigurationError("No sender given and no mailgun.from_address configured")
    return resolved


def build_client(config: MailgunConfig, *, transport: httpx.BaseTransport | None = None) -> MailgunClient:
    """Create a MailgunClient from validated configuration.

    Raises:
        ConfigurationError: When domain or api_key is not configured.

    Example:
        >>> config = MailgunConfig(domain="mg.example.com", api_key="key-1", zone="eu")
        >>> build_client(config).messages_url
        'https://api.eu.mailgun.net/v3/mg.example.com/messages'
    """
    if config.domain is None:
        raise ConfigurationError("No Mailgun domain configured (mailgun.domain is empty)")
    if config.api_key is None:
        raise ConfigurationError("No Mailgun API key configured (mailgun.api_key is empty)")
    return MailgunClient(
        config.domain,
        config.api_key,
        zone=config.base_url,
        timeout=config.timeout,
        transport=transport,
    )


def send_message(
    *,
    config: MailgunConfig,
    message: Message,
    sender: EmailAddress | None = None,
    transport: httpx.BaseTransport | None = None,
) -> SendResponse:
    """Send one message using configured Mailgun settings.

    Args:
        config: Mailgun configuration with credentials, zone and default sender.
        message: Message content.
        sender: Override sender. Uses config.from_address/from_name when None.
        transport: httpx transport to send through; the default opens a real connection.

    Returns:
        The provider's success payload.

    Raises:
        ConfigurationError: Missing domain, API key, or sender.
        TransportError: Network-level failure.
        ProviderRejectedError: Non-2xx answer; message is the raw body.
        MalformedResponseError: 2xx answer with an unexpected body.

    Side Effects:
        One HTTP request to Mailgun. Logs the outcome at INFO, failures at ERROR.
    """
    resolved_sender = _resolve_sender(config, sender)
    client = build_client(config, transport=transport)

    try:
        result = client.send(resolved_sender, message)
    except SendError as exc:
        logger.error(
            "Mailgun send failed",
            extra={"domain": config.domain, "error_type": type(exc).__name__},
        )
        raise

    logger.info(
        "Message accepted by Mailgun",
        extra={"domain": config.domain, "id": result.id, "sender": resolved_sender.address},
    )
    return result


__all__ = [
    "build_client",
    "send_message",
]
