"""In-memory Mailgun adapters for testing.

Provides send functions that satisfy the same Protocols as production
adapters but perform no HTTP requests.

Contents:
    * :class:`MailgunSpy` - Captures send calls for test assertions.
    * :func:`load_mailgun_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ...domain.address import EmailAddress
from ...domain.errors import ConfigurationError
from ...domain.message import Message
from ..mailgun.client import SendResponse
from ..mailgun.config import MailgunConfig


def _empty_send_list() -> list[dict[str, Any]]:
    """Create an empty typed list for send records."""
    return []


@dataclass
class MailgunSpy:
    """Captures send operations for test assertions.

    Each test should create its own MailgunSpy instance to avoid cross-test
    pollution. ``send_message`` matches the SendMessage protocol.

    Attributes:
        sent_messages: List of captured send_message calls.
        response: Payload returned on success.
        raise_exception: When set, send operations raise this exception
            after recording the call.

    Example:
        >>> spy = MailgunSpy()
        >>> config = MailgunConfig(domain="mg.test.com", api_key="key-1", from_address="a@test.com")
        >>> spy.send_message(config=config, message=Message(subject="Hi")).message
        'Queued. Thank you.'
        >>> len(spy.sent_messages)
        1
    """

    sent_messages: list[dict[str, Any]] = field(default_factory=_empty_send_list)
    response: SendResponse = field(
        default_factory=lambda: SendResponse(message="Queued. Thank you.", id="<spy@mg.test>")
    )
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent_messages.clear()
        self.raise_exception = None

    def send_message(
        self,
        *,
        config: MailgunConfig,
        message: Message,
        sender: EmailAddress | None = None,
    ) -> SendResponse:
        """Record the call and return the canned response.

        Mirrors the production sender resolution so CLI paths that rely on
        the configured default sender behave the same way.

        Raises:
            ConfigurationError: When no sender is given and none is configured.
            Exception: If raise_exception is set, raises that exception.
        """
        resolved = sender if sender is not None else config.default_sender
        if resolved is None:
            raise ConfigurationError("No sender given and no mailgun.from_address configured")
        self.sent_messages.append(
            {
                "config": config,
                "message": message,
                "sender": resolved,
                "params": {**message.to_parameters(), "from": resolved.render()},
            }
        )
        if self.raise_exception is not None:
            raise self.raise_exception
        return self.response


def load_mailgun_config_from_dict_in_memory(
    config_dict: Mapping[str, Any],
) -> MailgunConfig:
    """Parse Mailgun config from dict using the real Pydantic model."""
    section = config_dict.get("mailgun", {})
    return MailgunConfig.model_validate(section if section else {})


__all__ = [
    "MailgunSpy",
    "load_mailgun_config_from_dict_in_memory",
]
