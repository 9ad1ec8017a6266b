"""HTTP client for the Mailgun messages endpoint.

Combines a sender and a :class:`~mailgun_send.domain.message.Message` into one
authenticated form POST, submits it with httpx, and maps the answer onto
:class:`SendResponse` or a :class:`~mailgun_send.domain.errors.SendError`.

Contents:
    * :class:`SendResponse` - Parsed success payload.
    * :class:`MailgunClient` - Credentials, zone selection and the send call.
"""

from __future__ import annotations

import logging
from typing import Any, Final

import httpx
import orjson
from pydantic import BaseModel, ConfigDict, ValidationError

from mailgun_send.domain.address import EmailAddress
from mailgun_send.domain.enums import DEFAULT_BASE_URL, Zone
from mailgun_send.domain.errors import MalformedResponseError, ProviderRejectedError, TransportError
from mailgun_send.domain.message import Message

logger = logging.getLogger(__name__)

MESSAGES_ENDPOINT: Final[str] = "messages"
AUTH_USERNAME: Final[str] = "api"

# Keywords that may indicate sensitive data in exception messages
_SENSITIVE_KEYWORDS = frozenset(
    {
        "password",
        "credential",
        "auth",
        "secret",
        "token",
        "key",
    }
)


class SendResponse(BaseModel):
    """Success payload returned by the messages endpoint.

    Example:
        >>> SendResponse.model_validate({"message": "Queued. Thank you.", "id": "<abc@mg>"}).id
        '<abc@mg>'
    """

    model_config = ConfigDict(frozen=True)

    message: str
    id: str


def _sanitize_exception_message(exc: Exception, api_key: str) -> str:
    """Sanitize a transport exception message to prevent credential exposure.

    Example:
        >>> _sanitize_exception_message(OSError("Connection refused"), "key-1")
        'Connection refused'
        >>> _sanitize_exception_message(OSError("bad auth for key-1"), "key-1")
        'Request to Mailgun failed. Check network and endpoint configuration.'
    """
    message = str(exc)
    lowered = message.lower()
    if (api_key and api_key in message) or any(keyword in lowered for keyword in _SENSITIVE_KEYWORDS):
        return "Request to Mailgun failed. Check network and endpoint configuration."
    return message


def _parse_success(response: httpx.Response) -> SendResponse:
    """Parse a 2xx body into SendResponse.

    Raises:
        MalformedResponseError: When the body is not JSON of the expected shape.
    """
    try:
        return SendResponse.model_validate(orjson.loads(response.content))
    except orjson.JSONDecodeError as exc:
        raise MalformedResponseError(f"Response body is not valid JSON: {exc}") from exc
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Expected JSON object with string 'message' and 'id', got: {response.text[:200]!r}"
        ) from exc


class MailgunClient:
    """Mailgun API client for single-message sends.

    Holds only configuration; every send opens its own HTTP client for one
    exchange, so one instance can serve concurrent sends.

    Args:
        domain: Sending domain registered with Mailgun.
        api_key: Private API key, used as the Basic-auth password.
        zone: Optional regional base URL (or :class:`Zone`). None selects
            the default global endpoint.
        timeout: Optional httpx timeout in seconds. None keeps httpx's default.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.

    Example:
        >>> client = MailgunClient("mg.example.com", "key-123")
        >>> client.messages_url
        'https://api.mailgun.net/v3/mg.example.com/messages'
        >>> client.set_zone(Zone.EU)
        >>> client.messages_url
        'https://api.eu.mailgun.net/v3/mg.example.com/messages'
    """

    def __init__(
        self,
        domain: str,
        api_key: str,
        *,
        zone: str | Zone | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._domain = domain
        self._api_key = api_key
        self._zone: str | None = None
        self._timeout = timeout
        self._transport = transport
        if zone is not None:
            self.set_zone(zone)

    def __repr__(self) -> str:
        return f"MailgunClient(domain={self._domain!r}, zone={self._zone!r}, api_key='[REDACTED]')"

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def zone(self) -> str | None:
        """Configured regional base URL, or None when the default is used."""
        return self._zone

    def set_zone(self, zone: str | Zone) -> None:
        """Select the regional base URL used by subsequent sends.

        Trailing slashes are dropped so the composed URL never doubles them.
        """
        value = zone.value if isinstance(zone, Zone) else zone
        self._zone = value.rstrip("/")

    @property
    def base_url(self) -> str:
        return self._zone if self._zone is not None else DEFAULT_BASE_URL

    @property
    def messages_url(self) -> str:
        return f"{self.base_url}/{self._domain}/{MESSAGES_ENDPOINT}"

    def build_params(self, sender: EmailAddress, message: Message) -> dict[str, str]:
        """Flatten ``message`` and set ``from`` to the rendered sender.

        Example:
            >>> client = MailgunClient("mg.example.com", "key-123")
            >>> params = client.build_params(EmailAddress.name_address("Ops", "ops@b.c"), Message(subject="Hi"))
            >>> params["from"]
            'Ops <ops@b.c>'
        """
        params = message.to_parameters()
        params["from"] = sender.render()
        return params

    def send(self, sender: EmailAddress, message: Message) -> SendResponse:
        """Send one message and return the provider's success payload.

        Performs exactly one form POST to :attr:`messages_url`, authenticated
        with HTTP Basic auth (username ``api``, password the API key).

        Args:
            sender: Address placed in the ``from`` parameter; always wins.
            message: Content to flatten into form parameters.

        Returns:
            Parsed success payload (provider message and id).

        Raises:
            TransportError: The request could not be sent, or the response
                could not be read or decoded.
            TypeError: The injected transport is not a sync httpx transport.
            ProviderRejectedError: The provider answered with a non-2xx status;
                the message is the raw response body.
            MalformedResponseError: A 2xx answer whose body is not the
                expected JSON shape.
        """
        params = self.build_params(sender, message)
        self._log_attempt(message)
        try:
            with httpx.Client(**self._client_options(httpx.BaseTransport)) as client:
                response = client.post(self.messages_url, data=params, auth=(AUTH_USERNAME, self._api_key))
        except httpx.RequestError as exc:
            logger.debug("Mailgun request failed", exc_info=True)
            raise TransportError(_sanitize_exception_message(exc, self._api_key)) from exc
        return self._interpret(response)

    async def send_async(self, sender: EmailAddress, message: Message) -> SendResponse:
        """Asynchronous variant of :meth:`send` with the same contract.

        Raises:
            TypeError: The injected transport is not an async httpx transport.
        """
        params = self.build_params(sender, message)
        self._log_attempt(message)
        try:
            async with httpx.AsyncClient(**self._client_options(httpx.AsyncBaseTransport)) as client:
                response = await client.post(self.messages_url, data=params, auth=(AUTH_USERNAME, self._api_key))
        except httpx.RequestError as exc:
            logger.debug("Mailgun request failed", exc_info=True)
            raise TransportError(_sanitize_exception_message(exc, self._api_key)) from exc
        return self._interpret(response)

    def _client_options(self, transport_type: type[object]) -> dict[str, Any]:
        """Keyword arguments for a fresh httpx client, omitting unset options.

        Raises:
            TypeError: An injected transport does not fit ``transport_type``.
        """
        options: dict[str, Any] = {}
        if self._timeout is not None:
            options["timeout"] = self._timeout
        if self._transport is not None:
            if not isinstance(self._transport, transport_type):
                raise TypeError(f"{type(self._transport).__name__} is not an httpx.{transport_type.__name__}")
            options["transport"] = self._transport
        return options

    def _log_attempt(self, message: Message) -> None:
        logger.info(
            "Sending message",
            extra={
                "domain": self._domain,
                "url": self.messages_url,
                "recipient_count": len(message.to) + len(message.cc) + len(message.bcc),
                "template": message.template or None,
                "has_html": bool(message.html),
            },
        )

    def _interpret(self, response: httpx.Response) -> SendResponse:
        """Map an HTTP response onto SendResponse or a provider error."""
        if response.is_success:
            result = _parse_success(response)
            logger.info("Message queued", extra={"id": result.id, "status": response.status_code})
            return result
        logger.warning(
            "Provider rejected message",
            extra={"status": response.status_code, "domain": self._domain},
        )
        raise ProviderRejectedError(response.text, status_code=response.status_code)


__all__ = [
    "AUTH_USERNAME",
    "MESSAGES_ENDPOINT",
    "MailgunClient",
    "SendResponse",
]
