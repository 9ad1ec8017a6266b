"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when required settings such as the sending domain, the API key,
    or a default sender are absent. Typically caught at CLI boundaries to
    provide user-friendly error messages.

    Example:
        >>> err = ConfigurationError("No Mailgun domain configured")
        >>> str(err)
        'No Mailgun domain configured'
    """


class InvalidRecipientError(ValueError):
    """Email address validation failure for user-supplied addresses.

    Inherits from ValueError so generic ``except ValueError`` handlers at
    the CLI boundary catch it.

    Example:
        >>> err = InvalidRecipientError("Invalid recipient: not-an-email")
        >>> isinstance(err, ValueError)
        True
    """


class SendError(Exception):
    """Base class for every failure of a single send call."""


class TransportError(SendError):
    """The request could not be sent or the response could not be received.

    Covers DNS, TLS, connection and timeout failures. The underlying
    transport exception is kept as ``__cause__``.

    Example:
        >>> str(TransportError("Connection refused"))
        'Connection refused'
    """


class ProviderRejectedError(SendError):
    """The provider answered with a non-2xx status.

    The message is the raw response body, passed through verbatim so the
    provider's own diagnostics reach the caller unchanged.

    Attributes:
        status_code: HTTP status returned by the provider.
        body: Raw response body text.

    Example:
        >>> err = ProviderRejectedError("Invalid domain", status_code=400)
        >>> str(err)
        'Invalid domain'
        >>> err.status_code
        400
    """

    def __init__(self, body: str, *, status_code: int) -> None:
        super().__init__(body)
        self.body = body
        self.status_code = status_code


class MalformedResponseError(SendError):
    """The provider answered 2xx but the body is not the expected JSON shape.

    Example:
        >>> str(MalformedResponseError("Expected JSON object with 'message' and 'id'"))
        "Expected JSON object with 'message' and 'id'"
    """


__all__ = [
    "ConfigurationError",
    "InvalidRecipientError",
    "MalformedResponseError",
    "ProviderRejectedError",
    "SendError",
    "TransportError",
]
