"""Message content and its flattening into form parameters.

A :class:`Message` is built once by the caller and flattened into the flat,
string-keyed parameter set the messages endpoint accepts. Flattening is a
pure transformation: the message is left untouched and can be flattened again.

Contents:
    * :class:`Message` - Immutable description of one email.
    * :data:`TEMPLATE_VARIABLES_KEY` - Form key carrying global template variables.
    * :data:`RECIPIENT_VARIABLES_KEY` - Form key carrying per-recipient variables.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Final

import orjson

from .address import EmailAddress

#: Custom header parameter holding the JSON object of global template variables.
TEMPLATE_VARIABLES_KEY: Final[str] = "h:X-Mailgun-Variables"

#: Custom header parameter holding the JSON object of per-recipient variables.
RECIPIENT_VARIABLES_KEY: Final[str] = "h:X-Mailgun-Recipient-Variables"

_RECIPIENT_ROLES: Final[tuple[str, ...]] = ("to", "cc", "bcc")


def _empty_vars() -> dict[str, str]:
    return {}


def _empty_recipient_vars() -> dict[str, Mapping[str, str]]:
    return {}


@dataclass(frozen=True, slots=True)
class Message:
    """Full logical content of one email.

    Every field is optional. Empty strings and empty collections mean
    "not set" and produce no recipient or template keys when flattened.

    Attributes:
        to: Primary recipients.
        cc: Carbon-copy recipients.
        bcc: Blind carbon-copy recipients.
        subject: Subject line.
        text: Plain-text body.
        html: HTML body.
        template: Name of a stored template; empty means no template.
        template_vars: Variables applied to the whole send.
        recipient_vars: Variables keyed by recipient address.

    Note:
        ``template_vars`` and ``recipient_vars`` are only serialized when
        ``template`` is set. Populated variables without a template are
        ignored, not rejected.

    Example:
        >>> msg = Message(
        ...     to=[EmailAddress.from_address("x@y.com"), EmailAddress.from_address("z@y.com")],
        ...     subject="Hi",
        ... )
        >>> params = msg.to_parameters()
        >>> params["to"]
        'x@y.com,z@y.com'
        >>> "cc" in params
        False
    """

    to: Sequence[EmailAddress] = ()
    cc: Sequence[EmailAddress] = ()
    bcc: Sequence[EmailAddress] = ()
    subject: str = ""
    text: str = ""
    html: str = ""
    template: str = ""
    template_vars: Mapping[str, str] = field(default_factory=_empty_vars)
    recipient_vars: Mapping[str, Mapping[str, str]] = field(default_factory=_empty_recipient_vars)

    def recipients(self, role: str) -> Sequence[EmailAddress]:
        """Return the addresses stored under ``role`` (``to``, ``cc`` or ``bcc``).

        Raises:
            ValueError: When ``role`` is not a recipient role.
        """
        if role not in _RECIPIENT_ROLES:
            raise ValueError(f"Unknown recipient role: {role!r}")
        return getattr(self, role)

    def to_parameters(self) -> dict[str, str]:
        """Flatten the message into a new form-parameter dict.

        Returns:
            Mapping of form keys to single string values. Recipient roles
            with no addresses are omitted. ``subject``, ``text`` and ``html``
            are always present. Template keys appear only when ``template``
            is set.

        Raises:
            TypeError: When a variable value cannot be represented as JSON.
                Supported values are strings and string mappings.

        Example:
            >>> msg = Message(template="welcome", template_vars={"firstname": "Dongri"})
            >>> msg.to_parameters()["h:X-Mailgun-Variables"]
            '{"firstname":"Dongri"}'
            >>> "template" in Message(template_vars={"firstname": "Dongri"}).to_parameters()
            False
        """
        params: dict[str, str] = {}

        for role in _RECIPIENT_ROLES:
            joined = _join_addresses(self.recipients(role))
            if joined:
                params[role] = joined

        params["subject"] = self.subject
        params["text"] = self.text
        params["html"] = self.html

        if self.template:
            params["template"] = self.template
            if self.template_vars:
                params[TEMPLATE_VARIABLES_KEY] = _to_json(self.template_vars)
            if self.recipient_vars:
                params[RECIPIENT_VARIABLES_KEY] = _to_json(self.recipient_vars)

        return params


def _join_addresses(addresses: Sequence[EmailAddress]) -> str:
    """Render and comma-join addresses; empty input gives an empty string."""
    return ",".join(address.render() for address in addresses)


def _to_json(variables: Mapping[str, object]) -> str:
    """Serialize a variables mapping to compact JSON text.

    orjson only accepts ``dict`` instances, so arbitrary mappings are copied
    (nested mappings included) before encoding.
    """
    plain = {key: dict(value) if isinstance(value, Mapping) else value for key, value in variables.items()}
    return orjson.dumps(plain).decode("utf-8")


__all__ = [
    "Message",
    "RECIPIENT_VARIABLES_KEY",
    "TEMPLATE_VARIABLES_KEY",
]
