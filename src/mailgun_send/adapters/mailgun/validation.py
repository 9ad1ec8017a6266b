"""Parsing and validation of user-supplied addresses.

The client sends addresses as given. Entry points that accept addresses from
users (CLI options, config files) parse them here first, so malformed input
surfaces as the domain's InvalidRecipientError before any request is built.
"""

from __future__ import annotations

from collections.abc import Iterable
from email.utils import parseaddr

from btx_lib_mail import validate_email_address

from mailgun_send.domain.address import EmailAddress
from mailgun_send.domain.errors import InvalidRecipientError


def parse_address(raw: str, *, name: str | None = None) -> EmailAddress:
    """Parse ``addr`` or ``Display Name <addr>`` into a validated EmailAddress.

    Args:
        raw: Address text as typed by the user.
        name: Explicit display name; overrides a name embedded in ``raw``.

    Raises:
        InvalidRecipientError: When the address part is not a valid email.

    Example:
        >>> parse_address("Jane Doe <jane@example.com>")
        EmailAddress(address='jane@example.com', name='Jane Doe')
        >>> parse_address("ops@example.com", name="Ops")
        EmailAddress(address='ops@example.com', name='Ops')
        >>> parse_address("not-an-email")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidRecipientError: Invalid address: not-an-email
    """
    embedded_name, address = parseaddr(raw)
    try:
        validate_email_address(address)
    except ValueError as exc:
        raise InvalidRecipientError(f"Invalid address: {raw}") from exc
    display = name if name is not None else (embedded_name or None)
    return EmailAddress(address=address, name=display)


def parse_addresses(raws: Iterable[str]) -> tuple[EmailAddress, ...]:
    """Parse every entry of ``raws``; the first invalid one raises."""
    return tuple(parse_address(raw) for raw in raws)


__all__ = ["parse_address", "parse_addresses"]
