"""Sender and recipient addresses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EmailAddress:
    """One addressable sender or recipient with an optional display name.

    The address text is taken as given; syntactic validation happens at the
    boundaries that accept user input, not here.

    Example:
        >>> EmailAddress.from_address("ops@example.com").render()
        'ops@example.com'
        >>> str(EmailAddress.name_address("Ops Team", "ops@example.com"))
        'Ops Team <ops@example.com>'
    """

    address: str
    name: str | None = None

    @classmethod
    def from_address(cls, address: str) -> EmailAddress:
        """Build an address without a display name."""
        return cls(address=address)

    @classmethod
    def name_address(cls, name: str, address: str) -> EmailAddress:
        """Build an address carrying a display name."""
        return cls(address=address, name=name)

    def render(self) -> str:
        """Return the provider text form: ``name <address>`` or the bare address."""
        if self.name is not None:
            return f"{self.name} <{self.address}>"
        return self.address

    def __str__(self) -> str:
        return self.render()


__all__ = ["EmailAddress"]
