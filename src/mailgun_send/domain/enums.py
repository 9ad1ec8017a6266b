"""Type-safe domain enums for API zones, output formats and deployment targets."""

from __future__ import annotations

from enum import Enum


class Zone(str, Enum):
    """Regional Mailgun API base URLs.

    A zone selects the data-residency region a send is routed to. The
    member value is the base URL substituted in front of
    ``/{domain}/messages``.

    Attributes:
        US: Default global endpoint.
        EU: European endpoint.

    Example:
        >>> Zone.EU.value
        'https://api.eu.mailgun.net/v3'
        >>> Zone.from_name("us") is Zone.US
        True
    """

    US = "https://api.mailgun.net/v3"
    EU = "https://api.eu.mailgun.net/v3"

    @classmethod
    def from_name(cls, name: str) -> Zone:
        """Look up a zone by its short, case-insensitive name.

        Raises:
            ValueError: When ``name`` is not a known zone.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            known = ", ".join(member.name.lower() for member in cls)
            raise ValueError(f"Unknown zone {name!r} (expected one of: {known})") from None


#: Base URL used when no zone is selected.
DEFAULT_BASE_URL = Zone.US.value


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class DeployTarget(str, Enum):
    """Configuration deployment target layers.

    Attributes:
        APP: System-wide application configuration (requires privileges).
        HOST: System-wide host-specific configuration (requires privileges).
        USER: User-specific configuration (~/.config on Linux).

    Example:
        >>> DeployTarget.USER.value
        'user'
    """

    APP = "app"
    HOST = "host"
    USER = "user"


__all__ = [
    "DEFAULT_BASE_URL",
    "DeployTarget",
    "OutputFormat",
    "Zone",
]
