"""Mailgun configuration model and loader.

Provides the MailgunConfig Pydantic model for validated, immutable client
settings and the loader function to create it from configuration dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from btx_lib_mail import validate_email_address
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from mailgun_send.domain.address import EmailAddress
from mailgun_send.domain.enums import Zone

_URL_SCHEMES = ("https://", "http://")


class MailgunConfig(BaseModel):
    """Validated, immutable Mailgun client configuration.

    Example:
        >>> config = MailgunConfig(domain="mg.example.com", api_key="key-123", zone="eu")
        >>> config.base_url
        'https://api.eu.mailgun.net/v3'
        >>> MailgunConfig().base_url is None
        True
    """

    model_config = ConfigDict(frozen=True)

    domain: str | None = None
    api_key: str | None = None
    zone: str | None = None
    from_address: str | None = None
    from_name: str | None = None
    timeout: float = 30.0

    @field_validator("domain", "api_key", "zone", "from_address", "from_name", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Coerce empty or whitespace-only strings to None.

        Treats empty strings from config files and environment variables as
        "not configured" rather than explicit empty values, so an unset
        API key variable never produces an authentication attempt with an
        empty key.
        """
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("zone")
    @classmethod
    def _validate_zone(cls, v: str | None) -> str | None:
        """Accept a zone short name (``us``, ``eu``) or an absolute base URL.

        Examples:
            >>> MailgunConfig._validate_zone("EU")
            'eu'
            >>> MailgunConfig._validate_zone("https://mailgun.internal/v3")
            'https://mailgun.internal/v3'
        """
        if v is None:
            return None
        candidate = v.strip()
        if candidate.lower().startswith(_URL_SCHEMES):
            return candidate
        return Zone.from_name(candidate).name.lower()

    @model_validator(mode="after")
    def _validate_config(self) -> MailgunConfig:
        """Validate configuration values.

        Raises:
            ValueError: When configuration values are invalid.

        Example:
            >>> MailgunConfig(timeout=-1.0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

        if self.from_address is not None:
            validate_email_address(self.from_address)

        return self

    @property
    def base_url(self) -> str | None:
        """Resolved base URL for the configured zone, or None for the default."""
        if self.zone is None:
            return None
        if self.zone.lower().startswith(_URL_SCHEMES):
            return self.zone
        return Zone.from_name(self.zone).value

    @property
    def default_sender(self) -> EmailAddress | None:
        """Sender built from ``from_address``/``from_name``, or None when unset."""
        if self.from_address is None:
            return None
        if self.from_name is None:
            return EmailAddress.from_address(self.from_address)
        return EmailAddress.name_address(self.from_name, self.from_address)

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> config = MailgunConfig(domain="mg.example.com", api_key="key-secret")
            >>> "key-secret" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"MailgunConfig({', '.join(fields)})"


def load_mailgun_config_from_dict(config_dict: Mapping[str, Any]) -> MailgunConfig:
    """Load MailgunConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    MailgunConfig Pydantic model. Single-parse validation at the boundary.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have a 'mailgun' section.

    Returns:
        Configured Mailgun settings with defaults for missing values.

    Example:
        >>> config = load_mailgun_config_from_dict(
        ...     {"mailgun": {"domain": "mg.example.com", "api_key": "key-1"}}
        ... )
        >>> config.domain
        'mg.example.com'
        >>> load_mailgun_config_from_dict({}).api_key is None
        True
    """
    section: Any = config_dict.get("mailgun", {})

    # Non-dict sections (e.g. "mailgun": "invalid") fail validation here
    if not isinstance(section, Mapping):
        return MailgunConfig.model_validate(section)

    raw: dict[str, Any] = dict(cast(Mapping[str, Any], section))
    return MailgunConfig.model_validate(raw)


__all__ = [
    "MailgunConfig",
    "load_mailgun_config_from_dict",
]
