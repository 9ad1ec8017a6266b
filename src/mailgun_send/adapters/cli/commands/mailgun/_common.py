"""Shared helpers for the Mailgun CLI commands.

Config option decorators, parsing of ``--var``/``--recipient-vars`` input and
the mapping from send failures to exit codes.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable, Iterable, Mapping
from typing import Any, cast

import orjson
import rich_click as click
from lib_layered_config import Config
from pydantic import ValidationError

from mailgun_send import __init__conf__
from mailgun_send.adapters.mailgun.client import SendResponse
from mailgun_send.adapters.mailgun.config import MailgunConfig
from mailgun_send.application.ports import LoadMailgunConfigFromDict
from mailgun_send.domain.errors import ConfigurationError, ProviderRejectedError, SendError

from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop options the user did not pass (``None``).

    Example:
        >>> filter_sentinels(domain="mg.example.com", zone=None, timeout=5.0)
        {'domain': 'mg.example.com', 'timeout': 5.0}
    """
    return {key: value for key, value in kwargs.items() if value is not None}


def apply_validated_overrides(base_config: MailgunConfig, overrides: Mapping[str, Any]) -> MailgunConfig:
    """Merge CLI overrides into ``base_config`` and re-run validation.

    ``model_validate`` on the merged dict is used instead of
    ``model_copy(update=...)`` so zone and sender validators see the new values.

    Raises:
        ValidationError: When an override is invalid.

    Example:
        >>> base = MailgunConfig(domain="mg.example.com", api_key="key-1")
        >>> apply_validated_overrides(base, {"zone": "EU"}).base_url
        'https://api.eu.mailgun.net/v3'
    """
    if not overrides:
        return base_config
    return MailgunConfig.model_validate({**base_config.model_dump(), **overrides})


def mailgun_config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add ``--domain``, ``--api-key``, ``--zone`` and ``--timeout`` overrides."""
    options = [
        click.option("--domain", default=None, help="Override sending domain (mailgun.domain)"),
        click.option("--api-key", default=None, help="Override API key (mailgun.api_key)"),
        click.option("--zone", default=None, help="Region 'us' or 'eu', or a full base URL"),
        click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds"),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def load_mailgun_config(config: Config, loader: LoadMailgunConfigFromDict) -> MailgunConfig:
    """Read the ``[mailgun]`` section, exiting with CONFIG_ERROR if it is invalid.

    Missing domain or key is not checked here; CLI overrides may still
    supply them, and sending reports them as a ConfigurationError.
    """
    try:
        return loader(config.as_dict())
    except ValidationError as exc:
        logger.error("Invalid [mailgun] configuration", extra={"error": str(exc)})
        click.echo(f"\nError: Invalid [mailgun] configuration - {exc}", err=True)
        click.echo(f"See: {__init__conf__.shell_command} config --section mailgun", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc


def parse_template_vars(raw_vars: Iterable[str]) -> dict[str, str]:
    """Turn repeated ``KEY=VALUE`` options into a dict; later keys win.

    Raises:
        ValueError: An entry has no ``=`` or an empty key.

    Example:
        >>> parse_template_vars(["firstname=Dongri", "note=a=b"])
        {'firstname': 'Dongri', 'note': 'a=b'}
    """
    result: dict[str, str] = {}
    for raw in raw_vars:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid template variable {raw!r}: expected KEY=VALUE")
        result[key.strip()] = value
    return result


def parse_recipient_vars(raw: str | None) -> dict[str, dict[str, str]]:
    """Decode ``--recipient-vars`` JSON: address -> {variable: string}.

    Raises:
        ValueError: Not JSON, or not an object of string-valued objects.

    Example:
        >>> parse_recipient_vars('{"a@example.com": {"first": "A"}}')
        {'a@example.com': {'first': 'A'}}
        >>> parse_recipient_vars(None)
        {}
    """
    if not raw:
        return {}
    try:
        decoded: object = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"Recipient variables are not valid JSON: {exc}") from exc
    if not isinstance(decoded, dict):
        raise ValueError("Recipient variables must be a JSON object keyed by address")
    result: dict[str, dict[str, str]] = {}
    for address, variables in cast(dict[str, object], decoded).items():
        if not isinstance(variables, dict):
            raise ValueError(f"Recipient variables for {address!r} must be a JSON object")
        typed = cast(dict[str, object], variables)
        if not all(isinstance(value, str) for value in typed.values()):
            raise ValueError(f"Recipient variables for {address!r} must have string values")
        result[address] = cast(dict[str, str], typed)
    return result


def execute_with_send_error_handling(*, operation: Callable[[], SendResponse]) -> SendResponse:
    """Run ``operation`` and map failures to exit codes.

    Exception order (most specific first):

    1. ConfigurationError -> CONFIG_ERROR (78)
    2. ValueError (pydantic ValidationError included) -> INVALID_ARGUMENT (22)
    3. SendError -> DELIVERY_FAILURE (69); a rejection prints the raw body
    4. Exception -> GENERAL_ERROR (1), or re-raised when ``DEVELOPMENT_MODE`` is set

    Raises:
        SystemExit: On any failure except the development-mode re-raise.
    """
    try:
        return operation()
    except ConfigurationError as exc:
        _fail(exc, "Mailgun configuration error", "Configuration error")
        click.echo(f"See: {__init__conf__.shell_command} config-deploy --target user", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc
    except ValueError as exc:
        _fail(exc, "Invalid send parameters", "Invalid send parameters")
        raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc
    except ProviderRejectedError as exc:
        _fail(exc, "Mailgun rejected the message", f"Mailgun rejected the message (HTTP {exc.status_code})")
        raise SystemExit(ExitCode.DELIVERY_FAILURE) from exc
    except SendError as exc:
        _fail(exc, "Mailgun delivery failed", "Failed to send message")
        raise SystemExit(ExitCode.DELIVERY_FAILURE) from exc
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _fail(exc, "Unexpected error sending message", "Unexpected error", log_traceback=True)
        raise SystemExit(ExitCode.GENERAL_ERROR) from exc


def handle_validation_error(exc: ValidationError) -> None:
    """Report an invalid config override and exit with INVALID_ARGUMENT."""
    _fail(exc, "Invalid configuration override", "Invalid option value")
    raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


def _fail(
    exc: Exception,
    log_message: str,
    user_message: str,
    *,
    log_traceback: bool = False,
) -> None:
    logger.error(
        log_message,
        extra={"error": str(exc), "error_type": type(exc).__name__},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)


__all__ = [
    "apply_validated_overrides",
    "execute_with_send_error_handling",
    "filter_sentinels",
    "handle_validation_error",
    "load_mailgun_config",
    "mailgun_config_options",
    "parse_recipient_vars",
    "parse_template_vars",
]
