"""Layered configuration loading with caching and profile support.

Configuration is merged from the bundled defaults, the app/host/user
configuration directories, ``.env`` files and environment variables by
lib_layered_config. The ``[mailgun]`` section feeds
:class:`~mailgun_send.adapters.mailgun.config.MailgunConfig`; ``[lib_log_rich]``
feeds the logging runtime.

Contents:
    * :data:`get_config` - Cached loader; exposes ``cache_clear``.
    * :func:`validate_profile` - Profile names that are safe as directory names.
    * :func:`get_default_config_path` - The bundled ``defaultconfig.toml``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from mailgun_send import __init__conf__


class ConfigLoaderProtocol(Protocol):
    """Config loader callable that also exposes ``cache_clear``."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Reject profile names that are unsafe as directory names.

    A profile becomes a ``profile/<name>/`` path segment in every layer, so
    the name is checked by lib_layered_config before any file is read.

    Args:
        profile: Name given with ``--profile``, e.g. ``staging`` or ``eu``.
        max_length: Upper bound on the name length; ``None`` uses
            ``DEFAULT_MAX_PROFILE_LENGTH``.

    Raises:
        ValueError: If the profile name is empty, too long, contains path
            separators or traversal, or is a Windows reserved name.

    Examples:
        >>> validate_profile("production")
        >>> validate_profile("eu-staging")
        >>> validate_profile("../etc/passwd")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../etc/passwd
    """
    length = max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH
    validate_profile_name(profile, max_length=length)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Return the path of the bundled ``defaultconfig.toml``.

    The file sits next to this module and ships inside the wheel, so the
    lowest layer is found however the package was installed.

    Returns:
        Absolute path of the bundled defaults.

    Example:
        >>> path = get_default_config_path()
        >>> path.name
        'defaultconfig.toml'
        >>> path.exists()
        True
    """
    return Path(__file__).parent / "defaultconfig.toml"


# One read per (profile, start_dir) for the lifetime of the process.
@lru_cache(maxsize=4)
def _read_layers(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Read and merge every layer; ``profile`` must already be validated."""
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load the merged configuration.

    Precedence, lowest first: defaults → app → host → user → dotenv → env.
    The vendor, app and slug from :mod:`mailgun_send.__init__conf__` pick the
    platform directories (XDG with the ``mailgun-send`` slug on Linux,
    vendor/app under Application Support on macOS and ProgramData/AppData
    on Windows). With a profile, every layer is read from a
    ``profile/<name>/`` subdirectory, so e.g. a ``staging`` profile can hold
    a different Mailgun domain and key.

    Args:
        profile: Optional profile name (validated before use).
        start_dir: Directory that seeds ``.env`` discovery; defaults to the
            current working directory.

    Returns:
        Immutable configuration object with provenance tracking.

    Raises:
        ValueError: ``profile`` is not a safe name.

    Note:
        The same arguments return the same ``Config`` instance until
        ``get_config.cache_clear()`` is called.

    Example:
        >>> config = get_config()
        >>> "mailgun" in config.as_dict()
        True
    """
    if profile is not None:
        validate_profile(profile)
    return _read_layers(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    """Forget cached configuration so the next call re-reads every layer.

    Example:
        >>> get_config.cache_clear()
    """
    _read_layers.cache_clear()


# lru_cache's cache_clear is invisible once the function is cast to the protocol.
_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "validate_profile",
    "get_config",
    "get_default_config_path",
]
