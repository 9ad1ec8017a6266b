r"""Deploy the bundled configuration to app/host/user locations.

Copies ``defaultconfig.toml`` into the platform configuration directories so
operators can fill in the Mailgun domain, API key and default sender. The
user layer is written private (700/600) by default because it is the
recommended home for the API key; app and host layers are world-readable
(755/644).

Contents:
    * :func:`deploy_configuration` - Copy the defaults to the requested layers.
    * :func:`get_permission_defaults` - Permission modes from configuration.
    * :func:`parse_mode` - Octal mode parsing for config values.

Note:
    Linux paths (without profile): ``/etc/xdg/{slug}/config.toml`` (app),
    ``/etc/xdg/{slug}/hosts/{hostname}.toml`` (host),
    ``~/.config/{slug}/config.toml`` (user). macOS and Windows use
    ``{vendor}/{app}`` under Application Support / ProgramData / %APPDATA%.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from lib_layered_config import (
    DEFAULT_APP_DIR_MODE,
    DEFAULT_APP_FILE_MODE,
    DEFAULT_USER_DIR_MODE,
    DEFAULT_USER_FILE_MODE,
    Config,
    deploy_config,
)
from lib_layered_config.examples.deploy import DeployAction

from mailgun_send import __init__conf__
from mailgun_send.adapters.config.loader import get_default_config_path, validate_profile
from mailgun_send.domain.enums import DeployTarget

logger = logging.getLogger(__name__)

_DEPLOYED_ACTIONS = frozenset({DeployAction.CREATED, DeployAction.OVERWRITTEN})

# Host layer shares the app layer defaults; lib_layered_config has no HOST_* constants.
_LIBRARY_DEFAULTS: dict[str, int] = {
    "app_directory": DEFAULT_APP_DIR_MODE,
    "app_file": DEFAULT_APP_FILE_MODE,
    "host_directory": DEFAULT_APP_DIR_MODE,
    "host_file": DEFAULT_APP_FILE_MODE,
    "user_directory": DEFAULT_USER_DIR_MODE,
    "user_file": DEFAULT_USER_FILE_MODE,
}


def parse_mode(value: int | str, default: int) -> int:
    """Parse an integer or octal-string permission mode.

    Example:
        >>> parse_mode("0o750", 0o644) == 0o750
        True
        >>> parse_mode("640", 0o644) == 0o640
        True
        >>> parse_mode("rwx", 0o644) == 0o644
        True
    """
    if isinstance(value, int):
        return value
    try:
        return int(value, 0) if value.startswith("0o") else int(value, 8)
    except ValueError:
        logger.warning("Invalid permission mode '%s', falling back to default %o", value, default)
        return default


def get_permission_defaults(config: Config) -> dict[str, int | bool]:
    """Read ``[lib_layered_config.default_permissions]`` with library fallbacks.

    Returns:
        ``{layer}_directory`` / ``{layer}_file`` modes for app, host and user,
        plus ``enabled``.

    Example:
        >>> defaults = get_permission_defaults(Config({}, {}))
        >>> defaults["user_file"] == 0o600
        True
        >>> defaults["enabled"]
        True
    """
    raw: Any = config.get("lib_layered_config", default={})
    section: Mapping[str, Any] = raw.get("default_permissions", {}) if isinstance(raw, Mapping) else {}
    result: dict[str, int | bool] = {}
    for key, fallback in _LIBRARY_DEFAULTS.items():
        value = section.get(key, fallback)
        result[key] = fallback if isinstance(value, bool) else parse_mode(value, fallback)
    result["enabled"] = bool(section.get("enabled", True))
    return result


def deploy_configuration(
    *,
    targets: Sequence[DeployTarget],
    force: bool = False,
    profile: str | None = None,
    set_permissions: bool = True,
    dir_mode: int | None = None,
    file_mode: int | None = None,
) -> list[Path]:
    """Copy the bundled defaults to each target layer.

    Args:
        targets: Layers to write (app, host, user).
        force: Overwrite existing files instead of skipping them.
        profile: Write into ``profile/<name>/`` subdirectories.
        set_permissions: Apply layer permission modes; False uses the umask.
        dir_mode: Directory mode override for every target.
        file_mode: File mode override for every target.

    Returns:
        Paths that were created or overwritten; empty when every target
        already existed and ``force`` is False.

    Raises:
        PermissionError: Writing app/host layers without privileges.
        ValueError: Invalid profile name.
    """
    if profile is not None:
        validate_profile(profile)

    results = deploy_config(
        source=get_default_config_path(),
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        targets=[t.value for t in targets],
        force=force,
        set_permissions=set_permissions,
        dir_mode=dir_mode,
        file_mode=file_mode,
    )

    paths: list[Path] = []
    for result in results:
        if result.action in _DEPLOYED_ACTIONS:
            paths.append(result.destination)
        paths.extend(
            dot_d_result.destination
            for dot_d_result in result.dot_d_results
            if dot_d_result.action in _DEPLOYED_ACTIONS
        )
    return paths


__all__ = [
    "deploy_configuration",
    "get_permission_defaults",
    "parse_mode",
]
