"""``--set SECTION.KEY=VALUE`` overrides for the layered configuration.

Lets a single invocation tweak any configuration value without touching the
config files, e.g. ``--set mailgun.zone=eu`` or ``--set mailgun.timeout=10``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One parsed ``--set`` value addressed by section and nested key path."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue

    @property
    def dotted(self) -> str:
        return ".".join((self.section, *self.key_path))


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    Only the first ``=`` separates path from value, so values may contain
    ``=`` themselves.

    Raises:
        ValueError: Missing ``=``, missing dot, or an empty path component.

    Examples:
        >>> o = parse_override("mailgun.zone=eu")
        >>> (o.section, o.key_path, o.value)
        ('mailgun', ('zone',), 'eu')
        >>> parse_override("mailgun.timeout=12.5").value
        12.5
        >>> parse_override("lib_log_rich.payload_limits.max_chars=8192").dotted
        'lib_log_rich.payload_limits.max_chars'
    """
    path, sep, value = raw.partition("=")
    if not sep:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")
    section, dot, rest = path.partition(".")
    if not dot:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    key_path = tuple(rest.split("."))
    if not all(key_path):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")
    return ConfigOverride(section=section, key_path=key_path, value=coerce_value(value))


def coerce_value(raw: str) -> CoercedValue:
    """Decode ``raw`` as JSON, keeping it as a plain string when that fails.

    Examples:
        >>> coerce_value("false"), coerce_value("30"), coerce_value("null")
        (False, 30, None)
        >>> coerce_value("mg.example.com")
        'mg.example.com'
        >>> coerce_value("")
        ''
    """
    if not raw:
        return raw
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def _merge_into(tree: dict[str, object], override: ConfigOverride) -> None:
    node = tree
    for part in (override.section, *override.key_path[:-1]):
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            raise TypeError(f"Override {override.dotted!r} conflicts with a scalar at {part!r}")
        node = cast("dict[str, object]", child)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: Iterable[str]) -> Config:
    """Return ``config`` with every ``--set`` value deep-merged on top.

    Later overrides win over earlier ones for the same key. With no
    overrides the original object is returned unchanged.

    Raises:
        ValueError: If any override string is malformed.

    Example:
        >>> cfg = Config({"mailgun": {"zone": "", "timeout": 30.0}}, {})
        >>> merged = apply_overrides(cfg, ["mailgun.zone=eu"])
        >>> merged["mailgun"]["zone"], merged["mailgun"]["timeout"]
        ('eu', 30.0)
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    tree: dict[str, object] = {}
    for raw in raw_overrides:
        _merge_into(tree, parse_override(raw))
    if not tree:
        return config
    return config.with_overrides(tree)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
