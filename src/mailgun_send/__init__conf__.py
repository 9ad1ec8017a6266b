"""Static package metadata surfaced to CLI commands and documentation.

Values are kept in sync with ``pyproject.toml`` (see tests/test_metadata_sync.py).
The ``LAYEREDCONF_*`` identifiers select the platform-specific configuration
directories used by lib_layered_config.
"""

from __future__ import annotations

name = "mailgun_send"
title = "Send single transactional emails through the Mailgun HTTP API"
version = "1.0.0"
homepage = "https://github.com/bitranox/mailgun_send"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "mailgun-send"

#: Vendor segment for macOS/Windows configuration paths.
LAYEREDCONF_VENDOR: str = "bitranox"
#: Application segment for macOS/Windows configuration paths.
LAYEREDCONF_APP: str = "Mailgun Send"
#: Directory slug for Linux (XDG) configuration paths.
LAYEREDCONF_SLUG: str = "mailgun-send"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for mailgun_send:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
