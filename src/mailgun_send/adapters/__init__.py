"""Adapters layer: integrations with HTTP, configuration, logging and the CLI.

Contents:
    * :mod:`.mailgun` - Mailgun messages API over httpx
    * :mod:`.config` - Layered configuration (lib_layered_config)
    * :mod:`.logging` - lib_log_rich runtime setup
    * :mod:`.cli` - rich-click command line
    * :mod:`.memory` - In-memory adapters for tests
"""

from __future__ import annotations

__all__: list[str] = []
