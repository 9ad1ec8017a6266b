"""Configuration adapters built on lib_layered_config.

Contents:
    * :mod:`.loader` - Cached layered loading with profile support
    * :mod:`.deploy` - Copy the bundled defaults to app/host/user layers
    * :mod:`.display` - Redacted human/JSON display
    * :mod:`.overrides` - ``--set SECTION.KEY=VALUE`` handling
"""

from __future__ import annotations

from .deploy import deploy_configuration
from .display import display_config, redact_secrets
from .loader import get_config, get_default_config_path
from .overrides import apply_overrides

__all__ = [
    "apply_overrides",
    "deploy_configuration",
    "display_config",
    "get_config",
    "get_default_config_path",
    "redact_secrets",
]
