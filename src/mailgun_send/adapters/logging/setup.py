"""lib_log_rich runtime setup shared by the console script and ``python -m``.

The ``[lib_log_rich]`` section is validated with pydantic; unknown keys are
passed straight through to :class:`lib_log_rich.runtime.RuntimeConfig`.
Standard-library loggers (``mailgun_send.adapters.mailgun.*`` included) are
bridged into the runtime so the HTTP client logs with the same sinks.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from mailgun_send import __init__conf__


class LoggingConfigModel(BaseModel):
    """Validated ``[lib_log_rich]`` section.

    An empty ``service`` falls back to the package name.

    Example:
        >>> LoggingConfigModel(service="", environment="staging").resolved_service
        'mailgun_send'
        >>> LoggingConfigModel(console_level="DEBUG").model_extra
        {'console_level': 'DEBUG'}
    """

    model_config = ConfigDict(extra="allow")

    service: str | None = None
    environment: str = "prod"

    @property
    def resolved_service(self) -> str:
        return self.service or __init__conf__.name


def build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the layered configuration onto a lib_log_rich ``RuntimeConfig``."""
    section: Any = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(dict(section) if isinstance(section, Mapping) else {})
    passthrough = {key: value for key, value in (parsed.model_extra or {}).items() if value is not None}
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.resolved_service,
        environment=parsed.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Initialise the lib_log_rich runtime once per process.

    Loads ``.env`` so ``LOG_*`` variables apply, then attaches stdlib
    logging. Later calls return immediately.

    Example:
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "build_runtime_config",
    "init_logging",
]
