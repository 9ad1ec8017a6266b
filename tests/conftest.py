"""Shared pytest fixtures for the mailgun_send test suite.

Fixtures read as plain English at the call site (``cli_runner``,
``mailgun_cli_context``, ``recording_transport``) and replace only the I/O
boundaries: configuration loading, the Mailgun HTTP exchange, and the send
port. Everything else runs the production code.
"""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config
from lib_layered_config.domain.config import SourceInfo

if TYPE_CHECKING:
    from mailgun_send.adapters.memory.mailgun import MailgunSpy
    from mailgun_send.composition import AppServices

_COVERAGE_BASENAME = ".coverage.mailgun_send"


def pytest_configure(config: pytest.Config) -> None:
    """Keep the coverage database on a local disk.

    SQLite locking is unreliable on network mounts, and a crashed run can
    leave journal files that make the next run fail with "database is locked".
    """
    if "COVERAGE_FILE" in os.environ:
        return
    cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()
    os.environ["COVERAGE_FILE"] = str(cov_path)


def _load_dotenv() -> None:
    """Load a repository ``.env`` (e.g. integration credentials) when present."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(type(lib_cli_exit_tools.config)))

READY_MAILGUN_SECTION: dict[str, Any] = {
    "domain": "mg.example.com",
    "api_key": "key-test-123",
    "from_address": "noreply@example.com",
    "from_name": "Example Corp",
}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Fresh CliRunner; use ``result.stdout`` when stderr carries log lines."""
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """The ``build_production`` services factory."""
    from mailgun_send.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that removes rich/ANSI styling from CLI output."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Start from clean lib_cli_exit_tools flags and restore them afterwards."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}
    try:
        yield
    finally:
        for name, value in snapshot.items():
            setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture(autouse=True)
def isolated_logging_runtime() -> Iterator[None]:
    """Start every test without a lib_log_rich runtime and shut down any it leaves."""
    import lib_log_rich.runtime

    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.shutdown()
    yield
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.shutdown()


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the layered config cache before the test.

    Only before: a test may monkeypatch ``get_config`` and lose ``cache_clear``.
    """
    from mailgun_send.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Build real ``Config`` objects from plain dicts, without provenance."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def source_info_factory() -> Callable[[str, str, str | None], SourceInfo]:
    """Build provenance entries for ``Config`` objects."""

    def _factory(key: str, layer: str, path: str | None = None) -> SourceInfo:
        return {"layer": layer, "path": path, "key": key}

    return _factory


@pytest.fixture
def mailgun_ready_config(config_factory: Callable[[dict[str, Any]], Config]) -> Config:
    """Config with a complete ``[mailgun]`` section (domain, key, sender)."""
    return config_factory({"mailgun": dict(READY_MAILGUN_SECTION)})


def _fixed_config(config: Config) -> Callable[..., Config]:
    def _get_config(**_kwargs: Any) -> Config:
        return config

    return _get_config


@pytest.fixture
def inject_config(clear_config_cache: None) -> Callable[[Config], Callable[[], AppServices]]:
    """Production services whose ``get_config`` returns the given Config."""
    from mailgun_send.composition import build_production

    def _inject(config: Config) -> Callable[[], AppServices]:
        services = replace(build_production(), get_config=_fixed_config(config))
        return lambda: services

    return _inject


@pytest.fixture
def config_cli_context(clear_config_cache: None) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Like ``inject_config`` but takes the config data as a dict."""
    from mailgun_send.composition import build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        services = replace(build_production(), get_config=_fixed_config(Config(config_data, {})))
        return lambda: services

    return _create


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Production services whose ``get_config`` records each ``profile`` it receives."""
    from mailgun_send.composition import build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        services = replace(build_production(), get_config=_capturing_get_config)
        return lambda: services

    return _inject


@pytest.fixture
def inject_deploy_configuration() -> Callable[[Callable[..., list[Path]]], Callable[[], AppServices]]:
    """Production services with ``deploy_configuration`` swapped for the given callable."""
    from mailgun_send.composition import build_production

    def _inject(deploy_fn: Callable[..., list[Path]]) -> Callable[[], AppServices]:
        services = replace(build_production(), deploy_configuration=deploy_fn)
        return lambda: services

    return _inject


@pytest.fixture
def inject_test_services() -> Callable[[], Callable[[], AppServices]]:
    """Return ``build_testing``: every port in memory, no disk or network."""
    from mailgun_send.composition import build_testing

    def _inject() -> Callable[[], AppServices]:
        return build_testing

    return _inject


@dataclass
class MailgunCliContext:
    """Services factory plus the spy that captures its sends."""

    factory: Callable[[], Any]
    spy: MailgunSpy


@pytest.fixture
def mailgun_cli_context(clear_config_cache: None) -> Callable[[dict[str, Any]], MailgunCliContext]:
    """Wire a ``[mailgun]`` section and a fresh MailgunSpy into the CLI.

    Example:
        ctx = mailgun_cli_context({"domain": "mg.example.com", "api_key": "k", "from_address": "a@b.com"})
        result = cli_runner.invoke(cli, ["send", "--to", "x@y.com"], obj=ctx.factory)
        assert ctx.spy.sent_messages[0]["params"]["to"] == "x@y.com"
    """
    from mailgun_send.adapters.memory import MailgunSpy as MailgunSpyImpl
    from mailgun_send.adapters.memory import load_mailgun_config_from_dict_in_memory
    from mailgun_send.composition import build_production

    def _create(mailgun_data: dict[str, Any]) -> MailgunCliContext:
        spy = MailgunSpyImpl()
        services = replace(
            build_production(),
            get_config=_fixed_config(Config({"mailgun": mailgun_data}, {})),
            send_message=spy.send_message,
            load_mailgun_config_from_dict=load_mailgun_config_from_dict_in_memory,
        )
        return MailgunCliContext(factory=lambda: services, spy=spy)

    return _create


@dataclass
class RecordingTransport:
    """``httpx.MockTransport`` that records requests and replays one response."""

    status_code: int = 200
    body: bytes = b'{"message": "Queued. Thank you.", "id": "<abc123@mg.example.com>"}'
    error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, content=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recording_transport() -> RecordingTransport:
    """Fake Mailgun endpoint; answers 200 with a queued payload by default."""
    return RecordingTransport()
