"""CLI entry point guards, typed context helpers and in-memory adapter edges."""

from __future__ import annotations

import pytest
import rich_click as click
from click.testing import CliRunner, Result
from lib_layered_config import Config

from mailgun_send.adapters import cli as cli_mod
from mailgun_send.adapters.cli.context import CLIContext, get_cli_context, store_cli_context
from mailgun_send.adapters.cli.main import main
from mailgun_send.adapters.mailgun.config import MailgunConfig
from mailgun_send.adapters.memory import (
    MailgunSpy,
    deploy_configuration_in_memory,
    display_config_in_memory,
    get_config_in_memory,
)
from mailgun_send.composition import build_production, build_testing
from mailgun_send.domain import ConfigurationError, DeployTarget, EmailAddress, Message


@pytest.mark.os_agnostic
def test_main_requires_a_services_factory() -> None:
    with pytest.raises(ValueError, match="services_factory is required"):
        main(["--help"], services_factory=None)


@pytest.mark.os_agnostic
def test_main_returns_usage_error_code_for_malformed_set(managed_traceback_state: None) -> None:
    assert main(["--set", "invalid_no_dot=value", "info"], services_factory=build_production) == 2


@pytest.mark.os_agnostic
def test_get_cli_context_rejects_uninitialised_context() -> None:
    ctx = click.Context(click.Command("test"))
    ctx.obj = "not a CLIContext"

    with pytest.raises(RuntimeError, match="CLI context not initialized"):
        get_cli_context(ctx)


@pytest.mark.os_agnostic
def test_root_group_refuses_non_callable_obj(cli_runner: CliRunner) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["info"], obj="not_callable")

    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)


@pytest.mark.os_agnostic
def test_stored_context_is_returned_unchanged() -> None:
    ctx = click.Context(click.Command("test"))
    services = build_testing()

    store_cli_context(
        ctx,
        traceback=True,
        config=Config({}, {}),
        services=services,
        profile="eu",
        set_overrides=("mailgun.zone=eu",),
    )
    stored = get_cli_context(ctx)

    assert isinstance(stored, CLIContext)
    assert stored.services is services
    assert stored.profile == "eu"
    assert stored.set_overrides == ("mailgun.zone=eu",)


@pytest.mark.os_agnostic
def test_in_memory_deploy_writes_nothing() -> None:
    assert deploy_configuration_in_memory(targets=[DeployTarget.USER]) == []


@pytest.mark.os_agnostic
def test_in_memory_config_carries_a_ready_mailgun_section() -> None:
    section = get_config_in_memory().get("mailgun", default={})

    assert section["domain"]
    assert section["api_key"]


@pytest.mark.os_agnostic
def test_in_memory_config_is_a_fresh_copy_each_time() -> None:
    first = get_config_in_memory().as_dict()
    first["mailgun"]["domain"] = "changed.example.com"

    assert get_config_in_memory().as_dict()["mailgun"]["domain"] != "changed.example.com"


@pytest.mark.os_agnostic
def test_in_memory_display_rejects_unknown_section() -> None:
    with pytest.raises(ValueError):
        display_config_in_memory(get_config_in_memory(), section="nope")


@pytest.mark.os_agnostic
def test_spy_clear_resets_captures_and_failure() -> None:
    spy = MailgunSpy()
    config = MailgunConfig(domain="mg.example.com", api_key="key-1", from_address="a@example.com")
    spy.send_message(config=config, message=Message(subject="Hi"))
    spy.raise_exception = RuntimeError("boom")

    spy.clear()

    assert spy.sent_messages == []
    assert spy.raise_exception is None


@pytest.mark.os_agnostic
def test_spy_records_before_raising_configured_exception() -> None:
    spy = MailgunSpy(raise_exception=RuntimeError("provider down"))
    config = MailgunConfig(domain="mg.example.com", api_key="key-1", from_address="a@example.com")

    with pytest.raises(RuntimeError, match="provider down"):
        spy.send_message(config=config, message=Message(subject="Hi"))

    assert len(spy.sent_messages) == 1


@pytest.mark.os_agnostic
def test_spy_prefers_explicit_sender_over_config_default() -> None:
    spy = MailgunSpy()
    config = MailgunConfig(from_address="default@example.com")
    sender = EmailAddress.name_address("Ops", "ops@example.com")

    spy.send_message(config=config, message=Message(), sender=sender)

    assert spy.sent_messages[0]["params"]["from"] == "Ops <ops@example.com>"


@pytest.mark.os_agnostic
def test_spy_requires_some_sender() -> None:
    with pytest.raises(ConfigurationError):
        MailgunSpy().send_message(config=MailgunConfig(), message=Message())
