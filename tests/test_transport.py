"""send_message: config-driven sends, sender resolution and address parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import parse_qs

import pytest

from mailgun_send.adapters.mailgun import MailgunConfig, build_client, parse_address, parse_addresses, send_message
from mailgun_send.domain import (
    ConfigurationError,
    EmailAddress,
    InvalidRecipientError,
    Message,
    ProviderRejectedError,
)

if TYPE_CHECKING:
    from conftest import RecordingTransport

READY = MailgunConfig(
    domain="mg.example.com",
    api_key="key-test-123",
    from_address="noreply@example.com",
    from_name="Example Corp",
)


def _sent_from(transport: RecordingTransport) -> str:
    return parse_qs(transport.last_request.content.decode("utf-8"))["from"][0]


@pytest.mark.os_agnostic
def test_send_message_uses_the_configured_sender(recording_transport: RecordingTransport) -> None:
    response = send_message(config=READY, message=Message(subject="Hi"), transport=recording_transport.transport)

    assert response.message == "Queued. Thank you."
    assert _sent_from(recording_transport) == "Example Corp <noreply@example.com>"


@pytest.mark.os_agnostic
def test_explicit_sender_replaces_the_configured_one(recording_transport: RecordingTransport) -> None:
    send_message(
        config=READY,
        message=Message(),
        sender=EmailAddress("ops@example.com"),
        transport=recording_transport.transport,
    )

    assert _sent_from(recording_transport) == "ops@example.com"


@pytest.mark.os_agnostic
def test_configured_zone_routes_the_request(recording_transport: RecordingTransport) -> None:
    config = READY.model_copy(update={"zone": "eu"})

    send_message(config=config, message=Message(), transport=recording_transport.transport)

    assert recording_transport.last_request.url.host == "api.eu.mailgun.net"


@pytest.mark.os_agnostic
def test_rejections_propagate_unchanged(recording_transport: RecordingTransport) -> None:
    recording_transport.status_code = 400
    recording_transport.body = b"Invalid domain"

    with pytest.raises(ProviderRejectedError, match="^Invalid domain$"):
        send_message(config=READY, message=Message(), transport=recording_transport.transport)


@pytest.mark.os_agnostic
def test_missing_sender_fails_before_any_request(recording_transport: RecordingTransport) -> None:
    config = MailgunConfig(domain="mg.example.com", api_key="key-1")

    with pytest.raises(ConfigurationError, match="from_address"):
        send_message(config=config, message=Message(), transport=recording_transport.transport)

    assert recording_transport.requests == []


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("config", "fragment"),
    [
        (MailgunConfig(api_key="key-1"), "domain"),
        (MailgunConfig(domain="mg.example.com"), "API key"),
    ],
    ids=["no-domain", "no-key"],
)
def test_build_client_requires_domain_and_key(config: MailgunConfig, fragment: str) -> None:
    with pytest.raises(ConfigurationError, match=fragment):
        build_client(config)


@pytest.mark.os_agnostic
def test_build_client_applies_zone_url() -> None:
    config = MailgunConfig(domain="mg.example.com", api_key="key-1", zone="https://mailgun.internal/v3/")

    assert build_client(config).messages_url == "https://mailgun.internal/v3/mg.example.com/messages"


@pytest.mark.os_agnostic
def test_parse_address_reads_display_names() -> None:
    assert parse_address("Jane Doe <jane@example.com>") == EmailAddress("jane@example.com", "Jane Doe")


@pytest.mark.os_agnostic
def test_parse_address_explicit_name_wins() -> None:
    assert parse_address("Jane <jane@example.com>", name="Ops").name == "Ops"


@pytest.mark.os_agnostic
def test_parse_address_bare_address_has_no_name() -> None:
    assert parse_address("jane@example.com").name is None


@pytest.mark.os_agnostic
@pytest.mark.parametrize("raw", ["not-an-email", "Jane <no-at-sign.example.com>"])
def test_parse_address_rejects_invalid_input(raw: str) -> None:
    with pytest.raises(InvalidRecipientError):
        parse_address(raw)


@pytest.mark.os_agnostic
def test_parse_addresses_keeps_order() -> None:
    parsed = parse_addresses(["b@example.com", "a@example.com"])

    assert [address.address for address in parsed] == ["b@example.com", "a@example.com"]
