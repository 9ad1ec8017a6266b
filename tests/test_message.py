"""Message flattening into form parameters."""

from __future__ import annotations

import orjson
import pytest

from mailgun_send.domain.address import EmailAddress
from mailgun_send.domain.message import RECIPIENT_VARIABLES_KEY, TEMPLATE_VARIABLES_KEY, Message

X = EmailAddress.from_address("x@y.com")
Z = EmailAddress.from_address("z@y.com")
ANN = EmailAddress.name_address("Ann", "a@b.com")


@pytest.mark.os_agnostic
def test_empty_message_has_exactly_the_body_keys() -> None:
    assert Message().to_parameters() == {"subject": "", "text": "", "html": ""}


@pytest.mark.os_agnostic
def test_two_to_recipients_are_comma_joined_without_spaces() -> None:
    params = Message(to=[X, Z], subject="Hi").to_parameters()

    assert params["to"] == "x@y.com,z@y.com"
    assert params["subject"] == "Hi"
    assert "cc" not in params
    assert "bcc" not in params


@pytest.mark.os_agnostic
def test_named_recipients_render_with_display_name() -> None:
    assert Message(cc=[ANN, X]).to_parameters()["cc"] == "Ann <a@b.com>,x@y.com"


@pytest.mark.os_agnostic
def test_each_role_is_flattened_independently() -> None:
    params = Message(to=[X], cc=[Z], bcc=[ANN]).to_parameters()

    assert (params["to"], params["cc"], params["bcc"]) == ("x@y.com", "z@y.com", "Ann <a@b.com>")


@pytest.mark.os_agnostic
def test_body_keys_are_present_even_when_empty() -> None:
    params = Message(to=[X], text="hello").to_parameters()

    assert params["subject"] == ""
    assert params["text"] == "hello"
    assert params["html"] == ""


@pytest.mark.os_agnostic
def test_template_with_variables_sets_template_and_variables_header() -> None:
    params = Message(to=[X], template="welcome", template_vars={"firstname": "Dongri"}).to_parameters()

    assert params["template"] == "welcome"
    assert orjson.loads(params[TEMPLATE_VARIABLES_KEY]) == {"firstname": "Dongri"}
    assert RECIPIENT_VARIABLES_KEY not in params


@pytest.mark.os_agnostic
def test_template_without_variables_sets_only_template() -> None:
    params = Message(template="welcome").to_parameters()

    assert params["template"] == "welcome"
    assert TEMPLATE_VARIABLES_KEY not in params
    assert RECIPIENT_VARIABLES_KEY not in params


@pytest.mark.os_agnostic
def test_recipient_variables_are_serialized_under_their_own_key() -> None:
    recipient_vars = {"x@y.com": {"first": "X"}, "z@y.com": {"first": "Z"}}

    params = Message(to=[X, Z], template="welcome", recipient_vars=recipient_vars).to_parameters()

    assert orjson.loads(params[RECIPIENT_VARIABLES_KEY]) == recipient_vars


@pytest.mark.os_agnostic
def test_variables_without_template_are_ignored() -> None:
    message = Message(template_vars={"firstname": "Dongri"}, recipient_vars={"x@y.com": {"a": "b"}})

    params = message.to_parameters()

    assert "template" not in params
    assert TEMPLATE_VARIABLES_KEY not in params
    assert RECIPIENT_VARIABLES_KEY not in params


@pytest.mark.os_agnostic
def test_header_keys_use_mailgun_custom_header_prefix() -> None:
    assert TEMPLATE_VARIABLES_KEY == "h:X-Mailgun-Variables"
    assert RECIPIENT_VARIABLES_KEY == "h:X-Mailgun-Recipient-Variables"


@pytest.mark.os_agnostic
def test_variables_json_is_compact() -> None:
    params = Message(template="t", template_vars={"firstname": "Dongri"}).to_parameters()

    assert params[TEMPLATE_VARIABLES_KEY] == '{"firstname":"Dongri"}'


@pytest.mark.os_agnostic
def test_non_ascii_variables_round_trip() -> None:
    params = Message(template="t", template_vars={"name": "Jürgen 日本"}).to_parameters()

    assert orjson.loads(params[TEMPLATE_VARIABLES_KEY]) == {"name": "Jürgen 日本"}


@pytest.mark.os_agnostic
def test_flattening_twice_gives_equal_results() -> None:
    message = Message(to=[X], template="t", template_vars={"a": "b"})

    assert message.to_parameters() == message.to_parameters()


@pytest.mark.os_agnostic
def test_returned_parameters_are_a_new_dict_each_time() -> None:
    message = Message(to=[X])
    first = message.to_parameters()
    first["to"] = "tampered"

    assert message.to_parameters()["to"] == "x@y.com"


@pytest.mark.os_agnostic
def test_recipients_by_role() -> None:
    message = Message(to=[X], bcc=[Z])

    assert list(message.recipients("to")) == [X]
    assert list(message.recipients("cc")) == []
    assert list(message.recipients("bcc")) == [Z]


@pytest.mark.os_agnostic
def test_recipients_rejects_unknown_role() -> None:
    with pytest.raises(ValueError, match="Unknown recipient role"):
        Message().recipients("reply-to")
