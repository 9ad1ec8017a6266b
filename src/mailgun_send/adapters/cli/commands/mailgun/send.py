"""``send`` command: one message through the Mailgun messages endpoint."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click
from pydantic import ValidationError

from mailgun_send.adapters.mailgun.client import SendResponse
from mailgun_send.adapters.mailgun.validation import parse_address, parse_addresses
from mailgun_send.domain.address import EmailAddress
from mailgun_send.domain.message import Message

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import (
    apply_validated_overrides,
    execute_with_send_error_handling,
    filter_sentinels,
    handle_validation_error,
    load_mailgun_config,
    mailgun_config_options,
    parse_recipient_vars,
    parse_template_vars,
)

logger = logging.getLogger(__name__)


def _build_message(
    *,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    subject: str,
    text: str,
    html: str,
    template: str,
    template_vars: tuple[str, ...],
    recipient_vars: str | None,
) -> Message:
    return Message(
        to=parse_addresses(to),
        cc=parse_addresses(cc),
        bcc=parse_addresses(bcc),
        subject=subject,
        text=text,
        html=html,
        template=template,
        template_vars=parse_template_vars(template_vars),
        recipient_vars=parse_recipient_vars(recipient_vars),
    )


@click.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--to", "to", multiple=True, help="Recipient, 'addr' or 'Name <addr>' (repeatable)")
@click.option("--cc", "cc", multiple=True, help="Carbon-copy recipient (repeatable)")
@click.option("--bcc", "bcc", multiple=True, help="Blind carbon-copy recipient (repeatable)")
@click.option("--subject", default="", help="Subject line")
@click.option("--text", default="", help="Plain-text body")
@click.option("--html", default="", help="HTML body")
@click.option("--template", default="", help="Name of a stored Mailgun template")
@click.option(
    "--var",
    "template_vars",
    multiple=True,
    metavar="KEY=VALUE",
    help="Template variable (repeatable; ignored without --template)",
)
@click.option(
    "--recipient-vars",
    default=None,
    metavar="JSON",
    help='Per-recipient variables, e.g. \'{"a@example.com": {"first": "A"}}\'',
)
@click.option("--from", "from_address", default=None, help="Sender address (default: mailgun.from_address)")
@click.option("--from-name", default=None, help="Sender display name (default: mailgun.from_name)")
@mailgun_config_options
@click.pass_context
def cli_send(
    ctx: click.Context,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    subject: str,
    text: str,
    html: str,
    template: str,
    template_vars: tuple[str, ...],
    recipient_vars: str | None,
    from_address: str | None,
    from_name: str | None,
    domain: str | None,
    api_key: str | None,
    zone: str | None,
    timeout: float | None,
) -> None:
    r"""Send one message through Mailgun and print the queued id.

    \b
    Example:
        mailgun-send send --to "Jane <jane@example.com>" --subject Hi --text Hello
        mailgun-send send --to a@example.com --template welcome --var firstname=A
    """
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send", "recipient_count": len(to) + len(cc) + len(bcc), "template": template or None}

    with lib_log_rich.runtime.bind(job_id="cli-send", extra=extra):
        mailgun_config = load_mailgun_config(cli_ctx.config, cli_ctx.services.load_mailgun_config_from_dict)
        overrides = filter_sentinels(domain=domain, api_key=api_key, zone=zone, timeout=timeout, from_name=from_name)
        try:
            mailgun_config = apply_validated_overrides(mailgun_config, overrides)
        except ValidationError as exc:
            handle_validation_error(exc)

        def operation() -> SendResponse:
            message = _build_message(
                to=to,
                cc=cc,
                bcc=bcc,
                subject=subject,
                text=text,
                html=html,
                template=template,
                template_vars=template_vars,
                recipient_vars=recipient_vars,
            )
            sender: EmailAddress | None = None
            if from_address is not None:
                sender = parse_address(from_address, name=from_name)
            return cli_ctx.services.send_message(config=mailgun_config, message=message, sender=sender)

        logger.info("Sending message via CLI", extra={"domain": mailgun_config.domain})
        response = execute_with_send_error_handling(operation=operation)
        click.echo(f"\n{response.message}")
        click.echo(f"id: {response.id}")


__all__ = ["cli_send"]
