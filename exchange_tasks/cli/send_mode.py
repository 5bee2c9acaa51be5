"""Send mode: send one email via Graph."""

import asyncio
from pathlib import Path

import typer

from exchange_tasks.errors import ConfigurationError
from exchange_tasks.models.send import AttachmentSource, SendInput, SendOptions
from exchange_tasks.tasks.graph_send import send_email
from exchange_tasks.utils.logger import bind_context, clear_context

from .shared import console, load_connection, load_model, logger


def send(
    connection_file: Path = typer.Option(None, "--connection", "-c", help="Connection JSON (default: environment)"),
    input_file: Path = typer.Option(None, "--input", "-i", help="SendInput JSON"),
    to: str = typer.Option(None, "--to", help="Recipients separated by ',' or ';'"),
    subject: str = typer.Option(None, "--subject", "-s"),
    message: str = typer.Option(None, "--message", "-m"),
    attach: list[Path] = typer.Option([], "--attach", "-a", help="File or directory to attach (repeatable)"),
    no_throw: bool = typer.Option(False, "--no-throw", help="Report failure in the result instead of raising"),
    strict_attachments: bool = typer.Option(False, "--strict-attachments", help="Fail when an attachment path matches nothing"),
) -> None:
    """Send an email via Microsoft Graph."""
    connection = load_connection(connection_file)
    send_input = load_model(SendInput, input_file)
    if to:
        send_input.to = to
    if subject is not None:
        send_input.subject = subject
    if message is not None:
        send_input.message = message
    for path in attach:
        send_input.attachments.append(AttachmentSource(file_path=str(path)))
    options = SendOptions(
        throw_exception_on_failure=not no_throw,
        throw_exception_if_attachment_not_found=strict_attachments,
    )

    log = logger.bind(command="send", mailbox=send_input.from_ or "me")
    bind_context(command="send")
    try:
        result = asyncio.run(send_email(connection, send_input, options))
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        log.warning("send.configuration_error", error=str(e))
        raise typer.Exit(1)
    except Exception:
        log.exception("send.unexpected_error")
        raise
    finally:
        clear_context()

    if not result.success:
        console.print(f"[red]{result.data}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{result.data}[/green]")
    log.info("send.complete")
