"""EWS mode: read an on-premises Exchange inbox over Exchange Web Services."""

import asyncio
from pathlib import Path

import typer
from rich.table import Table

from exchange_tasks.errors import ConfigurationError
from exchange_tasks.models.ews import ExchangeOptions, ExchangeSettings
from exchange_tasks.tasks.ews_read import ews_read_email

from .shared import console, load_model, logger, write_json_result


def ews_read(
    settings_file: Path = typer.Option(..., "--settings", help="ExchangeSettings JSON"),
    options_file: Path = typer.Option(None, "--options", help="ExchangeOptions JSON"),
    output: Path = typer.Option(None, "--output", "-o", help="Result JSON path"),
) -> None:
    """Read emails over EWS."""
    settings = load_model(ExchangeSettings, settings_file)
    options = load_model(ExchangeOptions, options_file)
    log = logger.bind(command="ews-read", mailbox=settings.mailbox or settings.username)
    try:
        results = asyncio.run(ews_read_email(settings, options))
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        log.warning("ews_read.configuration_error", error=str(e))
        raise typer.Exit(1)

    table = Table(title=f"EWS messages ({len(results)})")
    table.add_column("From", style="cyan")
    table.add_column("Received")
    table.add_column("Subject")
    table.add_column("Saved attachments", justify="right")
    for item in results:
        received = item.date.isoformat()[:19] if item.date else ""
        table.add_row(item.from_ or "", received, item.subject or "", str(len(item.attachment_save_dirs)))
    console.print(table)
    path = write_json_result(results, output, name="ews_read_result.json")
    console.print(f"[green]Wrote {path}[/green]")
    log.info("ews_read.complete", count=len(results))
