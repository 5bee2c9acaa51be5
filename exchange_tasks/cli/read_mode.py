"""Read mode: list messages via Graph, optionally download attachments."""

import asyncio
from pathlib import Path

import typer
from rich.table import Table

from exchange_tasks.errors import ConfigurationError
from exchange_tasks.models.read import ReadInput, ReadOptions, ReadResult
from exchange_tasks.tasks.graph_read import read_email
from exchange_tasks.utils.logger import bind_context, clear_context

from .shared import console, load_connection, load_model, logger, write_json_result


def print_read_result(result: ReadResult) -> None:
    table = Table(title=f"Messages ({len(result.data)})")
    table.add_column("Received from", style="cyan")
    table.add_column("Subject")
    table.add_column("Read", justify="center")
    table.add_column("Attachments", justify="right")
    for item in result.data:
        table.add_row(
            item.from_ or "",
            item.subject or "(No subject)",
            "yes" if item.is_read else "no",
            str(len(item.attachments or [])),
        )
    console.print(table)
    for error in result.error_messages:
        console.print(f"[red]{error}[/red]")


def read(
    connection_file: Path = typer.Option(None, "--connection", "-c", help="Connection JSON (default: environment)"),
    input_file: Path = typer.Option(None, "--input", "-i", help="ReadInput JSON"),
    top: int = typer.Option(None, "--top", help="Override input top"),
    no_throw: bool = typer.Option(False, "--no-throw", help="Collect errors instead of failing"),
    fail_if_empty: bool = typer.Option(False, "--fail-if-empty", help="Fail when no messages match"),
    output: Path = typer.Option(None, "--output", "-o", help="Result JSON path"),
) -> None:
    """Read messages from a mailbox via Microsoft Graph."""
    connection = load_connection(connection_file)
    read_input = load_model(ReadInput, input_file)
    if top is not None:
        read_input.top = top
    options = ReadOptions(
        throw_exception_on_failure=not no_throw,
        throw_error_if_no_messages_found=fail_if_empty,
    )
    log = logger.bind(command="read", mailbox=read_input.from_ or "me")
    bind_context(command="read")
    try:
        result = asyncio.run(read_email(connection, read_input, options))
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        log.warning("read.configuration_error", error=str(e))
        raise typer.Exit(1)
    except Exception:
        log.exception("read.unexpected_error")
        raise
    finally:
        clear_context()

    print_read_result(result)
    path = write_json_result(result, output, name="read_result.json")
    console.print(f"[green]Wrote {path}[/green]")
    log.info("read.complete", count=len(result.data), success=result.success)
    if not result.success:
        raise typer.Exit(1)
