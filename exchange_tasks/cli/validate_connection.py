"""Validate a connection: check required fields per provider without any network call."""

from pathlib import Path

import typer
from rich.table import Table

from exchange_tasks.auth.credentials import REQUIRED_FIELDS, missing_connection_fields

from .shared import console, load_connection, logger


def validate_connection(
    connection_file: Path = typer.Option(None, "--connection", "-c", help="Connection JSON (default: environment)"),
) -> None:
    """Check that the selected authentication provider has all of its required values."""
    log = logger.bind(command="validate-connection")
    connection = load_connection(connection_file)
    provider = connection.authentication_provider
    missing = set(missing_connection_fields(connection))

    table = Table(title=f"Connection ({provider.value})")
    table.add_column("Field", style="cyan")
    table.add_column("Set", justify="center")
    for name in REQUIRED_FIELDS[provider]:
        table.add_row(name, "[red]no[/red]" if name in missing else "[green]yes[/green]")
    console.print(table)

    if missing:
        console.print(f"[red]Missing: {', '.join(sorted(missing))}[/red]")
        log.error("validate_connection.fail", provider=provider.value, missing=sorted(missing))
        raise typer.Exit(1)
    console.print("[green]Connection valid.[/green]")
    log.info("validate_connection.ok", provider=provider.value)
