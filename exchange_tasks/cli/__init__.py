"""CLI commands: one module per mode (read, send, ews-read, validate-connection)."""

from typer import Typer

from exchange_tasks.cli import ews_mode, read_mode, send_mode, validate_connection as validate_connection_module
from exchange_tasks.utils.tracing import init_tracing

init_tracing()

app = Typer(help="Microsoft Exchange read/send email tasks")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(read_mode.read)
    app.command()(send_mode.send)
    app.command(name="ews-read")(ews_mode.ews_read)
    app.command(name="validate-connection")(validate_connection_module.validate_connection)


register_commands()
