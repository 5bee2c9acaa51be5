"""Shared CLI helpers: console, logger, parameter loading, result output."""

import json
from pathlib import Path
from typing import TypeVar

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console

from exchange_tasks import config
from exchange_tasks.models.connection import AuthenticationProvider, Connection
from exchange_tasks.utils.logger import get_logger

console = Console()
logger = get_logger("exchange_tasks.cli")

ModelT = TypeVar("ModelT", bound=BaseModel)


def load_model(model: type[ModelT], path: Path | None) -> ModelT:
    """Load a parameter object from a JSON file; defaults when no file is given."""
    if path is None:
        return model()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return model.model_validate(data)
    except FileNotFoundError:
        console.print(f"[red]Parameter file not found: {path}[/red]")
        raise typer.Exit(1)
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]Invalid parameters in {path}:[/red]\n{e}")
        logger.warning("cli.invalid_parameters", path=str(path), error=str(e))
        raise typer.Exit(1)


def connection_from_env() -> Connection:
    """Connection from environment variables; the provider is inferred from what is set."""
    if config.AZURE_CLIENT_SECRET:
        provider = AuthenticationProvider.ClientCredentialsSecret
    elif config.AZURE_CERTIFICATE_PATH:
        provider = AuthenticationProvider.ClientCredentialsCertificate
    else:
        provider = AuthenticationProvider.UsernamePassword
    return Connection(
        authentication_provider=provider,
        tenant_id=config.AZURE_TENANT_ID or None,
        client_id=config.AZURE_CLIENT_ID or None,
        client_secret=config.AZURE_CLIENT_SECRET or None,
        x509_certificate_file_path=config.AZURE_CERTIFICATE_PATH or None,
        username=config.EXCHANGE_USERNAME or None,
        password=config.EXCHANGE_PASSWORD or None,
    )


def load_connection(path: Path | None) -> Connection:
    if path is None:
        return connection_from_env()
    return load_model(Connection, path)


def write_json_result(result: BaseModel | list[BaseModel], path: Path | None = None, name: str = "result.json") -> Path:
    path = path or config.OUTPUT_DIR / name
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(result, list):
        payload = [item.model_dump(mode="json", by_alias=True) for item in result]
    else:
        payload = result.model_dump(mode="json", by_alias=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, default=str)
    logger.info("results.write_json", path=str(path))
    return path
