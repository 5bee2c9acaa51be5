"""Tests for the CLI commands that need no network access."""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from typer.testing import CliRunner

from exchange_tasks.cli import app

runner = CliRunner()


def test_validate_connection_reports_missing_fields(tmp_path):
    path = tmp_path / "connection.json"
    path.write_text(json.dumps({"authentication_provider": "ClientCredentialsSecret", "tenant_id": "t"}))
    result = runner.invoke(app, ["validate-connection", "--connection", str(path)])
    assert result.exit_code == 1
    assert "client_secret" in result.output


def test_validate_connection_ok(tmp_path):
    path = tmp_path / "connection.json"
    path.write_text(
        json.dumps(
            {
                "authentication_provider": "ClientCredentialsCertificate",
                "tenant_id": "t",
                "client_id": "c",
                "x509_certificate_file_path": "/etc/ssl/app.pem",
            }
        )
    )
    result = runner.invoke(app, ["validate-connection", "--connection", str(path)])
    assert result.exit_code == 0
    assert "Connection valid." in result.output


def test_invalid_parameter_file_exits(tmp_path):
    path = tmp_path / "connection.json"
    path.write_text("{not json")
    result = runner.invoke(app, ["read", "--connection", str(path)])
    assert result.exit_code == 1


def test_read_configuration_error_exits_before_network(tmp_path):
    connection = tmp_path / "connection.json"
    connection.write_text(json.dumps({"authentication_provider": "ClientCredentialsSecret"}))
    result = runner.invoke(app, ["read", "--connection", str(connection)])
    assert result.exit_code == 1
    assert "missing" in result.output
