"""Configuration and settings."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
STATE_DIR = Path(os.getenv("EXCHANGE_TASKS_HOME", str(Path.home() / ".exchange-tasks")))
OUTPUT_DIR = Path(os.getenv("EXCHANGE_TASKS_OUTPUT_DIR", str(STATE_DIR / "output")))

# Logging
LOG_DIR = Path(os.getenv("EXCHANGE_TASKS_LOG_DIR", str(STATE_DIR / "logs")))
LOG_FILE = LOG_DIR / "app.jsonl"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"

# Graph API
GRAPH_SCOPES = [
    scope.strip()
    for scope in os.getenv("GRAPH_SCOPES", "https://graph.microsoft.com/.default").split(",")
    if scope.strip()
]

# OpenTelemetry (opt-in)
TRACING_ENABLED = os.getenv("TRACING_ENABLED", "false").lower() == "true"
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "http://localhost:4318/v1/traces")
SERVICE_NAME = os.getenv("SERVICE_NAME", "exchange-tasks")
DEPLOYMENT_ENVIRONMENT = os.getenv("DEPLOYMENT_ENVIRONMENT", "development")

# Connection defaults for the CLI (a connection file takes precedence)
AZURE_TENANT_ID = os.getenv("AZURE_TENANT_ID", "")
AZURE_CLIENT_ID = os.getenv("AZURE_CLIENT_ID", "")
AZURE_CLIENT_SECRET = os.getenv("AZURE_CLIENT_SECRET", "")
AZURE_CERTIFICATE_PATH = os.getenv("AZURE_CERTIFICATE_PATH", "")
EXCHANGE_USERNAME = os.getenv("EXCHANGE_USERNAME", "")
EXCHANGE_PASSWORD = os.getenv("EXCHANGE_PASSWORD", "")
