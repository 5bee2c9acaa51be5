"""Credential selection and Graph client creation."""

from exchange_tasks.auth.credentials import (
    REQUIRED_FIELDS,
    create_credential,
    create_graph_client,
    missing_connection_fields,
    validate_connection,
)

__all__ = [
    "REQUIRED_FIELDS",
    "create_credential",
    "create_graph_client",
    "missing_connection_fields",
    "validate_connection",
]
