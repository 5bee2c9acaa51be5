"""Legacy Exchange Web Services support."""

from exchange_tasks.ews.client import (
    SERVER_BUILDS,
    build_search_filter,
    connect_account,
    server_version,
    validate_server_address,
)

__all__ = [
    "SERVER_BUILDS",
    "build_search_filter",
    "connect_account",
    "server_version",
    "validate_server_address",
]
