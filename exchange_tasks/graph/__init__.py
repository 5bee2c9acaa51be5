"""Microsoft Graph helpers: mailbox selection, query building and result mapping."""

from exchange_tasks.graph.mailbox import mailbox_for
from exchange_tasks.graph.mapping import message_to_result, recipient_addresses
from exchange_tasks.graph.query import (
    attachments_request_configuration,
    build_messages_query_parameters,
    build_messages_request_configuration,
    split_query_list,
)

__all__ = [
    "mailbox_for",
    "message_to_result",
    "recipient_addresses",
    "attachments_request_configuration",
    "build_messages_query_parameters",
    "build_messages_request_configuration",
    "split_query_list",
]
