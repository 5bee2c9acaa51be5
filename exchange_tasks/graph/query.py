"""Translate read task input into Graph request configuration ($filter, $select, ...)."""

from msgraph.generated.users.item.messages.item.attachments.attachments_request_builder import (
    AttachmentsRequestBuilder,
)
from msgraph.generated.users.item.messages.messages_request_builder import (
    MessagesRequestBuilder,
)

from exchange_tasks.models.read import ReadInput

# Nested messages (item attachments) come back with their own attachments.
ITEM_ATTACHMENT_EXPAND = ["microsoft.graph.itemattachment/item"]


def split_query_list(value: str | None) -> list[str] | None:
    """Split "a, b,c" into ["a", "b", "c"]; None for a blank value."""
    if not value or not value.strip():
        return None
    parts = [part.strip() for part in value.split(",")]
    return [part for part in parts if part] or None


def build_messages_query_parameters(
    read_input: ReadInput,
) -> MessagesRequestBuilder.MessagesRequestBuilderGetQueryParameters:
    """Map ReadInput's OData knobs to query parameters; blank knobs are omitted."""
    return MessagesRequestBuilder.MessagesRequestBuilderGetQueryParameters(
        count=True,
        filter=read_input.filter if read_input.filter and read_input.filter.strip() else None,
        select=split_query_list(read_input.select),
        skip=read_input.skip,
        top=read_input.top if read_input.top > 0 else None,
        orderby=split_query_list(read_input.orderby),
        expand=split_query_list(read_input.expand),
    )


def build_messages_request_configuration(
    read_input: ReadInput,
) -> MessagesRequestBuilder.MessagesRequestBuilderGetRequestConfiguration:
    """Request configuration for listing messages, including custom headers."""
    config = MessagesRequestBuilder.MessagesRequestBuilderGetRequestConfiguration(
        query_parameters=build_messages_query_parameters(read_input),
    )
    for header in read_input.headers:
        if header.header_name and header.header_values:
            config.headers.add(header.header_name, list(header.header_values))
    return config


def attachments_request_configuration() -> AttachmentsRequestBuilder.AttachmentsRequestBuilderGetRequestConfiguration:
    query = AttachmentsRequestBuilder.AttachmentsRequestBuilderGetQueryParameters(
        expand=ITEM_ATTACHMENT_EXPAND,
    )
    return AttachmentsRequestBuilder.AttachmentsRequestBuilderGetRequestConfiguration(
        query_parameters=query,
    )
