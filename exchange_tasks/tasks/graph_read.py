"""Read email task: list messages via Microsoft Graph, optionally download attachments and mark as read."""

from pathlib import Path

from msgraph.generated.models.message import Message as GraphSDKMessage
from msgraph.generated.users.item.user_item_request_builder import UserItemRequestBuilder
from opentelemetry.trace import Status, StatusCode

from exchange_tasks.attachments.download import download_message_attachments
from exchange_tasks.auth.credentials import create_graph_client, validate_connection
from exchange_tasks.errors import ConfigurationError, NoMessagesFoundError
from exchange_tasks.graph.mailbox import mailbox_for
from exchange_tasks.graph.mapping import message_to_result
from exchange_tasks.graph.query import build_messages_request_configuration
from exchange_tasks.models.connection import Connection
from exchange_tasks.models.read import MessageResult, ReadInput, ReadOptions, ReadResult
from exchange_tasks.utils.logger import get_logger
from exchange_tasks.utils.tracing import get_tracer

logger = get_logger("exchange_tasks.read_email")


def error_text(e: Exception) -> str:
    return str(e).strip() or repr(e)


def validate_read_input(connection: Connection, read_input: ReadInput) -> None:
    """Configuration checks that run before any network call."""
    validate_connection(connection)

    directory = (read_input.destination_directory or "").strip()
    if read_input.download_attachments and not directory:
        raise ConfigurationError(
            "download_attachments is set to true, but destination_directory is missing."
        )
    if directory and not read_input.create_directory and not Path(directory).is_dir():
        raise ConfigurationError(
            f"destination_directory is set, but the directory {directory} does not exist. "
            "Set create_directory to true to create the specified directory."
        )


async def mark_as_read(mailbox: UserItemRequestBuilder, message_id: str) -> None:
    """Listing does not change read status; it has to be patched explicitly."""
    await mailbox.messages.by_message_id(message_id).patch(GraphSDKMessage(is_read=True))


async def process_message(
    mailbox: UserItemRequestBuilder,
    message: GraphSDKMessage,
    read_input: ReadInput,
) -> MessageResult:
    result = message_to_result(message)
    if read_input.download_attachments and message.has_attachments:
        result.attachments = await download_message_attachments(
            mailbox,
            message.id,
            read_input.destination_directory,
            read_input.file_exist_handler,
            create_directory=read_input.create_directory,
        )
    if read_input.update_read_status:
        await mark_as_read(mailbox, message.id)
    return result


async def list_messages(mailbox: UserItemRequestBuilder, read_input: ReadInput) -> list[GraphSDKMessage]:
    response = await mailbox.messages.get(
        request_configuration=build_messages_request_configuration(read_input),
    )
    messages = list(response.value or []) if response else []
    if read_input.top > 0:
        messages = messages[: read_input.top]
    return messages


async def read_email(
    connection: Connection,
    read_input: ReadInput,
    options: ReadOptions,
) -> ReadResult:
    """Read messages from a mailbox.

    Configuration errors are always raised. Other failures propagate when
    options.throw_exception_on_failure is set; otherwise they are collected into
    ReadResult.error_messages and the remaining messages are still processed.
    """
    validate_read_input(connection, read_input)
    log = logger.bind(mailbox=read_input.from_ or "me")
    log.info("read_email.start", top=read_input.top, download_attachments=read_input.download_attachments)

    data: list[MessageResult] = []
    errors: list[str] = []
    with get_tracer().start_as_current_span("read_email") as span:
        messages: list[GraphSDKMessage] = []
        try:
            client = create_graph_client(connection)
            mailbox = mailbox_for(client, read_input.from_)
            messages = await list_messages(mailbox, read_input)
            if not messages and options.throw_error_if_no_messages_found:
                raise NoMessagesFoundError("No messages found matching the search criteria.")
        except Exception as e:
            if options.throw_exception_on_failure:
                span.set_status(Status(StatusCode.ERROR, error_text(e)))
                raise
            log.warning("read_email.list_failed", error=error_text(e), error_type=type(e).__name__)
            errors.append(error_text(e))
            messages = []

        log.info("read_email.listed", count=len(messages))
        for message in messages:
            try:
                data.append(await process_message(mailbox, message, read_input))
            except Exception as e:
                if options.throw_exception_on_failure:
                    span.set_status(Status(StatusCode.ERROR, error_text(e)))
                    raise
                log.warning(
                    "read_email.message_failed",
                    message_id=message.id,
                    error=error_text(e),
                    error_type=type(e).__name__,
                )
                errors.append(f"Message {message.id}: {error_text(e)}")

        span.set_attribute("read_email.count", len(data))
        span.set_attribute("read_email.errors", len(errors))

    log.info("read_email.complete", count=len(data), errors=len(errors))
    return ReadResult(success=not errors, data=data, error_messages=errors)
