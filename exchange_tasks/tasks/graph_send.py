"""Send email task: compose a message and send it via Microsoft Graph with optional attachments."""

import re

from msgraph.generated.models.body_type import BodyType
from msgraph.generated.models.email_address import EmailAddress as GraphSDKEmailAddress
from msgraph.generated.models.importance import Importance as GraphImportance
from msgraph.generated.models.item_body import ItemBody as GraphSDKItemBody
from msgraph.generated.models.message import Message as GraphSDKMessage
from msgraph.generated.models.recipient import Recipient as GraphSDKRecipient
from opentelemetry.trace import Status, StatusCode

from exchange_tasks.attachments.sources import TempFileTracker, resolve_attachment_files
from exchange_tasks.attachments.upload import select_sender
from exchange_tasks.auth.credentials import create_graph_client, validate_connection
from exchange_tasks.errors import ConfigurationError
from exchange_tasks.graph.mailbox import mailbox_for
from exchange_tasks.models.connection import Connection
from exchange_tasks.models.send import AttachmentType, Importance, SendInput, SendOptions, SendResult
from exchange_tasks.utils.logger import get_logger
from exchange_tasks.utils.tracing import get_tracer

logger = get_logger("exchange_tasks.send_email")

SUCCESS_MESSAGE = "Email sent successfully."

_RECIPIENT_SEPARATORS = re.compile(r"[,;]")

_IMPORTANCE = {
    Importance.Low: GraphImportance.Low,
    Importance.Normal: GraphImportance.Normal,
    Importance.High: GraphImportance.High,
}


def parse_recipients(value: str | None) -> list[GraphSDKRecipient]:
    """'a@x.com; b@x.com,c@x.com' -> recipients; spaces inside addresses are removed."""
    recipients = []
    for part in _RECIPIENT_SEPARATORS.split(value or ""):
        address = part.replace(" ", "")
        if address:
            recipients.append(GraphSDKRecipient(email_address=GraphSDKEmailAddress(address=address)))
    return recipients


def build_message(send_input: SendInput) -> GraphSDKMessage:
    return GraphSDKMessage(
        subject=send_input.subject,
        body=GraphSDKItemBody(
            content_type=BodyType.Html if send_input.is_message_html else BodyType.Text,
            content=send_input.message,
        ),
        to_recipients=parse_recipients(send_input.to),
        cc_recipients=parse_recipients(send_input.cc),
        bcc_recipients=parse_recipients(send_input.bcc),
        importance=_IMPORTANCE[send_input.importance],
    )


def validate_send_input(connection: Connection, send_input: SendInput) -> None:
    """Configuration checks that run before any network call."""
    validate_connection(connection)
    if not (send_input.to or "").strip():
        raise ConfigurationError("One or more required message values missing: to.")
    # A blank file_path is an unmatched source; throw_exception_if_attachment_not_found decides.
    for index, source in enumerate(send_input.attachments):
        if source.attachment_type == AttachmentType.AttachmentFromString:
            if not (source.file_name or "").strip():
                raise ConfigurationError(f"Attachment {index}: file_name is required for a string attachment.")


async def send_email(
    connection: Connection,
    send_input: SendInput,
    options: SendOptions,
) -> SendResult:
    """Send one email.

    Configuration errors are always raised. Any other failure propagates when
    options.throw_exception_on_failure is set, otherwise it is returned as an
    unsuccessful SendResult. Temp files for string attachments are removed either way.
    """
    validate_send_input(connection, send_input)
    log = logger.bind(mailbox=send_input.from_ or "me")
    log.info("send_email.start", attachments=len(send_input.attachments))

    tracker = TempFileTracker()
    with get_tracer().start_as_current_span("send_email") as span:
        try:
            client = create_graph_client(connection)
            mailbox = mailbox_for(client, send_input.from_)
            message = build_message(send_input)
            files = resolve_attachment_files(
                send_input.attachments,
                options.throw_exception_if_attachment_not_found,
                tracker,
            )
            span.set_attribute("send_email.attachments", len(files))
            sender = select_sender(files, client.request_adapter)
            await sender.send(mailbox, message, files, send_input.save_to_sent_items)
        except Exception as e:
            err_str = str(e).strip() or repr(e)
            span.set_status(Status(StatusCode.ERROR, err_str))
            if options.throw_exception_on_failure:
                raise
            log.warning("send_email.failed", error=err_str, error_type=type(e).__name__)
            return SendResult(
                success=False,
                data=f"Failed to send an email. {err_str}",
                error_messages=[err_str],
            )
        finally:
            tracker.cleanup()

    log.info("send_email.complete")
    return SendResult(success=True, data=SUCCESS_MESSAGE)
