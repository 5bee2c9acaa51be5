"""Legacy read email task over Exchange Web Services."""

import asyncio
import uuid
from pathlib import Path

from exchangelib import Account, FileAttachment, Message

from exchange_tasks.errors import ConfigurationError, NoMessagesFoundError
from exchange_tasks.ews.client import build_search_filter, connect_account
from exchange_tasks.models.ews import EmailMessageResult, ExchangeOptions, ExchangeSettings
from exchange_tasks.utils.logger import get_logger
from exchange_tasks.utils.tracing import get_tracer

logger = get_logger("exchange_tasks.ews_read_email")


def validate_ews_options(options: ExchangeOptions) -> None:
    if not options.ignore_attachments:
        if not (options.attachment_save_directory or "").strip():
            raise ConfigurationError("No save directory given: attachment_save_directory.")
        if not Path(options.attachment_save_directory).is_dir():
            raise ConfigurationError(
                f"Could not find or access attachment save directory {options.attachment_save_directory}"
            )
    if options.max_emails <= 0:
        raise ConfigurationError("max_emails can't be lower than 1.")


def attachment_path(directory: str | Path, name: str, overwrite: bool) -> Path:
    """Keep the name when overwriting, otherwise make it unique with a uuid."""
    name = Path((name or "attachment").replace("\\", "/")).name or "attachment"
    if overwrite:
        return Path(directory) / name
    stem, suffix = Path(name).stem, Path(name).suffix
    return Path(directory) / f"{stem}_{uuid.uuid4()}{suffix}"


def save_attachments(message: Message, options: ExchangeOptions) -> list[str]:
    paths = []
    for attachment in message.attachments or []:
        if not isinstance(attachment, FileAttachment):
            continue
        path = attachment_path(
            options.attachment_save_directory, attachment.name, options.overwrite_attachment
        )
        path.write_bytes(attachment.content or b"")
        paths.append(str(path))
    return paths


def _addresses(mailboxes) -> str:
    return ",".join(m.email_address for m in mailboxes or [] if m and m.email_address)


def to_result(message: Message, attachment_paths: list[str]) -> EmailMessageResult:
    return EmailMessageResult(
        id=message.id,
        to=_addresses(message.to_recipients),
        cc=_addresses(message.cc_recipients),
        from_=message.author.email_address if message.author else None,
        date=message.datetime_received,
        subject=message.subject,
        # text_body is only served by Exchange 2013 and later
        body_text=str(message.text_body) if message.text_body else "",
        body_html=str(message.body) if message.body is not None else None,
        attachment_save_dirs=attachment_paths,
    )


def find_messages(account: Account, options: ExchangeOptions) -> list[Message]:
    filters = build_search_filter(options)
    query = account.inbox.filter(**filters) if filters else account.inbox.all()
    items = query.order_by("-datetime_received")[: options.max_emails]
    return [item for item in items if isinstance(item, Message)]


def read_ews_messages(settings: ExchangeSettings, options: ExchangeOptions) -> list[EmailMessageResult]:
    """Blocking implementation; exchangelib performs synchronous SOAP calls."""
    account = connect_account(settings)
    messages = find_messages(account, options)
    logger.info("ews_read_email.listed", count=len(messages))

    if not messages and options.throw_error_if_no_messages_found:
        raise NoMessagesFoundError("No messages found matching the search filter.")

    results = []
    for message in messages:
        paths = [] if options.ignore_attachments else save_attachments(message, options)
        results.append(to_result(message, paths))

    if options.delete_read_emails:
        for message in messages:
            message.delete()
        logger.info("ews_read_email.deleted", count=len(messages))
    elif options.mark_emails_as_read:
        for message in messages:
            message.is_read = True
            message.save(update_fields=["is_read"])
        logger.info("ews_read_email.marked_read", count=len(messages))

    return results


async def ews_read_email(settings: ExchangeSettings, options: ExchangeOptions) -> list[EmailMessageResult]:
    """Read emails from an Exchange inbox over EWS.

    Runs the blocking exchangelib calls in a worker thread. Configuration errors
    are raised before connecting; every other error propagates.
    """
    validate_ews_options(options)
    with get_tracer().start_as_current_span("ews_read_email"):
        logger.info(
            "ews_read_email.start",
            mailbox=settings.mailbox or settings.username,
            max_emails=options.max_emails,
        )
        results = await asyncio.to_thread(read_ews_messages, settings, options)
    logger.info("ews_read_email.complete", count=len(results))
    return results
