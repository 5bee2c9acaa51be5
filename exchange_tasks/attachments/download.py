"""Attachment download: write attachment bytes honouring the file-exists policy.

Each attachment is written independently. Collisions are resolved against what
is on disk at write time; nothing is remembered between runs.
"""

from pathlib import Path

from msgraph.generated.models.file_attachment import FileAttachment
from msgraph.generated.models.item_attachment import ItemAttachment
from msgraph.generated.models.message import Message as GraphSDKMessage
from msgraph.generated.users.item.user_item_request_builder import UserItemRequestBuilder

from exchange_tasks.errors import FileExistHandlingError
from exchange_tasks.graph.query import attachments_request_configuration
from exchange_tasks.models.read import AttachmentResult, FileExistHandler
from exchange_tasks.utils.logger import get_logger

logger = get_logger("exchange_tasks.attachments.download")


def unique_file_path(path: str | Path) -> Path:
    """Return path, or name(N).ext with the lowest N >= 1 that does not exist yet."""
    path = Path(path)
    if not path.exists():
        return path
    count = 1
    while True:
        candidate = path.with_name(f"{path.stem}({count}){path.suffix}")
        if not candidate.exists():
            return candidate
        count += 1


def write_attachment_file(handler: FileExistHandler, content: bytes, path: str | Path) -> str:
    """Write content to path and return where it went.

    Skip returns a descriptive message instead of a path and writes nothing.
    """
    path = Path(path)
    if not path.exists():
        with path.open("xb") as f:
            f.write(content)
        logger.debug("attachments.download.written", path=str(path), size=len(content))
        return str(path)

    if handler == FileExistHandler.Skip:
        logger.info("attachments.download.skipped", path=str(path))
        return f"The file {path} already exists. Download skipped."
    if handler == FileExistHandler.Rename:
        renamed = unique_file_path(path)
        with renamed.open("xb") as f:
            f.write(content)
        logger.info("attachments.download.renamed", path=str(path), renamed_to=str(renamed))
        return str(renamed)
    if handler == FileExistHandler.Append:
        with path.open("ab") as f:
            f.write(content)
        logger.info("attachments.download.appended", path=str(path), size=len(content))
        return str(path)
    if handler == FileExistHandler.OverWrite:
        with path.open("wb") as f:
            f.write(content)
        logger.info("attachments.download.overwritten", path=str(path), size=len(content))
        return str(path)
    raise FileExistHandlingError(
        f"An exception occurred while trying to handle an already existing file: {path}"
    )


def _safe_file_name(name: str | None, attachment_id: str | None) -> str:
    """Attachment names may carry directory parts; keep the base name only."""
    base = Path((name or "").replace("\\", "/")).name
    if base in ("", ".", ".."):
        return f"attachment_{(attachment_id or 'unnamed')[:8]}"
    return base


async def download_message_attachments(
    mailbox: UserItemRequestBuilder,
    message_id: str,
    directory: str | Path,
    handler: FileExistHandler,
    create_directory: bool = False,
) -> list[AttachmentResult]:
    """Download a message's file attachments, including those of attached messages."""
    directory = Path(directory)
    if create_directory and not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.info("attachments.download.directory_created", directory=str(directory))

    response = await mailbox.messages.by_message_id(message_id).attachments.get(
        request_configuration=attachments_request_configuration(),
    )
    results: list[AttachmentResult] = []
    for attachment in (response.value or []) if response else []:
        if isinstance(attachment, FileAttachment):
            file_path = write_attachment_file(
                handler,
                attachment.content_bytes or b"",
                directory / _safe_file_name(attachment.name, attachment.id),
            )
            results.append(
                AttachmentResult(
                    id=attachment.id,
                    file_path=file_path,
                    size=attachment.size,
                    odata_type=attachment.odata_type,
                )
            )
        elif isinstance(attachment, ItemAttachment) and isinstance(attachment.item, GraphSDKMessage):
            # An attached email: its own file attachments are saved, reported under the outer attachment.
            for inner in attachment.item.attachments or []:
                if not isinstance(inner, FileAttachment):
                    continue
                file_path = write_attachment_file(
                    handler,
                    inner.content_bytes or b"",
                    directory / _safe_file_name(inner.name, inner.id),
                )
                results.append(
                    AttachmentResult(
                        id=attachment.id,
                        file_path=file_path,
                        size=attachment.size,
                        odata_type=attachment.odata_type,
                    )
                )
        else:
            logger.debug(
                "attachments.download.unsupported_type",
                message_id=message_id,
                odata_type=getattr(attachment, "odata_type", None),
            )
    logger.info("attachments.download.complete", message_id=message_id, count=len(results))
    return results
