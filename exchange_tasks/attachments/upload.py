"""Size-routed attachment upload.

Messages whose attachments all fit under LARGE_ATTACHMENT_THRESHOLD are sent in
one sendMail call with the attachment bytes inline. As soon as one file is
larger, the message is created as a draft, every file is streamed through its
own upload session in UPLOAD_SLICE_SIZE slices, and the draft is then sent
explicitly.
"""

import io
from pathlib import Path
from typing import Callable, Protocol

from kiota_abstractions.request_adapter import RequestAdapter
from msgraph.generated.models.attachment_item import AttachmentItem
from msgraph.generated.models.attachment_type import AttachmentType as GraphAttachmentType
from msgraph.generated.models.file_attachment import FileAttachment
from msgraph.generated.models.message import Message as GraphSDKMessage
from msgraph.generated.users.item.messages.item.attachments.create_upload_session.create_upload_session_post_request_body import (
    CreateUploadSessionPostRequestBody,
)
from msgraph.generated.users.item.send_mail.send_mail_post_request_body import (
    SendMailPostRequestBody,
)
from msgraph.generated.users.item.user_item_request_builder import UserItemRequestBuilder
from msgraph_core.tasks.large_file_upload import LargeFileUploadTask

from exchange_tasks.errors import AttachmentUploadError
from exchange_tasks.utils.logger import get_logger, log_task_step
from exchange_tasks.utils.tracing import get_tracer

logger = get_logger("exchange_tasks.attachments.upload")

LARGE_ATTACHMENT_THRESHOLD = 3 * 1024 * 1024
UPLOAD_SLICE_SIZE = 320 * 1024  # upload sessions require multiples of 320 KiB

UploadTaskFactory = Callable[..., LargeFileUploadTask]


class AttachmentSender(Protocol):
    """Sends a composed message together with its attachment files."""

    async def send(
        self,
        mailbox: UserItemRequestBuilder,
        message: GraphSDKMessage,
        files: list[Path],
        save_to_sent_items: bool,
    ) -> None:
        ...


class InlineAttachmentSender:
    """Attachment bytes travel inside the message; compose and send is one call."""

    async def send(
        self,
        mailbox: UserItemRequestBuilder,
        message: GraphSDKMessage,
        files: list[Path],
        save_to_sent_items: bool,
    ) -> None:
        if files:
            # content_bytes is base64-encoded by the SDK serializer.
            message.attachments = [
                FileAttachment(
                    odata_type="#microsoft.graph.fileAttachment",
                    name=path.name,
                    content_bytes=path.read_bytes(),
                )
                for path in files
            ]
        log_task_step("send_email", "Send message inline", {"attachments": len(files)})
        await mailbox.send_mail.post(
            SendMailPostRequestBody(message=message, save_to_sent_items=save_to_sent_items)
        )


class ChunkedAttachmentSender:
    """Draft, one upload session per file, then an explicit send of the draft.

    A draft sent through messages/{id}/send is always kept in Sent Items, so
    save_to_sent_items has no effect on this path.
    """

    def __init__(
        self,
        request_adapter: RequestAdapter,
        upload_task_factory: UploadTaskFactory = LargeFileUploadTask,
        slice_size: int = UPLOAD_SLICE_SIZE,
    ):
        self._request_adapter = request_adapter
        self._upload_task_factory = upload_task_factory
        self._slice_size = slice_size

    async def send(
        self,
        mailbox: UserItemRequestBuilder,
        message: GraphSDKMessage,
        files: list[Path],
        save_to_sent_items: bool,
    ) -> None:
        draft = await mailbox.messages.post(message)
        logger.info("attachments.upload.draft_created", message_id=draft.id, files=len(files))
        for path in files:
            await self.upload(mailbox, draft.id, path)
        log_task_step("send_email", "Send draft", {"message_id": draft.id})
        await mailbox.messages.by_message_id(draft.id).send.post()

    async def upload(self, mailbox: UserItemRequestBuilder, message_id: str, path: Path) -> None:
        """Stream one file into the draft through an upload session."""
        data = path.read_bytes()
        with get_tracer().start_as_current_span(
            "upload_attachment",
            attributes={"attachment.name": path.name, "attachment.size": len(data)},
        ):
            body = CreateUploadSessionPostRequestBody(
                attachment_item=AttachmentItem(
                    attachment_type=GraphAttachmentType.File,
                    name=path.name,
                    size=len(data),
                    content_type="application/octet-stream",
                ),
            )
            session = await mailbox.messages.by_message_id(
                message_id
            ).attachments.create_upload_session.post(body)
            logger.debug(
                "attachments.upload.session_opened",
                message_id=message_id,
                name=path.name,
                size=len(data),
            )
            task = self._upload_task_factory(
                upload_session=session,
                request_adapter=self._request_adapter,
                stream=io.BytesIO(data),
                parsable_factory=FileAttachment,
                max_chunk_size=self._slice_size,
            )
            result = await task.upload()
            if result is None or not result.upload_succeeded:
                logger.error("attachments.upload.failed", message_id=message_id, name=path.name)
                raise AttachmentUploadError(f'Failed to upload large attachment "{path}".')
            logger.info("attachments.upload.complete", message_id=message_id, name=path.name)


def is_large(path: Path) -> bool:
    return path.stat().st_size > LARGE_ATTACHMENT_THRESHOLD


def select_sender(
    files: list[Path],
    request_adapter: RequestAdapter,
    upload_task_factory: UploadTaskFactory = LargeFileUploadTask,
) -> AttachmentSender:
    """Chunked sender when any file exceeds the threshold, inline sender otherwise."""
    if any(is_large(path) for path in files):
        logger.info("attachments.upload.route", route="chunked", files=len(files))
        return ChunkedAttachmentSender(request_adapter, upload_task_factory=upload_task_factory)
    logger.info("attachments.upload.route", route="inline", files=len(files))
    return InlineAttachmentSender()
