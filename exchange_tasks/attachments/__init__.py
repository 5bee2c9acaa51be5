"""Attachment transfer: download with collision handling, source resolution, size-routed upload."""

from exchange_tasks.attachments.download import (
    download_message_attachments,
    unique_file_path,
    write_attachment_file,
)
from exchange_tasks.attachments.sources import (
    TempFileTracker,
    files_for_source,
    resolve_attachment_files,
)
from exchange_tasks.attachments.upload import (
    LARGE_ATTACHMENT_THRESHOLD,
    UPLOAD_SLICE_SIZE,
    AttachmentSender,
    ChunkedAttachmentSender,
    InlineAttachmentSender,
    select_sender,
)

__all__ = [
    "download_message_attachments",
    "unique_file_path",
    "write_attachment_file",
    "TempFileTracker",
    "files_for_source",
    "resolve_attachment_files",
    "LARGE_ATTACHMENT_THRESHOLD",
    "UPLOAD_SLICE_SIZE",
    "AttachmentSender",
    "ChunkedAttachmentSender",
    "InlineAttachmentSender",
    "select_sender",
]
