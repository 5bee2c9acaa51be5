"""Parameter and result models for the send email task."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AttachmentType(str, Enum):
    FileAttachment = "FileAttachment"  # read from disk
    AttachmentFromString = "AttachmentFromString"  # written to a temp file first


class Importance(str, Enum):
    Low = "Low"
    Normal = "Normal"
    High = "High"


class AttachmentSource(BaseModel):
    """One attachment descriptor.

    For AttachmentFromString, file_name and file_content are used. For FileAttachment,
    file_path names either a file or a directory; for a directory every file matching
    file_mask is attached.
    """

    attachment_type: AttachmentType = AttachmentType.FileAttachment
    file_name: Optional[str] = None
    file_content: Optional[str] = None
    file_path: Optional[str] = None
    file_mask: str = "*"


class SendInput(BaseModel):
    """Email content. Recipient strings are separated by ',' or ';'."""

    from_: Optional[str] = Field(None, alias="from")  # sending mailbox; empty sends as /me
    to: Optional[str] = None
    cc: Optional[str] = None
    bcc: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    is_message_html: bool = False
    importance: Importance = Importance.Normal
    save_to_sent_items: bool = True
    attachments: list[AttachmentSource] = []

    class Config:
        populate_by_name = True


class SendOptions(BaseModel):
    throw_exception_on_failure: bool = True
    throw_exception_if_attachment_not_found: bool = False


class SendResult(BaseModel):
    """Result envelope of the send email task."""

    success: bool
    data: str
    error_messages: list[str] = []
