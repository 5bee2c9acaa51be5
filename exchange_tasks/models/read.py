"""Parameter and result models for the read email task."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FileExistHandler(str, Enum):
    """What to do when a downloaded attachment's target file already exists."""

    Skip = "Skip"
    Rename = "Rename"  # file(1).txt, file(2).txt, ...
    Append = "Append"
    OverWrite = "OverWrite"


class HeaderParameter(BaseModel):
    """A custom request header and its values, e.g. Prefer: outlook.body-content-type="text"."""

    header_name: str
    header_values: list[str] = []


class ReadInput(BaseModel):
    """Which messages to read and what to do with them."""

    from_: Optional[str] = Field(None, alias="from")  # user id / UPN; empty reads /me
    select: Optional[str] = None  # "subject,body,hasAttachments"
    filter: Optional[str] = None  # OData $filter
    skip: Optional[int] = None
    top: int = 0  # 0 returns all items
    orderby: Optional[str] = None  # "receivedDateTime DESC,subject ASC"
    expand: Optional[str] = None
    update_read_status: bool = True
    headers: list[HeaderParameter] = []
    download_attachments: bool = True
    destination_directory: Optional[str] = None
    create_directory: bool = False
    file_exist_handler: FileExistHandler = FileExistHandler.Skip

    class Config:
        populate_by_name = True


class ReadOptions(BaseModel):
    """Failure handling for the read email task."""

    throw_exception_on_failure: bool = True
    throw_error_if_no_messages_found: bool = False


class AttachmentResult(BaseModel):
    """A downloaded attachment."""

    id: Optional[str] = None
    file_path: Optional[str] = None
    size: Optional[int] = None
    odata_type: Optional[str] = None
    content: Optional[str] = None


class MessageResult(BaseModel):
    """A message flattened to plain values."""

    id: Optional[str] = None
    parent_folder_id: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    sender: Optional[str] = None
    to_recipients: Optional[list[str]] = None
    cc_recipients: Optional[list[str]] = None
    bcc_recipients: Optional[list[str]] = None
    reply_to: Optional[list[str]] = None
    subject: Optional[str] = None
    content_type: Optional[str] = None
    content: Optional[str] = None
    categories: Optional[list[str]] = None
    importance: Optional[str] = None
    is_draft: bool = False
    is_read: bool = False
    has_attachments: bool = False
    extensions: Optional[list[str]] = None
    attachments: Optional[list[AttachmentResult]] = None

    class Config:
        populate_by_name = True


class ReadResult(BaseModel):
    """Result envelope of the read email task."""

    success: bool
    data: list[MessageResult] = []
    error_messages: list[str] = []
