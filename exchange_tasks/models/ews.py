"""Settings and result models for the legacy EWS read task."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ExchangeServerVersion(str, Enum):
    Exchange2007_SP1 = "Exchange2007_SP1"
    Exchange2010 = "Exchange2010"
    Exchange2010_SP1 = "Exchange2010_SP1"
    Exchange2010_SP2 = "Exchange2010_SP2"
    Exchange2013 = "Exchange2013"
    Exchange2013_SP1 = "Exchange2013_SP1"
    Office365 = "Office365"


class ExchangeSettings(BaseModel):
    """Exchange server and account settings."""

    exchange_server_version: ExchangeServerVersion = ExchangeServerVersion.Exchange2013
    use_auto_discover: bool = False  # server_address is ignored when set
    server_address: Optional[str] = None  # https://host/EWS/Exchange.asmx
    use_agent_account: bool = False
    username: Optional[str] = None
    password: Optional[str] = None
    mailbox: Optional[str] = None  # empty reads the account's own inbox
    trust_self_signed_certificates: bool = False


class ExchangeOptions(BaseModel):
    """What to read and what to do with the read messages."""

    max_emails: int = 10
    get_only_unread_emails: bool = False
    mark_emails_as_read: bool = False
    delete_read_emails: bool = False  # takes precedence over mark_emails_as_read
    email_sender_filter: Optional[str] = None
    email_subject_filter: Optional[str] = None
    throw_error_if_no_messages_found: bool = False
    ignore_attachments: bool = False
    get_only_emails_with_attachments: bool = False
    attachment_save_directory: Optional[str] = None
    overwrite_attachment: bool = False  # otherwise a uuid is added to the file name


class EmailMessageResult(BaseModel):
    """A read EWS message."""

    id: Optional[str] = None
    to: str = ""
    cc: str = ""
    from_: Optional[str] = Field(None, alias="from")
    date: Optional[datetime] = None
    subject: Optional[str] = None
    body_text: str = ""
    body_html: Optional[str] = None
    attachment_save_dirs: list[str] = []

    class Config:
        populate_by_name = True
