"""Map Graph SDK messages to plain result models."""

from typing import Any, Optional

from msgraph.generated.models.message import Message as GraphSDKMessage
from msgraph.generated.models.recipient import Recipient as GraphSDKRecipient

from exchange_tasks.models.read import MessageResult


def _enum_name(value: Any) -> Optional[str]:
    """BodyType.Html -> "Html", Importance.Normal -> "Normal"."""
    if value is None:
        return None
    return getattr(value, "name", None) or str(value)


def _address(recipient: GraphSDKRecipient | None) -> Optional[str]:
    if recipient and recipient.email_address:
        return recipient.email_address.address
    return None


def recipient_addresses(recipients: list[GraphSDKRecipient] | None) -> Optional[list[str]]:
    """Addresses of the recipients; recipients without an email address are dropped."""
    if recipients is None:
        return None
    return [
        r.email_address.address
        for r in recipients
        if r is not None and r.email_address is not None
    ]


def message_to_result(msg: GraphSDKMessage) -> MessageResult:
    """Flatten an SDK message. Attachments are filled in separately when downloaded."""
    return MessageResult(
        id=msg.id,
        parent_folder_id=msg.parent_folder_id,
        from_=_address(msg.from_),
        sender=_address(msg.sender),
        to_recipients=recipient_addresses(msg.to_recipients),
        cc_recipients=recipient_addresses(msg.cc_recipients),
        bcc_recipients=recipient_addresses(msg.bcc_recipients),
        reply_to=recipient_addresses(msg.reply_to),
        subject=msg.subject,
        content_type=_enum_name(msg.body.content_type) if msg.body else None,
        content=msg.body.content if msg.body else None,
        categories=msg.categories,
        importance=_enum_name(msg.importance),
        is_draft=msg.is_draft or False,
        is_read=msg.is_read or False,
        has_attachments=msg.has_attachments or False,
        extensions=[e.id for e in msg.extensions if e is not None] if msg.extensions is not None else None,
    )
