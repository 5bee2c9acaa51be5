"""Pydantic models for task parameters and results."""

from exchange_tasks.models.connection import AuthenticationProvider, Connection
from exchange_tasks.models.ews import (
    EmailMessageResult,
    ExchangeOptions,
    ExchangeServerVersion,
    ExchangeSettings,
)
from exchange_tasks.models.read import (
    AttachmentResult,
    FileExistHandler,
    HeaderParameter,
    MessageResult,
    ReadInput,
    ReadOptions,
    ReadResult,
)
from exchange_tasks.models.send import (
    AttachmentSource,
    AttachmentType,
    Importance,
    SendInput,
    SendOptions,
    SendResult,
)

__all__ = [
    "AuthenticationProvider",
    "Connection",
    "EmailMessageResult",
    "ExchangeOptions",
    "ExchangeServerVersion",
    "ExchangeSettings",
    "AttachmentResult",
    "FileExistHandler",
    "HeaderParameter",
    "MessageResult",
    "ReadInput",
    "ReadOptions",
    "ReadResult",
    "AttachmentSource",
    "AttachmentType",
    "Importance",
    "SendInput",
    "SendOptions",
    "SendResult",
]
