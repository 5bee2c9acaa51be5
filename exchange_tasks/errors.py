"""Exceptions raised by the Exchange tasks."""


class ExchangeTaskError(Exception):
    """Base exception for Exchange task errors."""


class ConfigurationError(ExchangeTaskError, ValueError):
    """Missing or invalid task parameters. Raised before any network call and never suppressed."""


class NoMessagesFoundError(ExchangeTaskError):
    """No messages matched the search criteria and the caller asked for an error."""


class AttachmentNotFoundError(ExchangeTaskError, FileNotFoundError):
    """An attachment source path matched no files."""


class AttachmentUploadError(ExchangeTaskError):
    """A chunked upload session finished without reporting success."""


class FileExistHandlingError(ExchangeTaskError):
    """An existing destination file could not be handled by the configured policy."""
