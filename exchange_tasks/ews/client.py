"""Exchange Web Services connection and search helpers (exchangelib)."""

from typing import Any
from urllib.parse import urlparse

from exchangelib import DELEGATE, Account, Configuration, Credentials, Version
from exchangelib.protocol import BaseProtocol, NoVerifyHTTPAdapter
from exchangelib.version import (
    EXCHANGE_2007_SP1,
    EXCHANGE_2010,
    EXCHANGE_2010_SP1,
    EXCHANGE_2010_SP2,
    EXCHANGE_2013,
    EXCHANGE_2013_SP1,
)
from requests.adapters import HTTPAdapter

from exchange_tasks.errors import ConfigurationError
from exchange_tasks.models.ews import ExchangeOptions, ExchangeServerVersion, ExchangeSettings
from exchange_tasks.utils.logger import get_logger

logger = get_logger("exchange_tasks.ews")

# Office365 speaks the Exchange 2013 SP1 schema.
SERVER_BUILDS = {
    ExchangeServerVersion.Exchange2007_SP1: EXCHANGE_2007_SP1,
    ExchangeServerVersion.Exchange2010: EXCHANGE_2010,
    ExchangeServerVersion.Exchange2010_SP1: EXCHANGE_2010_SP1,
    ExchangeServerVersion.Exchange2010_SP2: EXCHANGE_2010_SP2,
    ExchangeServerVersion.Exchange2013: EXCHANGE_2013,
    ExchangeServerVersion.Exchange2013_SP1: EXCHANGE_2013_SP1,
    ExchangeServerVersion.Office365: EXCHANGE_2013_SP1,
}


def validate_server_address(address: str | None) -> str:
    """Server address must be an absolute http(s) URL, e.g. https://host/EWS/Exchange.asmx."""
    parsed = urlparse((address or "").strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"Invalid Exchange server address: {address!r}.")
    return parsed.geturl()


def server_version(settings: ExchangeSettings) -> Version:
    return Version(build=SERVER_BUILDS.get(settings.exchange_server_version, EXCHANGE_2013))


def _credentials(settings: ExchangeSettings) -> Credentials:
    if settings.use_agent_account:
        raise ConfigurationError(
            "Agent account authentication is not supported; provide username and password."
        )
    if not (settings.username or "").strip() or not settings.password:
        raise ConfigurationError("One or more required connection values missing: username, password.")
    return Credentials(username=settings.username, password=settings.password)


def connect_account(settings: ExchangeSettings) -> Account:
    """Open the target mailbox: the settings' mailbox when given, else the user's own."""
    credentials = _credentials(settings)
    address = (settings.mailbox or "").strip() or settings.username
    # HTTP_ADAPTER_CLS is process-wide: set on every connect.
    BaseProtocol.HTTP_ADAPTER_CLS = (
        NoVerifyHTTPAdapter if settings.trust_self_signed_certificates else HTTPAdapter
    )

    if settings.use_auto_discover:
        own = Account(
            primary_smtp_address=settings.username,
            credentials=credentials,
            autodiscover=True,
            access_type=DELEGATE,
        )
        logger.info("ews.autodiscovered", endpoint=own.protocol.service_endpoint)
        if address.lower() == settings.username.lower():
            return own
        config = Configuration(
            service_endpoint=own.protocol.service_endpoint,
            credentials=credentials,
            version=own.version,
        )
    else:
        config = Configuration(
            service_endpoint=validate_server_address(settings.server_address),
            credentials=credentials,
            version=server_version(settings),
        )

    logger.info("ews.connect", mailbox=address, version=settings.exchange_server_version.value)
    return Account(
        primary_smtp_address=address,
        config=config,
        autodiscover=False,
        access_type=DELEGATE,
    )


def build_search_filter(options: ExchangeOptions) -> dict[str, Any]:
    """exchangelib filter kwargs; all conditions are ANDed."""
    filters: dict[str, Any] = {}
    if options.get_only_emails_with_attachments:
        filters["has_attachments"] = True
    if options.get_only_unread_emails:
        filters["is_read"] = False
    if options.email_sender_filter:
        filters["sender"] = options.email_sender_filter
    if options.email_subject_filter:
        filters["subject__contains"] = options.email_subject_filter
    return filters
