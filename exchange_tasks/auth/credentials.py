"""Maps a Connection to an azure-identity credential and a Graph client.

Each authentication provider validates its own required fields before any
network I/O. Token acquisition and refresh are left to the credential object.
"""

from azure.core.credentials import TokenCredential
from azure.identity import (
    AzureAuthorityHosts,
    CertificateCredential,
    ClientSecretCredential,
    UsernamePasswordCredential,
)
from msgraph import GraphServiceClient

from exchange_tasks.config import GRAPH_SCOPES
from exchange_tasks.errors import ConfigurationError
from exchange_tasks.models.connection import AuthenticationProvider, Connection
from exchange_tasks.utils.logger import get_logger

logger = get_logger("exchange_tasks.auth")

# Field names reported in errors, in the order they are checked.
REQUIRED_FIELDS: dict[AuthenticationProvider, tuple[str, ...]] = {
    AuthenticationProvider.ClientCredentialsCertificate: (
        "tenant_id",
        "client_id",
        "x509_certificate_file_path",
    ),
    AuthenticationProvider.ClientCredentialsSecret: (
        "tenant_id",
        "client_id",
        "client_secret",
    ),
    AuthenticationProvider.UsernamePassword: (
        "username",
        "password",
        "tenant_id",
        "client_id",
    ),
}


def missing_connection_fields(connection: Connection) -> list[str]:
    """Return the required fields of the selected provider that are blank."""
    try:
        required = REQUIRED_FIELDS[connection.authentication_provider]
    except KeyError:
        raise ConfigurationError(
            f"Invalid authentication_provider: {connection.authentication_provider!r}."
        ) from None
    return [name for name in required if not (getattr(connection, name) or "").strip()]


def validate_connection(connection: Connection) -> None:
    """Raise ConfigurationError naming every missing field for the selected provider."""
    missing = missing_connection_fields(connection)
    if missing:
        logger.warning(
            "auth.validate.missing_fields",
            provider=connection.authentication_provider.value,
            missing=missing,
        )
        raise ConfigurationError(
            f"One or more required connection values missing: {', '.join(missing)}."
        )


def create_credential(connection: Connection) -> TokenCredential:
    """Return the azure-identity credential for the connection's provider."""
    validate_connection(connection)
    authority = AzureAuthorityHosts.AZURE_PUBLIC_CLOUD
    provider = connection.authentication_provider

    if provider == AuthenticationProvider.ClientCredentialsCertificate:
        credential = CertificateCredential(
            tenant_id=connection.tenant_id,
            client_id=connection.client_id,
            certificate_path=connection.x509_certificate_file_path,
            authority=authority,
        )
    elif provider == AuthenticationProvider.ClientCredentialsSecret:
        credential = ClientSecretCredential(
            tenant_id=connection.tenant_id,
            client_id=connection.client_id,
            client_secret=connection.client_secret,
            authority=authority,
        )
    elif provider == AuthenticationProvider.UsernamePassword:
        credential = UsernamePasswordCredential(
            client_id=connection.client_id,
            username=connection.username,
            password=connection.password,
            tenant_id=connection.tenant_id,
            authority=authority,
        )
    else:
        raise ConfigurationError(f"Invalid authentication_provider: {provider!r}.")

    logger.debug(
        "auth.credential_created",
        provider=provider.value,
        tenant_id=(connection.tenant_id or "")[:8],
    )
    return credential


def create_graph_client(connection: Connection) -> GraphServiceClient:
    """Create a Microsoft Graph client for the connection."""
    credential = create_credential(connection)
    return GraphServiceClient(credentials=credential, scopes=GRAPH_SCOPES)
