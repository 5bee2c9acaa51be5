"""Connection parameters shared by the Graph tasks."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AuthenticationProvider(str, Enum):
    """How the task authenticates against Microsoft Graph."""

    ClientCredentialsCertificate = "ClientCredentialsCertificate"  # tenant, client, certificate file
    ClientCredentialsSecret = "ClientCredentialsSecret"  # tenant, client, secret
    UsernamePassword = "UsernamePassword"  # user, password, tenant, client


class Connection(BaseModel):
    """Parameters for establishing a Graph connection."""

    authentication_provider: AuthenticationProvider = AuthenticationProvider.UsernamePassword
    x509_certificate_file_path: Optional[str] = None  # file containing both certificate and private key
    client_secret: Optional[str] = Field(None, repr=False)
    username: Optional[str] = None
    password: Optional[str] = Field(None, repr=False)
    client_id: Optional[str] = None
    tenant_id: Optional[str] = None
