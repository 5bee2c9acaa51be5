"""
Verify an Exchange connection end to end: credential, token, and a small message listing.

The connection is taken from the environment (.env) the same way the CLI does it:
AZURE_CLIENT_SECRET selects client-secret auth, AZURE_CERTIFICATE_PATH selects
certificate auth, otherwise EXCHANGE_USERNAME / EXCHANGE_PASSWORD are used.

Usage:
    python scripts/verify_connection.py
    python scripts/verify_connection.py --mailbox someone@contoso.com
"""

import argparse
import asyncio
import sys

from exchange_tasks.auth import create_credential, validate_connection
from exchange_tasks.cli.shared import connection_from_env
from exchange_tasks.config import GRAPH_SCOPES
from exchange_tasks.errors import ConfigurationError
from exchange_tasks.models import ReadInput, ReadOptions
from exchange_tasks.tasks import read_email


def print_header(text: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {text}")
    print(f"{'='*60}\n")


def print_success(text: str) -> None:
    print(f"[OK] {text}")


def print_error(text: str) -> None:
    print(f"[ERROR] {text}")


def print_info(text: str) -> None:
    print(f"[INFO] {text}")


async def verify(mailbox: str | None) -> bool:
    connection = connection_from_env()
    print_header(f"Connection ({connection.authentication_provider.value})")

    try:
        validate_connection(connection)
    except ConfigurationError as e:
        print_error(str(e))
        return False
    print_success("Required connection values found")
    print(f"    Tenant ID: {(connection.tenant_id or '')[:8]}...")
    print(f"    Client ID: {(connection.client_id or '')[:8]}...")

    print_header("Testing Authentication")
    try:
        token = create_credential(connection).get_token(*GRAPH_SCOPES)
    except Exception as e:
        print_error(f"Failed to acquire token: {e}")
        print_info("Check tenant, client and the secret, certificate or user credentials")
        return False
    print_success(f"Access token acquired (expires: {token.expires_on})")

    print_header("Testing Graph API Access")
    print_info(f"Fetching messages from: {mailbox or '/me'}")
    read_input = ReadInput(
        from_=mailbox,
        top=5,
        select="id,subject,from,isRead",
        update_read_status=False,
        download_attachments=False,
    )
    result = await read_email(connection, read_input, ReadOptions(throw_exception_on_failure=False))
    if not result.success:
        for error in result.error_messages:
            print_error(error)
        if any("Authorization_RequestDenied" in e or "403" in e for e in result.error_messages):
            print_info("Grant Mail.ReadWrite (and admin consent for application permissions)")
        return False

    print_success(f"Retrieved {len(result.data)} messages")
    for i, msg in enumerate(result.data, 1):
        print(f"{i}. [{'Read' if msg.is_read else 'Unread'}] {msg.from_ or 'Unknown'}")
        print(f"   Subject: {msg.subject or '(No subject)'}")
    print_header("Verification Complete")
    return True


def main():
    parser = argparse.ArgumentParser(description="Verify an Exchange Graph connection")
    parser.add_argument("--mailbox", default=None, help="User id or UPN; defaults to the signed-in user")
    args = parser.parse_args()
    success = asyncio.run(verify(args.mailbox))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
