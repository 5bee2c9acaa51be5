"""Mailbox selection: /me when no user is given, else /users/{id}."""

from msgraph import GraphServiceClient
from msgraph.generated.users.item.user_item_request_builder import UserItemRequestBuilder


def mailbox_for(client: GraphServiceClient, user: str | None) -> UserItemRequestBuilder:
    """Return the request builder every mail call of one task goes through."""
    user = (user or "").strip()
    if not user:
        return client.me
    return client.users.by_user_id(user)
