"""Tests for the send email task with a mocked Graph client."""

import asyncio
import sys
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from msgraph.generated.models.body_type import BodyType
from msgraph.generated.models.importance import Importance as GraphImportance

from exchange_tasks.attachments.sources import TempFileTracker
from exchange_tasks.errors import AttachmentNotFoundError, ConfigurationError
from exchange_tasks.models.connection import AuthenticationProvider, Connection
from exchange_tasks.models.send import (
    AttachmentSource,
    AttachmentType,
    Importance,
    SendInput,
    SendOptions,
)
from exchange_tasks.tasks.graph_send import (
    SUCCESS_MESSAGE,
    build_message,
    parse_recipients,
    send_email,
)

CONNECTION = Connection(
    authentication_provider=AuthenticationProvider.ClientCredentialsSecret,
    tenant_id="tenant",
    client_id="client",
    client_secret="secret",
)


class RecordingTracker(TempFileTracker):
    created: list[Path] = []

    def create(self, file_name, content):
        path = super().create(file_name, content)
        RecordingTracker.created.append(path)
        return path


def _client():
    client = MagicMock()
    client.me.send_mail.post = AsyncMock()
    return client


def _run(client, send_input, options=None):
    with patch("exchange_tasks.tasks.graph_send.create_graph_client", return_value=client), patch(
        "exchange_tasks.tasks.graph_send.TempFileTracker", RecordingTracker
    ):
        return asyncio.run(send_email(CONNECTION, send_input, options or SendOptions()))


def test_parse_recipients_splits_and_strips_spaces():
    recipients = parse_recipients("a@contoso.com; b @contoso.com,c@contoso.com;;")
    assert [r.email_address.address for r in recipients] == [
        "a@contoso.com",
        "b@contoso.com",
        "c@contoso.com",
    ]
    assert parse_recipients(None) == []


def test_build_message_maps_body_and_importance():
    message = build_message(
        SendInput(
            to="a@contoso.com",
            bcc="hidden@contoso.com",
            subject="Hi",
            message="<b>Hello</b>",
            is_message_html=True,
            importance=Importance.High,
        )
    )
    assert message.subject == "Hi"
    assert message.body.content_type == BodyType.Html
    assert message.importance == GraphImportance.High
    assert [r.email_address.address for r in message.bcc_recipients] == ["hidden@contoso.com"]
    assert message.cc_recipients == []


class TestSendEmail(unittest.TestCase):
    def setUp(self):
        RecordingTracker.created = []

    def test_success(self):
        client = _client()
        result = _run(client, SendInput(to="a@contoso.com", subject="Hi", message="Hello"))
        self.assertTrue(result.success)
        self.assertEqual(result.data, SUCCESS_MESSAGE)
        body = client.me.send_mail.post.await_args.args[0]
        self.assertTrue(body.save_to_sent_items)
        self.assertEqual(body.message.body.content_type, BodyType.Text)

    def test_sends_from_named_mailbox(self):
        client = _client()
        client.users.by_user_id.return_value.send_mail.post = AsyncMock()
        _run(client, SendInput(from_="shared@contoso.com", to="a@contoso.com"))
        client.users.by_user_id.assert_called_with("shared@contoso.com")
        client.users.by_user_id.return_value.send_mail.post.assert_awaited_once()
        client.me.send_mail.post.assert_not_awaited()

    def test_missing_to_raises_even_when_tolerant(self):
        with patch("exchange_tasks.tasks.graph_send.create_graph_client") as factory:
            with self.assertRaises(ConfigurationError) as ctx:
                asyncio.run(
                    send_email(CONNECTION, SendInput(to="  "), SendOptions(throw_exception_on_failure=False))
                )
            factory.assert_not_called()
        self.assertIn("to", str(ctx.exception))

    def test_string_attachment_requires_file_name(self):
        send_input = SendInput(
            to="a@contoso.com",
            attachments=[AttachmentSource(attachment_type=AttachmentType.AttachmentFromString, file_content="x")],
        )
        with self.assertRaises(ConfigurationError):
            _run(_client(), send_input)

    def test_failure_reported_when_tolerant(self):
        client = _client()
        client.me.send_mail.post = AsyncMock(side_effect=RuntimeError("ErrorSendAsDenied"))
        result = _run(
            client,
            SendInput(to="a@contoso.com"),
            SendOptions(throw_exception_on_failure=False),
        )
        self.assertFalse(result.success)
        self.assertEqual(result.data, "Failed to send an email. ErrorSendAsDenied")
        self.assertEqual(result.error_messages, ["ErrorSendAsDenied"])

    def test_failure_raised_when_strict(self):
        client = _client()
        client.me.send_mail.post = AsyncMock(side_effect=RuntimeError("ErrorSendAsDenied"))
        with self.assertRaises(RuntimeError):
            _run(client, SendInput(to="a@contoso.com"))

    def test_string_attachment_sent_and_temp_file_removed(self):
        client = _client()
        send_input = SendInput(
            to="a@contoso.com",
            attachments=[
                AttachmentSource(
                    attachment_type=AttachmentType.AttachmentFromString,
                    file_name="note.txt",
                    file_content="from a string",
                )
            ],
        )
        result = _run(client, send_input)
        self.assertTrue(result.success)
        attachment = client.me.send_mail.post.await_args.args[0].message.attachments[0]
        self.assertEqual(attachment.name, "note.txt")
        self.assertEqual(attachment.content_bytes, b"from a string")
        self.assertEqual(len(RecordingTracker.created), 1)
        self.assertFalse(RecordingTracker.created[0].exists())

    def test_temp_file_removed_after_failure(self):
        client = _client()
        client.me.send_mail.post = AsyncMock(side_effect=RuntimeError("boom"))
        send_input = SendInput(
            to="a@contoso.com",
            attachments=[
                AttachmentSource(
                    attachment_type=AttachmentType.AttachmentFromString,
                    file_name="note.txt",
                    file_content="x",
                )
            ],
        )
        _run(client, send_input, SendOptions(throw_exception_on_failure=False))
        self.assertFalse(RecordingTracker.created[0].exists())

    def test_blank_file_path_sent_without_attachment_when_lenient(self):
        client = _client()
        send_input = SendInput(to="a@contoso.com", attachments=[AttachmentSource(file_path="")])
        result = _run(
            client,
            send_input,
            SendOptions(throw_exception_on_failure=False, throw_exception_if_attachment_not_found=False),
        )
        self.assertTrue(result.success)
        self.assertIsNone(client.me.send_mail.post.await_args.args[0].message.attachments)

    def test_blank_file_path_not_found_when_strict(self):
        send_input = SendInput(to="a@contoso.com", attachments=[AttachmentSource(file_path="")])
        with self.assertRaises(AttachmentNotFoundError):
            _run(_client(), send_input, SendOptions(throw_exception_if_attachment_not_found=True))

        client = _client()
        result = _run(
            client,
            send_input,
            SendOptions(throw_exception_on_failure=False, throw_exception_if_attachment_not_found=True),
        )
        self.assertFalse(result.success)
        self.assertTrue(result.data.startswith("Failed to send an email. No files found"))
        client.me.send_mail.post.assert_not_awaited()

    def test_missing_attachment_strictness_independent_of_failure_policy(self):
        send_input = SendInput(
            to="a@contoso.com",
            attachments=[AttachmentSource(file_path="/nonexistent/exchange-tasks/report.pdf")],
        )
        with self.assertRaises(AttachmentNotFoundError):
            _run(_client(), send_input, SendOptions(throw_exception_if_attachment_not_found=True))

        client = _client()
        result = _run(client, send_input, SendOptions(throw_exception_if_attachment_not_found=False))
        self.assertTrue(result.success)
        self.assertIsNone(client.me.send_mail.post.await_args.args[0].message.attachments)


if __name__ == "__main__":
    unittest.main()
