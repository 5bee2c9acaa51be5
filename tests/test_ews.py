"""Tests for the legacy EWS read task; exchangelib account access is mocked."""

import asyncio
import sys
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from exchangelib import FileAttachment
from exchangelib.protocol import BaseProtocol, NoVerifyHTTPAdapter
from exchangelib.version import EXCHANGE_2010, EXCHANGE_2013_SP1
from requests.adapters import HTTPAdapter

from exchange_tasks.errors import ConfigurationError, NoMessagesFoundError
from exchange_tasks.ews.client import (
    SERVER_BUILDS,
    build_search_filter,
    connect_account,
    validate_server_address,
)
from exchange_tasks.models.ews import ExchangeOptions, ExchangeServerVersion, ExchangeSettings
from exchange_tasks.tasks.ews_read import (
    attachment_path,
    ews_read_email,
    save_attachments,
    to_result,
    validate_ews_options,
)


def _message(message_id="m1", attachments=None):
    message = MagicMock()
    message.id = message_id
    message.to_recipients = [SimpleNamespace(email_address="a@contoso.com"), SimpleNamespace(email_address="b@contoso.com")]
    message.cc_recipients = None
    message.author = SimpleNamespace(email_address="boss@contoso.com")
    message.datetime_received = None
    message.subject = "Status"
    message.text_body = "plain text"
    message.body = "<p>html</p>"
    message.attachments = attachments or []
    return message


def test_server_builds():
    assert SERVER_BUILDS[ExchangeServerVersion.Office365] == EXCHANGE_2013_SP1
    assert SERVER_BUILDS[ExchangeServerVersion.Exchange2010] == EXCHANGE_2010
    assert set(SERVER_BUILDS) == set(ExchangeServerVersion)


def test_build_search_filter():
    assert build_search_filter(ExchangeOptions()) == {}
    options = ExchangeOptions(
        get_only_emails_with_attachments=True,
        get_only_unread_emails=True,
        email_sender_filter="boss@contoso.com",
        email_subject_filter="invoice",
    )
    assert build_search_filter(options) == {
        "has_attachments": True,
        "is_read": False,
        "sender": "boss@contoso.com",
        "subject__contains": "invoice",
    }


def test_attachment_path():
    assert attachment_path("/tmp/out", "report.pdf", True) == Path("/tmp/out/report.pdf")
    unique = attachment_path("/tmp/out", "report.pdf", False)
    assert unique.parent == Path("/tmp/out")
    assert unique.name.startswith("report_") and unique.suffix == ".pdf"
    assert unique != attachment_path("/tmp/out", "report.pdf", False)


class TestEwsValidation(unittest.TestCase):
    def test_server_address_must_be_absolute(self):
        self.assertEqual(
            validate_server_address("https://mail.contoso.com/EWS/Exchange.asmx"),
            "https://mail.contoso.com/EWS/Exchange.asmx",
        )
        for address in (None, "", "mail.contoso.com", "ftp://mail.contoso.com/EWS"):
            with self.assertRaises(ConfigurationError):
                validate_server_address(address)

    def test_max_emails_at_least_one(self):
        with self.assertRaises(ConfigurationError):
            validate_ews_options(ExchangeOptions(max_emails=0, ignore_attachments=True))

    def test_save_directory_required_unless_ignoring_attachments(self):
        with self.assertRaises(ConfigurationError):
            validate_ews_options(ExchangeOptions())
        with self.assertRaises(ConfigurationError):
            validate_ews_options(ExchangeOptions(attachment_save_directory="/nonexistent/exchange-tasks"))
        validate_ews_options(ExchangeOptions(ignore_attachments=True))

    def test_agent_account_not_supported(self):
        settings = ExchangeSettings(use_agent_account=True, server_address="https://mail.contoso.com/EWS/Exchange.asmx")
        with self.assertRaises(ConfigurationError):
            connect_account(settings)

    def test_credentials_required(self):
        settings = ExchangeSettings(server_address="https://mail.contoso.com/EWS/Exchange.asmx", username="me@contoso.com")
        with self.assertRaises(ConfigurationError):
            connect_account(settings)


class TestTlsAdapter(unittest.TestCase):
    """The exchangelib adapter class is global; each connect sets it from its own settings."""

    def setUp(self):
        self._saved = BaseProtocol.HTTP_ADAPTER_CLS

    def tearDown(self):
        BaseProtocol.HTTP_ADAPTER_CLS = self._saved

    def _connect(self, trust):
        settings = ExchangeSettings(
            server_address="https://mail.contoso.com/EWS/Exchange.asmx",
            username="me@contoso.com",
            password="secret",
            trust_self_signed_certificates=trust,
        )
        with patch("exchange_tasks.ews.client.Account"), patch("exchange_tasks.ews.client.Configuration"):
            connect_account(settings)
        return BaseProtocol.HTTP_ADAPTER_CLS

    def test_untrusted_connect_restores_verification(self):
        self.assertIs(self._connect(True), NoVerifyHTTPAdapter)
        self.assertIs(self._connect(False), HTTPAdapter)

    def test_trusted_connect_skips_verification(self):
        self.assertIs(self._connect(False), HTTPAdapter)
        self.assertIs(self._connect(True), NoVerifyHTTPAdapter)


class TestEwsReadEmail(unittest.TestCase):
    settings = ExchangeSettings(
        server_address="https://mail.contoso.com/EWS/Exchange.asmx",
        username="me@contoso.com",
        password="secret",
    )

    def _run(self, messages, options):
        with patch("exchange_tasks.tasks.ews_read.connect_account", return_value=MagicMock()), patch(
            "exchange_tasks.tasks.ews_read.find_messages", return_value=messages
        ):
            return asyncio.run(ews_read_email(self.settings, options))

    def test_messages_mapped(self):
        results = self._run([_message()], ExchangeOptions(ignore_attachments=True))
        self.assertEqual(len(results), 1)
        result = results[0]
        self.assertEqual(result.to, "a@contoso.com,b@contoso.com")
        self.assertEqual(result.cc, "")
        self.assertEqual(result.from_, "boss@contoso.com")
        self.assertEqual(result.body_text, "plain text")
        self.assertEqual(result.body_html, "<p>html</p>")

    def test_no_messages_with_flag_raises(self):
        with self.assertRaises(NoMessagesFoundError):
            self._run([], ExchangeOptions(ignore_attachments=True, throw_error_if_no_messages_found=True))

    def test_no_messages_without_flag_is_empty(self):
        self.assertEqual(self._run([], ExchangeOptions(ignore_attachments=True)), [])

    def test_delete_takes_precedence_over_mark_read(self):
        message = _message()
        self._run([message], ExchangeOptions(ignore_attachments=True, delete_read_emails=True, mark_emails_as_read=True))
        message.delete.assert_called_once()
        message.save.assert_not_called()

    def test_mark_read(self):
        message = _message()
        self._run([message], ExchangeOptions(ignore_attachments=True, mark_emails_as_read=True))
        self.assertTrue(message.is_read)
        message.save.assert_called_once_with(update_fields=["is_read"])
        message.delete.assert_not_called()

    def test_file_attachments_saved(self):
        with tempfile.TemporaryDirectory() as tmp:
            attachment = FileAttachment(name="data.csv", content=b"a,b\n1,2\n")
            options = ExchangeOptions(attachment_save_directory=tmp, overwrite_attachment=True)
            results = self._run([_message(attachments=[attachment, object()])], options)
            self.assertEqual(results[0].attachment_save_dirs, [str(Path(tmp) / "data.csv")])
            self.assertEqual((Path(tmp) / "data.csv").read_bytes(), b"a,b\n1,2\n")


def test_to_result_without_text_body():
    message = _message()
    message.text_body = None
    assert to_result(message, []).body_text == ""


def test_save_attachments_skips_non_file_attachments(tmp_path):
    message = _message(attachments=[object()])
    assert save_attachments(message, ExchangeOptions(attachment_save_directory=str(tmp_path))) == []
