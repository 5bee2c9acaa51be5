"""Tests for the structlog secret masking processor."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from exchange_tasks.utils.logger import get_logger, mask_secrets


def test_secret_fields_masked():
    event = mask_secrets(None, "info", {"event": "auth", "client_secret": "abc", "password": "pw", "user": "me"})
    assert event["client_secret"] == "***"
    assert event["password"] == "***"
    assert event["user"] == "me"


def test_empty_secret_left_alone():
    assert mask_secrets(None, "info", {"event": "auth", "password": None})["password"] is None


def test_get_logger_binds_fields():
    logger = get_logger("exchange_tasks.test", mailbox="me")
    logger.info("test.event", count=1)
