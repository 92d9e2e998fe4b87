"""
Tests for the recycle bin expiry warning and the SMTP mailer.
"""

import smtplib
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest

from rest_api.models import RecycleBinItem
from rest_api.services.notifications import (
    ExpiryWarningNotifier,
    SmtpMailer,
    render_warning,
)
from shared.config.constants import EXPIRY_WARNING_SUBJECT


def _item(entity_id=7, title="Head Coach", entity_type="job"):
    deleted_at = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
    item = RecycleBinItem(
        entity_type=entity_type,
        entity_id=entity_id,
        collection_name=entity_type,
        snapshot="{}",
        deleted_at=deleted_at,
        expires_at=deleted_at + timedelta(days=20),
    )
    item.apply_metadata({"title": title} if title else {})
    return item


class TestRenderWarning:

    def test_lists_every_item(self):
        body = render_warning([_item(), _item(entity_id=8, title=None, entity_type="coupon")])

        assert body.startswith("2 item(s)")
        assert "- job: Head Coach (deleted 2024-03-01 12:00 UTC, removal after 2024-03-21 12:00 UTC)" in body
        assert "- coupon: #8" in body


class TestExpiryWarningNotifier:

    def test_sends_one_message(self):
        mailer = MagicMock()
        notifier = ExpiryWarningNotifier(mailer, "ops@example.com")

        outcome = notifier.notify([_item(), _item(entity_id=8)])

        assert outcome.sent is True
        assert outcome.recipient == "ops@example.com"
        mailer.send.assert_called_once()
        to, subject, body = mailer.send.call_args.args
        assert to == "ops@example.com"
        assert subject == EXPIRY_WARNING_SUBJECT
        assert "Head Coach" in body

    def test_no_recipient_is_skipped(self):
        mailer = MagicMock()

        outcome = ExpiryWarningNotifier(mailer, None).notify([_item()])

        assert outcome.sent is False
        assert outcome.skipped is True
        mailer.send.assert_not_called()

    def test_no_items_is_skipped(self):
        mailer = MagicMock()

        outcome = ExpiryWarningNotifier(mailer, "ops@example.com").notify([])

        assert outcome.skipped is True
        mailer.send.assert_not_called()

    def test_delivery_failure_is_reported_not_raised(self):
        mailer = MagicMock()
        mailer.send.side_effect = smtplib.SMTPException("relay refused")

        outcome = ExpiryWarningNotifier(mailer, "ops@example.com").notify([_item()])

        assert outcome.sent is False
        assert "relay refused" in outcome.error


class TestSmtpMailer:

    def test_unconfigured_mailer_refuses(self):
        mailer = SmtpMailer("", sender="")

        assert mailer.configured is False
        with pytest.raises(RuntimeError):
            mailer.send("ops@example.com", "s", "b")

    def test_send_uses_starttls_and_login(self):
        mailer = SmtpMailer("smtp.example.com", 587, sender="noreply@example.com", user="u", password="p")

        with patch("rest_api.services.notifications.mailer.smtplib.SMTP") as smtp_cls:
            mailer.send("ops@example.com", "Subject", "Body")

        smtp = smtp_cls.return_value.__enter__.return_value
        smtp.starttls.assert_called_once()
        smtp.login.assert_called_once_with("u", "p")
        message = smtp.send_message.call_args.args[0]
        assert message["To"] == "ops@example.com"
        assert message["From"] == "noreply@example.com"
        assert message["Subject"] == "Subject"

    def test_from_settings(self):
        settings = MagicMock(
            smtp_host="mail.test",
            smtp_port=2525,
            smtp_from="bin@test",
            smtp_user="",
            smtp_password="",
            smtp_use_tls=False,
            smtp_timeout=5.0,
        )

        mailer = SmtpMailer.from_settings(settings)

        assert (mailer.host, mailer.port, mailer.sender) == ("mail.test", 2525, "bin@test")
        assert mailer.user is None
        assert mailer.use_tls is False
