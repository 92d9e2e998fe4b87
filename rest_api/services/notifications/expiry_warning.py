"""
Recycle bin expiry warning.

One e-mail per sweep run listing every item that is about to be removed
for good. Delivery is best effort: failures are logged and reported through
NotificationOutcome, never raised into the sweep.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, Sequence

from rest_api.models import RecycleBinItem
from rest_api.services.notifications.mailer import SmtpMailer
from shared.config.constants import EXPIRY_WARNING_SUBJECT
from shared.config.logging import get_logger, mask_email
from shared.config.settings import Settings, settings as default_settings

logger = get_logger(__name__)


class Mailer(Protocol):
    def send(self, to: str, subject: str, body: str) -> None: ...


@dataclass
class NotificationOutcome:
    sent: bool
    recipient: Optional[str] = None
    error: Optional[str] = None
    skipped: bool = False


def _fmt(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC") if value else "unknown"


def render_warning(items: Sequence[RecycleBinItem]) -> str:
    """Plain-text body: one line per item."""
    lines = [
        f"{len(items)} item(s) in the recycle bin will be permanently removed soon:",
        "",
    ]
    for item in items:
        metadata = item.entity_metadata
        label = metadata.get("title") or metadata.get("name") or f"#{item.entity_id}"
        lines.append(
            f"- {item.entity_type}: {label} "
            f"(deleted {_fmt(item.deleted_at)}, removal after {_fmt(item.expires_at)})"
        )
    lines += ["", "Restore them from the admin recycle bin before they expire."]
    return "\n".join(lines)


class ExpiryWarningNotifier:
    """
    Usage:
        notifier = ExpiryWarningNotifier.from_settings()
        outcome = notifier.notify(items)
    """

    def __init__(self, mailer: Mailer, recipient: str | None):
        self._mailer = mailer
        self._recipient = recipient

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ExpiryWarningNotifier":
        settings = settings or default_settings
        return cls(SmtpMailer.from_settings(settings), settings.alert_recipient)

    @property
    def recipient(self) -> str | None:
        return self._recipient

    def notify(self, items: Sequence[RecycleBinItem]) -> NotificationOutcome:
        if not items:
            return NotificationOutcome(sent=False, recipient=self._recipient, skipped=True)

        if not self._recipient:
            logger.warning(
                "No alert recipient configured, skipping recycle bin warning",
                item_count=len(items),
            )
            return NotificationOutcome(sent=False, skipped=True)

        try:
            self._mailer.send(self._recipient, EXPIRY_WARNING_SUBJECT, render_warning(items))
        except Exception as exc:
            logger.error(
                "Failed to send recycle bin warning",
                recipient=mask_email(self._recipient),
                item_count=len(items),
                exc_info=True,
            )
            return NotificationOutcome(sent=False, recipient=self._recipient, error=str(exc))

        logger.info(
            "Recycle bin warning sent",
            recipient=mask_email(self._recipient),
            item_count=len(items),
        )
        return NotificationOutcome(sent=True, recipient=self._recipient)
