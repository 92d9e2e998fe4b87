"""
Test doubles and id helpers shared by the test modules.
"""

import itertools
from datetime import datetime, timedelta, timezone

from rest_api.services.notifications import NotificationOutcome


_id_counter = itertools.count(1000)

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def next_id():
    """Generate a unique ID for test entities."""
    return next(_id_counter)


class FakeClock:
    """Settable clock injected into services."""

    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FakeNotifier:
    """Records every notify() call instead of sending e-mail."""

    def __init__(self, sent: bool = True, recipient: str = "ops@example.com"):
        self.sent = sent
        self.recipient = recipient
        self.calls: list[list] = []

    def notify(self, items):
        self.calls.append(list(items))
        if self.sent:
            return NotificationOutcome(sent=True, recipient=self.recipient)
        return NotificationOutcome(sent=False, recipient=self.recipient, error="smtp down")
