"""
Outgoing notifications (operator e-mail).
"""

from .mailer import SmtpMailer
from .expiry_warning import ExpiryWarningNotifier, NotificationOutcome, render_warning

__all__ = [
    "SmtpMailer",
    "ExpiryWarningNotifier",
    "NotificationOutcome",
    "render_warning",
]
