"""
SMTP mailer for operator notifications.
"""

from __future__ import annotations

import smtplib
from email.message import EmailMessage
from typing import Optional

from shared.config.logging import get_logger, mask_email
from shared.config.settings import Settings, settings as default_settings

logger = get_logger(__name__)


class SmtpMailer:
    """
    Sends plain-text e-mail through an SMTP relay.

    Usage:
        mailer = SmtpMailer.from_settings()
        mailer.send("ops@example.com", "Subject", "Body")
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        *,
        sender: str,
        user: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.user = user
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "SmtpMailer":
        settings = settings or default_settings
        return cls(
            settings.smtp_host,
            settings.smtp_port,
            sender=settings.smtp_from,
            user=settings.smtp_user or None,
            password=settings.smtp_password or None,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout,
        )

    @property
    def configured(self) -> bool:
        return bool(self.host and self.sender)

    def build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        return message

    def send(self, to: str, subject: str, body: str) -> None:
        """
        Deliver one message.

        Raises:
            RuntimeError: SMTP host or sender not configured
            smtplib.SMTPException / OSError: delivery failed
        """
        if not self.configured:
            raise RuntimeError("SMTP is not configured (smtp_host / smtp_from)")

        message = self.build_message(to, subject, body)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.user:
                smtp.login(self.user, self.password or "")
            smtp.send_message(message)

        logger.info("E-mail sent", to=mask_email(to), subject=subject)
