"""Email Sender — SMTP delivery of transactional mail (password reset).

Invariants:
    - Blocking smtplib calls run in a worker thread (never on the event loop)
    - Without smtp_host configured, messages are logged instead of sent
    - Delivery failures are logged and reported as False, never raised to the caller:
      the reset endpoint must answer identically whether or not mail went out

Design Decisions:
    - Multipart messages: HTML body with a plain-text alternative
"""

import asyncio
import logging
import smtplib
from datetime import datetime
from email.message import EmailMessage

from fantasy_api.config import Settings, get_settings

logger = logging.getLogger(__name__)


def password_reset_plain(app_name: str, reset_url: str, expires_at: datetime) -> str:
    return (
        f"{app_name} - Password reset\n\n"
        f"We received a request to reset your password.\n"
        f"Open this link to choose a new one:\n{reset_url}\n\n"
        f"The link expires at {expires_at:%Y-%m-%d %H:%M} UTC.\n"
        f"If you did not request this, you can ignore this email."
    )


def password_reset_html(app_name: str, reset_url: str, expires_at: datetime) -> str:
    return (
        f"<html><body style=\"font-family:Arial,sans-serif\">"
        f"<h2>{app_name}</h2>"
        f"<p>We received a request to reset your password.</p>"
        f"<p><a href=\"{reset_url}\">Reset my password</a></p>"
        f"<p>The link expires at {expires_at:%Y-%m-%d %H:%M} UTC.</p>"
        f"<p style=\"color:#888\">If you did not request this, you can ignore this email.</p>"
        f"</body></html>"
    )


class EmailSender:
    """Sends email through SMTP, or logs it when SMTP is not configured."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()

    def _build(self, to: str, subject: str, html: str, plain: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self._settings.email_from
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(plain)
        msg.add_alternative(html, subtype="html")
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        s = self._settings
        with smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=30) as smtp:
            if s.smtp_use_tls:
                smtp.starttls()
            if s.smtp_username:
                smtp.login(s.smtp_username, s.smtp_password)
            smtp.send_message(msg)

    async def send(self, to: str, subject: str, html: str, plain: str) -> bool:
        if not self._settings.smtp_host:
            logger.info(f"SMTP disabled, email to {to} not sent: {subject}")
            return False
        msg = self._build(to, subject, html, plain)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Email delivery to {to} failed: {e}")
            return False
        logger.info(f"Email sent to {to}: {subject}")
        return True

    async def send_password_reset(self, to: str, token: str, expires_at: datetime) -> bool:
        s = self._settings
        reset_url = f"{s.reset_password_url}?token={token}"
        return await self.send(
            to,
            f"{s.app_name} - Password reset",
            password_reset_html(s.app_name, reset_url, expires_at),
            password_reset_plain(s.app_name, reset_url, expires_at),
        )


def get_email_sender() -> EmailSender:
    """FastAPI dependency (overridable in tests)."""
    return EmailSender()
