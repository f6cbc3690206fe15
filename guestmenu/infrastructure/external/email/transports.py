"""Outbound mail transports (implement IMailTransport)."""

from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage

from guestmenu.infrastructure.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)


class LogOnlyMailTransport:
    """IMailTransport implementation that logs instead of sending email.

    Used when no SMTP host is configured.
    """

    async def send(self, to: str, subject: str, html: str, text: str) -> None:
        """Log the message; nothing is delivered."""
        logger.info("Mail (log only): would send to %s (subject=%r)", to, (subject or "")[:80])
        logger.debug("Mail body (first 500 chars): %s", (text or "")[:500])


class SmtpMailTransport:
    """Sends multipart (text + HTML) mail over SMTP.

    smtplib blocks, so each send runs in a worker thread with its own
    connection; nothing is pooled between sends.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        *,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 20.0,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def build_message(self, to: str, subject: str, html: str, text: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(text)
        msg.add_alternative(html, subtype="html")
        return msg

    def _send_sync(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self._timeout) as smtp:
            if self._use_tls:
                smtp.starttls()
            if self._username:
                smtp.login(self._username, self._password or "")
            smtp.send_message(msg)

    async def send(self, to: str, subject: str, html: str, text: str) -> None:
        """Send one message; raise MailDeliveryError on any SMTP or socket failure."""
        msg = self.build_message(to, subject, html, text)
        try:
            await asyncio.to_thread(self._send_sync, msg)
        except (smtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(f"SMTP delivery to {to} failed: {e}") from e
        logger.info("Mail sent to %s via %s:%s", to, self.host, self.port)
