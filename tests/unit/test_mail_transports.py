"""Tests for the mail transports and the transport factory."""

import logging
import smtplib
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from guestmenu.core.config import get_settings
from guestmenu.infrastructure.exceptions import MailDeliveryError
from guestmenu.infrastructure.external.email import (
    LogOnlyMailTransport,
    SmtpMailTransport,
    create_mail_transport,
)


@pytest.fixture
def smtp_mock(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    smtp_cls = MagicMock()
    monkeypatch.setattr(smtplib, "SMTP", smtp_cls)
    return smtp_cls


def _transport(**kwargs) -> SmtpMailTransport:
    return SmtpMailTransport(
        "smtp.example.com",
        587,
        sender="GuestMenu <no-reply@guestmenu.com>",
        **kwargs,
    )


async def test_log_only_transport_logs(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        await LogOnlyMailTransport().send("owner@example.com", "New order o-1", "<p>x</p>", "x")
    assert "owner@example.com" in caplog.text


def test_build_message_is_multipart() -> None:
    msg = _transport().build_message("owner@example.com", "New order", "<p>Hi</p>", "Hi")
    assert msg["To"] == "owner@example.com"
    assert msg["From"] == "GuestMenu <no-reply@guestmenu.com>"
    assert msg.is_multipart()
    assert [part.get_content_type() for part in msg.iter_parts()] == ["text/plain", "text/html"]


async def test_smtp_send_uses_starttls_and_login(smtp_mock: MagicMock) -> None:
    await _transport(username="mailer", password="pw").send("owner@example.com", "S", "<p>h</p>", "t")

    smtp_mock.assert_called_once_with("smtp.example.com", 587, timeout=20.0)
    conn = smtp_mock.return_value.__enter__.return_value
    conn.starttls.assert_called_once()
    conn.login.assert_called_once_with("mailer", "pw")
    conn.send_message.assert_called_once()


async def test_smtp_send_without_tls_or_auth(smtp_mock: MagicMock) -> None:
    await _transport(use_tls=False).send("owner@example.com", "S", "<p>h</p>", "t")
    conn = smtp_mock.return_value.__enter__.return_value
    conn.starttls.assert_not_called()
    conn.login.assert_not_called()


async def test_smtp_failure_raises_mail_delivery_error(smtp_mock: MagicMock) -> None:
    conn = smtp_mock.return_value.__enter__.return_value
    conn.send_message.side_effect = smtplib.SMTPRecipientsRefused({"owner@example.com": (550, b"no")})
    with pytest.raises(MailDeliveryError):
        await _transport().send("owner@example.com", "S", "<p>h</p>", "t")


async def test_smtp_connection_error_raises_mail_delivery_error(smtp_mock: MagicMock) -> None:
    smtp_mock.side_effect = ConnectionRefusedError("refused")
    with pytest.raises(MailDeliveryError):
        await _transport().send("owner@example.com", "S", "<p>h</p>", "t")


def test_factory_without_smtp_host_is_log_only() -> None:
    settings = get_settings().model_copy(update={"smtp_host": None})
    assert isinstance(create_mail_transport(settings), LogOnlyMailTransport)


def test_factory_with_smtp_host() -> None:
    settings = get_settings().model_copy(
        update={"smtp_host": "smtp.example.com", "smtp_port": 2525, "smtp_password": SecretStr("pw")}
    )
    transport = create_mail_transport(settings)
    assert isinstance(transport, SmtpMailTransport)
    assert transport.host == "smtp.example.com"
    assert transport.port == 2525
