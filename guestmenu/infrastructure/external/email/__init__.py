"""Email delivery: SMTP and log-only transports, factory."""

from guestmenu.infrastructure.external.email.factory import create_mail_transport
from guestmenu.infrastructure.external.email.transports import (
    LogOnlyMailTransport,
    SmtpMailTransport,
)

__all__ = [
    "LogOnlyMailTransport",
    "SmtpMailTransport",
    "create_mail_transport",
]
