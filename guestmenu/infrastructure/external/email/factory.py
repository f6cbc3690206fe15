"""Mail transport factory: SMTP when a host is configured, log-only otherwise."""

from guestmenu.application.interfaces.services import IMailTransport
from guestmenu.core.config import Settings
from guestmenu.infrastructure.external.email.transports import (
    LogOnlyMailTransport,
    SmtpMailTransport,
)
from guestmenu.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def create_mail_transport(settings: Settings) -> IMailTransport:
    """Create the transport described by settings.

    Args:
        settings: Loaded application settings (SMTP_* and MAIL_FROM).

    Returns:
        SmtpMailTransport, or LogOnlyMailTransport when SMTP_HOST is unset.
    """
    if not settings.smtp_host:
        logger.debug("SMTP_HOST not set; order notifications are logged only")
        return LogOnlyMailTransport()
    password = settings.smtp_password.get_secret_value() if settings.smtp_password else None
    return SmtpMailTransport(
        settings.smtp_host,
        settings.smtp_port,
        sender=settings.mail_from,
        username=settings.smtp_username,
        password=password,
        use_tls=settings.smtp_use_tls,
        timeout=settings.smtp_timeout_seconds,
    )
