"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Firebase credentials are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Firebase credentials are required (key JSON or file path). Everything
    else has a usable default for local development.
    """

    # App
    app_name: str = "guestmenu-functions"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Firebase: use key (env) or path (file). The project id is read from the key.
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file
    firebase_timeout_seconds: float = 30.0

    # Bootstrap super-admin: always authorized, never deletable.
    # Matched by uid; the email is only a fallback for deployments that
    # provisioned the account before its uid was known.
    bootstrap_superadmin_uid: str | None = None
    bootstrap_superadmin_email: str | None = None

    # Order-created event push: callers must send
    # X-Event-Signature-256: sha256=<hex(hmac_sha256(secret, body))>.
    order_event_secret: SecretStr | None = None

    # Outbound mail. No SMTP host means notifications are logged only.
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: SecretStr | None = None
    smtp_use_tls: bool = True
    smtp_timeout_seconds: float = 20.0
    mail_from: str = "GuestMenu <no-reply@guestmenu.com>"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate Firebase credentials and the bootstrap principal.

        - FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH required.
        - At least one of BOOTSTRAP_SUPERADMIN_UID / BOOTSTRAP_SUPERADMIN_EMAIL.
        """
        has_key = (
            self.firebase_service_account_key
            and self.firebase_service_account_key.get_secret_value()
        )
        if not has_key and not self.firebase_service_account_path:
            raise ValueError(
                "Set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) "
                "or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
            )
        if not self.bootstrap_superadmin_uid and not self.bootstrap_superadmin_email:
            raise ValueError(
                "BOOTSTRAP_SUPERADMIN_UID (or BOOTSTRAP_SUPERADMIN_EMAIL) is required. "
                "It names the root account that can never be deleted."
            )
        if self.smtp_port <= 0:
            raise ValueError(f"smtp_port must be positive, got: {self.smtp_port}")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
