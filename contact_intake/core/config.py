"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

# Select the .env file for the current environment
_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_app_settings() -> "AppSettings":
    """Build app settings from environment.

    Pydantic Settings (v2) can populate values from environment variables.
    However, static type checkers often treat required fields as required
    constructor arguments, which is not how BaseSettings is intended to be used.
    """

    return AppSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


def _build_storage_settings() -> "StorageSettings":
    return StorageSettings()  # type: ignore[call-arg]


def _build_notification_settings() -> "NotificationSettings":
    return NotificationSettings()  # type: ignore[call-arg]


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    trust_forwarded_for: bool = Field(
        True,
        description=(
            "Identify clients by the first X-Forwarded-For entry. Disable when the "
            "service is not behind a trusted reverse proxy."
        ),
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client rate limiting of contact submissions",
    )
    rate_limit_requests: int = Field(
        3,
        description="Maximum number of submissions allowed per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: float = Field(
        15 * 60,
        description="Rate limit window length in seconds",
        gt=0,
    )
    rate_limit_max_entries: int = Field(
        10_000,
        description="Upper bound on tracked client identities before oldest are evicted",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field(
        "json",
        description="Log format: 'json' (structured) or 'plain'",
    )
    output: str = Field(
        "stdout",
        description="Log destination: 'stdout' or 'file'",
    )
    file_path: str | None = Field(
        None,
        description="Log file path when output is 'file' (default logs/contact_intake.log)",
    )
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(5, description="Number of rotated files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and propagate the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class StorageSettings(BaseSettings):
    """Storage collaborator configuration.

    The ``memory`` backend keeps submissions in process (development/tests).
    The ``directus`` backend writes to a Directus collection over REST.
    """

    backend: str = Field(
        "memory",
        description="Storage backend name: 'memory' or 'directus'",
    )
    base_url: str | None = Field(
        None,
        description="Directus base URL (required for the directus backend)",
    )
    token: str | None = Field(
        None,
        description="Static access token used as Bearer credential",
    )
    collection: str = Field(
        "contact_submissions",
        description="Collection receiving sanitized submissions",
    )
    timeout_seconds: float = Field(10.0, description="Request timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        case_sensitive=False,
    )


class NotificationSettings(BaseSettings):
    """Admin e-mail notification configuration."""

    backend: str = Field(
        "log",
        description="Notification backend name: 'log' or 'smtp'",
    )
    admin_email: str | None = Field(
        None,
        description="Recipient of new-submission notifications (skipped when unset)",
    )
    from_address: str = Field(
        "noreply@localhost",
        description="Sender address for notification e-mails",
    )
    subject_prefix: str = Field(
        "[Lares]",
        description="Prefix prepended to notification subjects",
    )
    smtp_host: str = Field("localhost", description="SMTP server host")
    smtp_port: int = Field(587, description="SMTP server port")
    smtp_user: str | None = Field(None, description="SMTP username")
    smtp_password: str | None = Field(None, description="SMTP password")
    smtp_use_tls: bool = Field(False, description="Connect with implicit TLS")
    smtp_start_tls: bool = Field(True, description="Upgrade the connection with STARTTLS")
    smtp_timeout_seconds: float = Field(15.0, description="SMTP operation timeout")

    model_config = SettingsConfigDict(
        env_prefix="MAIL_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are malformed.

    Environments:
    - development: Local development (DEBUG=true)
    - testing: Automated tests (uses .env.testing)
    - staging: Pre-production (uses .env.staging)
    - production: Production deployment (uses .env.production)
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)
    storage: StorageSettings = Field(default_factory=_build_storage_settings)
    mail: NotificationSettings = Field(default_factory=_build_notification_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
