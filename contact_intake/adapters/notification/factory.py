"""Factory for the configured notification collaborator."""

from contact_intake.adapters.notification.base import AbstractNotifier
from contact_intake.adapters.notification.log_notifier import LogNotifier
from contact_intake.adapters.notification.smtp import SmtpNotifier
from contact_intake.core.config import NotificationSettings, settings
from contact_intake.core.errors import ConfigurationAppError


def create_notifier(mail_settings: NotificationSettings | None = None) -> AbstractNotifier:
    """Instantiate the notifier named by ``MAIL_BACKEND``.

    Raises:
        ConfigurationAppError: If the backend is unknown.
    """
    cfg = mail_settings or settings.mail
    backend = cfg.backend.lower()

    if backend == "log":
        return LogNotifier()

    if backend == "smtp":
        return SmtpNotifier(
            host=cfg.smtp_host,
            port=cfg.smtp_port,
            from_address=cfg.from_address,
            username=cfg.smtp_user,
            password=cfg.smtp_password,
            use_tls=cfg.smtp_use_tls,
            start_tls=cfg.smtp_start_tls,
            timeout_seconds=cfg.smtp_timeout_seconds,
        )

    raise ConfigurationAppError(
        code="mail_unknown_backend",
        message=f"Unknown notification backend: '{backend}'. Supported backends: log, smtp",
    )
