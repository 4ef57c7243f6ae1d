"""SMTP notifier rendering an HTML template and sending it with aiosmtplib."""

from __future__ import annotations

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Any

import aiosmtplib
from jinja2 import Environment, FileSystemLoader

from contact_intake.adapters.notification.base import AbstractNotifier
from contact_intake.core.errors import NotificationAppError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
NOTIFICATION_TEMPLATE = "contact_notification.html"

env = Environment(loader=FileSystemLoader(TEMPLATES_DIR), autoescape=True)


class SmtpNotifier(AbstractNotifier):
    """Send notifications through an SMTP relay."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        from_address: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = False,
        start_tls: bool = True,
        timeout_seconds: float = 15.0,
    ) -> None:
        self.host = host
        self.port = port
        self.from_address = from_address
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._start_tls = start_tls
        self._timeout = timeout_seconds

    def build_message(self, to: str, subject: str, template_data: dict[str, Any]) -> MIMEMultipart:
        """Render the template into a MIME message.

        Submitter-provided values are HTML-escaped by the template engine;
        the submitter's address becomes ``Reply-To`` so admins can answer directly.
        """
        content = env.get_template(NOTIFICATION_TEMPLATE).render(**template_data)

        message = MIMEMultipart()
        message["From"] = self.from_address
        message["To"] = to
        message["Subject"] = subject
        reply_to = template_data.get("email")
        if reply_to:
            message["Reply-To"] = reply_to
        message.attach(MIMEText(content, "html"))
        return message

    async def send(self, to: str, subject: str, template_data: dict[str, Any]) -> None:
        message = self.build_message(to, subject, template_data)

        logger.debug("notification.sending", extra={"smtp_host": self.host, "subject": subject})

        try:
            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self._username,
                password=self._password,
                use_tls=self._use_tls,
                start_tls=self._start_tls,
                timeout=self._timeout,
            )
        except aiosmtplib.SMTPException as exc:
            raise NotificationAppError(
                code="notification_failed",
                message="SMTP delivery failed",
                details={"context": {"error_type": type(exc).__name__}},
            ) from exc
