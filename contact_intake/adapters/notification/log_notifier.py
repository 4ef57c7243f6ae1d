"""Notifier that only writes a log line (development default)."""

from __future__ import annotations

import logging
from typing import Any

from contact_intake.adapters.notification.base import AbstractNotifier

logger = logging.getLogger(__name__)


class LogNotifier(AbstractNotifier):
    async def send(self, to: str, subject: str, template_data: dict[str, Any]) -> None:
        logger.info(
            "notification.logged",
            extra={
                "subject": subject,
                "template_data": template_data,
            },
        )
