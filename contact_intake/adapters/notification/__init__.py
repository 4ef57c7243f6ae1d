"""Notification collaborator adapters - tell the admins a message arrived."""

from contact_intake.adapters.notification.base import AbstractNotifier
from contact_intake.adapters.notification.factory import create_notifier
from contact_intake.adapters.notification.log_notifier import LogNotifier
from contact_intake.adapters.notification.smtp import SmtpNotifier

__all__ = [
    "AbstractNotifier",
    "LogNotifier",
    "SmtpNotifier",
    "create_notifier",
]
