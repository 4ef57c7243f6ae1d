"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
Environment defaults are set before any import that builds settings.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("APP_RATE_LIMIT_REQUESTS", "3")
os.environ.setdefault("APP_RATE_LIMIT_WINDOW_SECONDS", "900")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("MAIL_BACKEND", "log")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Any  # noqa: E402
from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402

from contact_intake.adapters.notification.base import AbstractNotifier  # noqa: E402
from contact_intake.adapters.storage.base import AbstractSubmissionStore  # noqa: E402
from contact_intake.schemas.contact import SanitizedSubmission  # noqa: E402


class RecordingStore(AbstractSubmissionStore):
    """Store double remembering every submission it was given."""

    def __init__(self, error: Exception | None = None) -> None:
        self.created: list[SanitizedSubmission] = []
        self.error = error

    async def create(self, submission: SanitizedSubmission) -> str:
        if self.error is not None:
            raise self.error
        self.created.append(submission)
        return f"sub-{len(self.created)}"


class RecordingNotifier(AbstractNotifier):
    """Notifier double remembering every call, optionally failing."""

    def __init__(self, error: Exception | None = None) -> None:
        self.sent: list[tuple[str, str, dict[str, Any]]] = []
        self.error = error

    async def send(self, to: str, subject: str, template_data: dict[str, Any]) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((to, subject, template_data))


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def clock() -> Mock:
    """Controllable clock; set ``clock.return_value`` to move time."""
    return Mock(return_value=1_000.0)


@pytest.fixture
def valid_submission() -> dict[str, Any]:
    return {
        "name": "Marco Rossi",
        "email": "marco@example.com",
        "phone": "+39 06 1234567",
        "subject": "info",
        "message": "I want information about cohousing.",
    }
