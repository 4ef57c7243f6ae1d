"""Tests for the contact admission service."""

from typing import Any

import pytest

from contact_intake.core.errors import StorageAppError, ValidationAppError
from contact_intake.services.contact_service import ContactService, sanitize_submission


@pytest.fixture
def service(store, notifier) -> ContactService:
    return ContactService(store, notifier, admin_email="admin@lares.example")


class TestSanitizeSubmission:
    def test_valid_submission_passes_through_unchanged(self, valid_submission: dict[str, Any]) -> None:
        record = sanitize_submission(valid_submission, client_id="203.0.113.9")

        assert record.name == "Marco Rossi"
        assert record.email == "marco@example.com"
        assert record.phone == "+39 06 1234567"
        assert record.subject == "info"
        assert record.message == "I want information about cohousing."
        assert record.ip_address == "203.0.113.9"
        assert record.status == "new"

    def test_trims_lowercases_email_and_strips_tags_from_message(self) -> None:
        record = sanitize_submission(
            {
                "name": " Anna ",
                "email": "  Anna@Example.DE ",
                "subject": "visit",
                "message": "  <b>Hello</b> there, <i>friends</i>  ",
            },
            client_id="unknown",
        )

        assert record.name == "Anna"
        assert record.email == "anna@example.de"
        assert record.phone == ""
        assert record.message == "Hello there, friends"


class TestSubmit:
    @pytest.mark.asyncio
    async def test_stores_sanitized_copy_once(
        self, service: ContactService, store, valid_submission: dict[str, Any]
    ) -> None:
        submission = await service.submit(valid_submission, client_id="203.0.113.9")

        assert submission is not None
        assert store.created == [submission]
        assert submission.name == valid_submission["name"]

    @pytest.mark.asyncio
    async def test_honeypot_short_circuits_even_for_invalid_fields(
        self, service: ContactService, store
    ) -> None:
        result = await service.submit({"honeypot": "gotcha", "name": "<x>"}, client_id="bot")

        assert result is None
        assert store.created == []

    @pytest.mark.asyncio
    async def test_invalid_submission_raises_with_field_errors(
        self, service: ContactService, store
    ) -> None:
        with pytest.raises(ValidationAppError) as exc_info:
            await service.submit(
                {
                    "name": "<img onerror=alert(1)>",
                    "email": "test@example.com",
                    "subject": "info",
                    "message": "Test message content here.",
                },
                client_id="203.0.113.9",
            )

        assert exc_info.value.code == "validation_failed"
        assert exc_info.value.details == {"fields": {"name": "Invalid name"}}
        assert store.created == []

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(
        self, service: ContactService, store, valid_submission: dict[str, Any]
    ) -> None:
        store.error = StorageAppError(code="submission_not_recorded", message="down")

        with pytest.raises(StorageAppError):
            await service.submit(valid_submission, client_id="203.0.113.9")


class TestNotify:
    @pytest.mark.asyncio
    async def test_sends_to_admin_with_prefixed_subject(
        self,
        service: ContactService,
        notifier,
        valid_submission: dict[str, Any],
    ) -> None:
        submission = sanitize_submission(valid_submission, client_id="203.0.113.9")

        await service.notify(submission)

        assert len(notifier.sent) == 1
        to, subject, data = notifier.sent[0]
        assert to == "admin@lares.example"
        assert subject == "[Lares] New contact: info"
        assert data == {
            "name": "Marco Rossi",
            "email": "marco@example.com",
            "phone": "+39 06 1234567",
            "subject": "info",
            "message": "I want information about cohousing.",
        }

    @pytest.mark.asyncio
    async def test_failure_is_swallowed(
        self, service: ContactService, notifier, valid_submission: dict[str, Any]
    ) -> None:
        notifier.error = ConnectionError("smtp down")
        submission = sanitize_submission(valid_submission, client_id="203.0.113.9")

        # Must not raise
        await service.notify(submission)

    @pytest.mark.asyncio
    async def test_skipped_without_admin_address(
        self, store, notifier, valid_submission: dict[str, Any]
    ) -> None:
        service = ContactService(store, notifier, admin_email=None)

        await service.notify(sanitize_submission(valid_submission, client_id="x"))

        assert notifier.sent == []
