"""Tests for storage collaborator adapters."""

import json

import httpx
import pytest

from contact_intake.adapters.storage.directus import DirectusSubmissionStore
from contact_intake.adapters.storage.factory import create_submission_store
from contact_intake.adapters.storage.in_memory import InMemorySubmissionStore
from contact_intake.core.config import StorageSettings
from contact_intake.core.errors import ConfigurationAppError, StorageAppError
from contact_intake.schemas.contact import SanitizedSubmission


@pytest.fixture
def submission() -> SanitizedSubmission:
    return SanitizedSubmission(
        name="Marco Rossi",
        email="marco@example.com",
        phone="+39 06 1234567",
        subject="info",
        message="I want information about cohousing.",
        ip_address="203.0.113.9",
    )


def _directus(handler) -> DirectusSubmissionStore:
    return DirectusSubmissionStore(
        base_url="https://cms.example.org/",
        token="static-token",
        transport=httpx.MockTransport(handler),
    )


class TestInMemoryStore:
    @pytest.mark.asyncio
    async def test_create_assigns_unique_ids(self, submission: SanitizedSubmission) -> None:
        store = InMemorySubmissionStore()

        first = await store.create(submission)
        second = await store.create(submission)

        assert first != second
        assert store.get(first) == submission
        assert len(store.list()) == 2


class TestDirectusStore:
    @pytest.mark.asyncio
    async def test_posts_sanitized_record_to_collection(self, submission: SanitizedSubmission) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"id": 42}})

        submission_id = await _directus(handler).create(submission)

        assert submission_id == "42"
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://cms.example.org/items/contact_submissions"
        assert request.headers["Authorization"] == "Bearer static-token"
        body = json.loads(request.content)
        assert body["email"] == "marco@example.com"
        assert body["status"] == "new"
        assert body["ip_address"] == "203.0.113.9"

    @pytest.mark.asyncio
    async def test_http_error_raises_storage_error(self, submission: SanitizedSubmission) -> None:
        store = _directus(lambda request: httpx.Response(503, json={"errors": []}))

        with pytest.raises(StorageAppError) as exc_info:
            await store.create(submission)

        assert exc_info.value.code == "submission_not_recorded"
        assert "directus" not in exc_info.value.message.lower()

    @pytest.mark.asyncio
    async def test_transport_error_raises_storage_error(self, submission: SanitizedSubmission) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(StorageAppError):
            await _directus(handler).create(submission)

    @pytest.mark.asyncio
    async def test_malformed_response_raises_storage_error(self, submission: SanitizedSubmission) -> None:
        store = _directus(lambda request: httpx.Response(200, text="<html>proxy page</html>"))

        with pytest.raises(StorageAppError):
            await store.create(submission)


class TestFactory:
    def test_memory_backend(self) -> None:
        store = create_submission_store(StorageSettings(backend="memory"))
        assert isinstance(store, InMemorySubmissionStore)

    def test_directus_backend(self) -> None:
        store = create_submission_store(
            StorageSettings(backend="directus", base_url="https://cms.example.org", token="t")
        )
        assert isinstance(store, DirectusSubmissionStore)
        assert store.collection == "contact_submissions"

    def test_directus_requires_base_url(self) -> None:
        with pytest.raises(ConfigurationAppError):
            create_submission_store(StorageSettings(backend="directus", base_url=None))

    def test_unknown_backend(self) -> None:
        with pytest.raises(ConfigurationAppError) as exc_info:
            create_submission_store(StorageSettings(backend="sqlite"))

        assert exc_info.value.code == "storage_unknown_backend"
