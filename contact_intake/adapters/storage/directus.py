"""Directus REST storage adapter.

Writes sanitized submissions into a Directus collection through the items
API (``POST /items/{collection}``) authenticated with a static token.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from contact_intake.adapters.storage.base import AbstractSubmissionStore
from contact_intake.core.errors import StorageAppError
from contact_intake.schemas.contact import SanitizedSubmission

logger = logging.getLogger(__name__)

STORAGE_FAILURE_MESSAGE = "Submission could not be recorded. Please try again later."


class DirectusSubmissionStore(AbstractSubmissionStore):
    """Store submissions as items of a Directus collection."""

    def __init__(
        self,
        *,
        base_url: str,
        token: str | None,
        collection: str = "contact_submissions",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            base_url: Directus instance URL (e.g., ``https://cms.example.org``).
            token: Static access token with create permission on the collection.
            collection: Target collection name.
            timeout_seconds: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.collection = collection
        self._token = token
        self._timeout = timeout_seconds
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _failure(self, reason: str, **context: Any) -> StorageAppError:
        logger.error(
            "storage.create_failed",
            extra={"backend": "directus", "reason": reason, **context},
        )
        return StorageAppError(
            code="submission_not_recorded",
            message=STORAGE_FAILURE_MESSAGE,
            details={"backend": "directus", "hint": reason},
        )

    async def create(self, submission: SanitizedSubmission) -> str:
        """POST the submission and return the id Directus assigned.

        Raises:
            StorageAppError: On transport errors, non-2xx status or a response
                without ``data.id``.
        """
        url = f"{self.base_url}/items/{self.collection}"

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    url,
                    json=submission.model_dump(),
                    headers=self._headers(),
                )
        except httpx.HTTPError as exc:
            raise self._failure("transport_error", error_type=type(exc).__name__) from exc

        if response.is_error:
            raise self._failure("http_error", http_status=response.status_code)

        try:
            item_id = response.json()["data"]["id"]
        except (ValueError, KeyError, TypeError) as exc:
            raise self._failure("malformed_response", http_status=response.status_code) from exc

        logger.debug(
            "storage.created",
            extra={"backend": "directus", "collection": self.collection},
        )
        return str(item_id)
