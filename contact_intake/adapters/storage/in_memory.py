"""Process-local submission store for development and tests."""

from __future__ import annotations

import threading
import uuid

from contact_intake.adapters.storage.base import AbstractSubmissionStore
from contact_intake.schemas.contact import SanitizedSubmission


class InMemorySubmissionStore(AbstractSubmissionStore):
    """Keeps submissions in a dict guarded by a lock. Lost on restart."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict[str, SanitizedSubmission] = {}

    async def create(self, submission: SanitizedSubmission) -> str:
        submission_id = str(uuid.uuid4())
        with self._lock:
            self._items[submission_id] = submission.model_copy()
        return submission_id

    def get(self, submission_id: str) -> SanitizedSubmission | None:
        with self._lock:
            return self._items.get(submission_id)

    def list(self) -> list[SanitizedSubmission]:
        with self._lock:
            return list(self._items.values())
