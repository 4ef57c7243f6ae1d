"""Factory for the configured storage collaborator."""

from contact_intake.adapters.storage.base import AbstractSubmissionStore
from contact_intake.adapters.storage.directus import DirectusSubmissionStore
from contact_intake.adapters.storage.in_memory import InMemorySubmissionStore
from contact_intake.core.config import StorageSettings, settings
from contact_intake.core.errors import ConfigurationAppError


def create_submission_store(storage_settings: StorageSettings | None = None) -> AbstractSubmissionStore:
    """Instantiate the storage backend named by ``STORAGE_BACKEND``.

    Returns:
        AbstractSubmissionStore: Configured store.

    Raises:
        ConfigurationAppError: If the backend is unknown or incompletely configured.
    """
    cfg = storage_settings or settings.storage
    backend = cfg.backend.lower()

    if backend == "memory":
        return InMemorySubmissionStore()

    if backend == "directus":
        if not cfg.base_url:
            raise ConfigurationAppError(
                code="storage_missing_base_url",
                message="Directus storage requires STORAGE_BASE_URL",
            )
        return DirectusSubmissionStore(
            base_url=cfg.base_url,
            token=cfg.token,
            collection=cfg.collection,
            timeout_seconds=cfg.timeout_seconds,
        )

    raise ConfigurationAppError(
        code="storage_unknown_backend",
        message=f"Unknown storage backend: '{backend}'. Supported backends: memory, directus",
    )
