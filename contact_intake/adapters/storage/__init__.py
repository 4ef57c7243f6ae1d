"""Storage collaborator adapters - where admitted submissions are recorded."""

from contact_intake.adapters.storage.base import AbstractSubmissionStore
from contact_intake.adapters.storage.directus import DirectusSubmissionStore
from contact_intake.adapters.storage.factory import create_submission_store
from contact_intake.adapters.storage.in_memory import InMemorySubmissionStore

__all__ = [
    "AbstractSubmissionStore",
    "DirectusSubmissionStore",
    "InMemorySubmissionStore",
    "create_submission_store",
]
