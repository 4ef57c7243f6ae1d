from abc import ABC, abstractmethod

from contact_intake.schemas.contact import SanitizedSubmission


class AbstractSubmissionStore(ABC):
	"""Interface for stores that durably record admitted submissions."""

	@abstractmethod
	async def create(self, submission: SanitizedSubmission) -> str:
		"""Persist a sanitized submission.

		Args:
			submission: Sanitized record. Raw request data must never be passed here.

		Returns:
			str: Identifier assigned by the store.

		Raises:
			StorageAppError: If the submission could not be recorded.
		"""
		...
