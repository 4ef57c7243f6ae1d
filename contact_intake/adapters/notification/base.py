from abc import ABC, abstractmethod
from typing import Any


class AbstractNotifier(ABC):
	"""Interface for admin notification channels."""

	@abstractmethod
	async def send(self, to: str, subject: str, template_data: dict[str, Any]) -> None:
		"""Deliver a new-submission notification.

		Args:
			to: Recipient address.
			subject: Notification subject line.
			template_data: Values rendered into the notification body.

		Raises:
			NotificationAppError: If delivery fails.
		"""
		...
