"""Contact submission admission service.

Turns a raw, untrusted form body into a stored submission:
- Honeypot check (bots get the normal success response, nothing is stored)
- Whitelist validation of every field, reported together
- Sanitization of free-text fields
- Handoff to the storage collaborator
- Best-effort admin notification, isolated from the client response

Rate limiting happens earlier, in the HTTP layer, before the body is read.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from contact_intake.adapters.notification.base import AbstractNotifier
from contact_intake.adapters.storage.base import AbstractSubmissionStore
from contact_intake.core.errors import ValidationAppError
from contact_intake.core.logging import hash_identifier
from contact_intake.schemas.contact import SanitizedSubmission
from contact_intake.services.contact_validation import is_honeypot_triggered, validate_submission
from contact_intake.utils.html_sanitizer import strip_tags

logger = logging.getLogger(__name__)


def sanitize_submission(data: Mapping[str, Any], *, client_id: str) -> SanitizedSubmission:
    """Build the storage record from an already validated submission.

    Tags are stripped from name, phone and message even though validation
    already constrains them; email is trimmed and lower-cased.
    """
    phone = data.get("phone")
    return SanitizedSubmission(
        name=strip_tags(data["name"].strip()),
        email=data["email"].strip().lower(),
        phone=strip_tags(phone.strip()) if isinstance(phone, str) else "",
        subject=data["subject"],
        message=strip_tags(data["message"].strip()),
        ip_address=client_id,
    )


class ContactService:
    """Service admitting contact submissions and handing them off.

    Attributes:
        store: Storage collaborator receiving sanitized submissions.
        notifier: Notification collaborator for admin alerts.
        admin_email: Notification recipient; notifications are skipped when unset.
        subject_prefix: Prefix for notification subjects.
    """

    def __init__(
        self,
        store: AbstractSubmissionStore,
        notifier: AbstractNotifier,
        *,
        admin_email: str | None = None,
        subject_prefix: str = "[Lares]",
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.admin_email = admin_email
        self.subject_prefix = subject_prefix

    async def submit(self, data: Mapping[str, Any], *, client_id: str) -> SanitizedSubmission | None:
        """Run the admission pipeline for one submission.

        Args:
            data: Raw request body (untrusted).
            client_id: Identity resolved by the HTTP layer.

        Returns:
            The stored sanitized submission, or None when the honeypot was
            triggered (the caller must answer exactly as for a success).

        Raises:
            ValidationAppError: If any field fails validation.
            StorageAppError: If the store could not record the submission.
        """
        client_hash = hash_identifier(client_id)

        if is_honeypot_triggered(data):
            logger.info("contact.honeypot_triggered", extra={"client_hash": client_hash})
            return None

        validation = validate_submission(data)
        if not validation.valid:
            logger.info(
                "contact.validation_failed",
                extra={
                    "client_hash": client_hash,
                    "invalid_fields": sorted(validation.errors),
                },
            )
            raise ValidationAppError(
                code="validation_failed",
                message="Validation failed",
                details={"fields": validation.errors},
            )

        submission = sanitize_submission(data, client_id=client_id)
        submission_id = await self.store.create(submission)

        logger.info(
            "contact.stored",
            extra={
                "client_hash": client_hash,
                "submission_id": submission_id,
                "subject": submission.subject,
            },
        )
        return submission

    def notification_subject(self, submission: SanitizedSubmission) -> str:
        return f"{self.subject_prefix} New contact: {submission.subject}".strip()

    async def notify(self, submission: SanitizedSubmission) -> None:
        """Send the admin notification; never raises.

        Runs after the response has been committed, so a mail outage can
        neither fail nor delay the client-visible result.
        """
        if not self.admin_email:
            logger.warning("notification.skipped", extra={"reason": "admin_email_not_configured"})
            return

        try:
            await self.notifier.send(
                self.admin_email,
                self.notification_subject(submission),
                submission.template_data(),
            )
        except Exception as exc:
            logger.error(
                "notification.failed",
                extra={
                    "error_type": type(exc).__name__,
                    "error_msg": str(exc),
                },
            )
            return

        logger.info("notification.sent", extra={"subject": submission.subject})
