"""Pydantic schemas for contact submissions and responses."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

SubjectLiteral = Literal["info", "visit", "partnership", "other"]


class ContactFormPayload(BaseModel):
    """Documented shape of the contact form body.

    The endpoint does not parse requests with this model: the body is
    validated field by field against whitelist patterns so that every failing
    field is reported at once. The model only feeds the OpenAPI docs.
    """

    name: str = Field(
        ...,
        min_length=2,
        max_length=100,
        description="Sender name: letters (accented Latin included), spaces, apostrophes, hyphens.",
        examples=["Marco Rossi"],
    )
    email: str = Field(
        ...,
        max_length=320,
        description="Sender e-mail address.",
        examples=["marco@example.com"],
    )
    phone: str | None = Field(
        default=None,
        max_length=20,
        description="Optional phone: digits, spaces, '+', '-', parentheses.",
        examples=["+39 06 1234567"],
    )
    subject: SubjectLiteral = Field(..., description="Reason for contact.")
    message: str = Field(
        ...,
        min_length=10,
        max_length=2000,
        description="Free-text message (newlines allowed).",
    )
    honeypot: str | None = Field(
        default=None,
        description="Decoy field hidden from people. Must be left empty.",
    )


class SanitizedSubmission(BaseModel):
    """Submission record handed to the storage and notification collaborators."""

    name: str
    email: str
    phone: str = ""
    subject: SubjectLiteral
    message: str
    ip_address: str = Field(..., description="Resolved client identity at admission time.")
    status: Literal["new"] = "new"

    def template_data(self) -> dict[str, str]:
        """Fields exposed to the notification template."""
        return self.model_dump(include={"name", "email", "phone", "subject", "message"})


class ContactAcceptedResponse(BaseModel):
    """Body returned for every admitted (or silently trapped) submission."""

    message: str = "Message received successfully."
