"""Honeypot detection and whitelist validation for contact submissions.

Every field is checked against an allow-pattern describing the only shape
that is accepted; nothing tries to recognise malicious input. All fields are
evaluated so a single response can report every problem.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

HONEYPOT_FIELD = "honeypot"

ALLOWED_SUBJECTS: frozenset[str] = frozenset({"info", "visit", "partnership", "other"})

# Whitespace as browsers define it; Python's \s also admits \x1c-\x1f and \x85
WHITESPACE = r"\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"

# Applied with fullmatch to the trimmed value
ALLOWED_PATTERNS: dict[str, re.Pattern[str]] = {
    "name": re.compile(rf"[a-zA-ZÀ-ÿ{WHITESPACE}'\-]{{2,100}}"),
    "email": re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,254}"),
    "phone": re.compile(rf"[0-9{WHITESPACE}+\-()]{{0,20}}"),
    "message": re.compile(r".{10,2000}", re.DOTALL),
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one submission.

    Attributes:
        valid: True when no field failed.
        errors: Field name to human-readable reason, empty when valid.
    """

    valid: bool
    errors: dict[str, str] = field(default_factory=dict)


def is_honeypot_triggered(data: Mapping[str, Any]) -> bool:
    """Return True when the decoy field carries any truthy value."""
    return bool(data.get(HONEYPOT_FIELD))


def _matches(field_name: str, value: Any) -> bool:
    return isinstance(value, str) and ALLOWED_PATTERNS[field_name].fullmatch(value.strip()) is not None


def _check_required(field_name: str) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return bool(value) and _matches(field_name, value)

    return check


def _check_phone(value: Any) -> bool:
    if not value:
        return True
    if not isinstance(value, str):
        return False
    if not value.strip():
        return True
    return _matches("phone", value)


def _check_subject(value: Any) -> bool:
    return isinstance(value, str) and value in ALLOWED_SUBJECTS


FIELD_CHECKS: dict[str, Callable[[Any], bool]] = {
    "name": _check_required("name"),
    "email": _check_required("email"),
    "phone": _check_phone,
    "subject": _check_subject,
    "message": _check_required("message"),
}


def validate_submission(data: Mapping[str, Any]) -> ValidationResult:
    """Validate every contact field independently.

    Args:
        data: Raw submission mapping (untrusted).

    Returns:
        ValidationResult listing every failing field as ``"Invalid <field>"``.
    """
    errors = {
        field_name: f"Invalid {field_name}"
        for field_name, check in FIELD_CHECKS.items()
        if not check(data.get(field_name))
    }
    return ValidationResult(valid=not errors, errors=errors)
