"""Tests for sensitive data filtering in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from contact_intake.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    hash_identifier,
    set_request_id,
)


@pytest.fixture
def capture() -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger("test_redaction")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_redacts_submitter_personal_data(capture):
    logger, stream = capture

    logger.info(
        "contact.debug",
        extra={
            "email": "marco@example.com",
            "phone": "+39 06 1234567",
            "ip_address": "203.0.113.9",
            "subject": "info",
        },
    )

    output = stream.getvalue()
    assert "marco@example.com" not in output
    assert "1234567" not in output
    assert "203.0.113.9" not in output
    assert "[REDACTED]" in output
    assert json.loads(output)["subject"] == "info"


def test_redacts_secrets(capture):
    logger, stream = capture

    logger.info(
        "config.loaded",
        extra={"smtp_password": "hunter2", "storage_token": "tok-abc", "safe_field": "visible"},
    )

    output = stream.getvalue()
    assert "hunter2" not in output
    assert "tok-abc" not in output
    assert "visible" in output


def test_redacts_nested_dicts(capture):
    logger, stream = capture

    logger.info(
        "notification.logged",
        extra={
            "headers": {"x-forwarded-for": "203.0.113.9", "user-agent": "pytest"},
            "template_data": {"name": "Marco", "message": "hello"},
        },
    )

    output = stream.getvalue()
    assert "203.0.113.9" not in output
    assert "Marco" not in output
    assert "pytest" in output


def test_safe_fields_pass_through(capture):
    logger, stream = capture

    logger.info(
        "rate_limit.allowed",
        extra={"client_hash": hash_identifier("203.0.113.9"), "limit": 3, "remaining": 2},
    )

    record = json.loads(stream.getvalue())
    assert record["message"] == "rate_limit.allowed"
    assert record["limit"] == 3
    assert record["remaining"] == 2
    assert "[REDACTED]" not in stream.getvalue()


def test_request_id_from_context_is_attached(capture):
    logger, stream = capture

    set_request_id("req-123")
    try:
        logger.info("contact.stored")
    finally:
        clear_request_id()

    assert json.loads(stream.getvalue())["request_id"] == "req-123"


def test_hash_identifier_is_stable_and_opaque():
    digest = hash_identifier("203.0.113.9")

    assert digest == hash_identifier("203.0.113.9")
    assert digest != hash_identifier("203.0.113.10")
    assert len(digest) == 16
