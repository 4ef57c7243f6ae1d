"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Design goals:
- Minimal coupling: API routes depend on a dependency function only.
- Explicit lifecycle: the limiter instance is built by the app factory and
  kept on ``app.state``; tests construct their own.
- Swap-friendly: storage backend can be replaced (e.g., Redis) behind an
  abstract interface.

Strategy: fixed window per client network address (see client_identity).
"""

from __future__ import annotations

import logging

from fastapi import Request

from contact_intake.adapters.rate_limit.base import AbstractRateLimiter
from contact_intake.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from contact_intake.core.client_identity import resolve_client_identity
from contact_intake.core.config import AppSettings, settings
from contact_intake.core.errors import RateLimitAppError
from contact_intake.core.logging import hash_identifier

logger = logging.getLogger(__name__)

RATE_LIMITED_MESSAGE = "Too many requests. Try again later."


def build_rate_limiter(app_settings: AppSettings | None = None) -> AbstractRateLimiter:
    """Create the process-local limiter from configuration."""

    cfg = app_settings or settings.app
    return InMemoryFixedWindowRateLimiter(
        limit=cfg.rate_limit_requests,
        window_seconds=cfg.rate_limit_window_seconds,
        max_entries=cfg.rate_limit_max_entries,
    )


def get_app_settings(request: Request) -> AppSettings:
    """Return the identity and rate limit options of the running application."""

    return request.app.state.app_settings


def get_rate_limiter(request: Request) -> AbstractRateLimiter:
    """Return the limiter instance owned by the running application."""

    return request.app.state.rate_limiter


async def enforce_rate_limit(request: Request) -> str:
    """FastAPI dependency resolving the client and enforcing its quota.

    Runs before the request body is read, so flooding clients are turned
    away without any parsing work.

    Args:
        request: FastAPI request.

    Returns:
        str: Resolved client identity, for the handler to record.

    Raises:
        RateLimitAppError: When the client has used up its window quota.
    """

    cfg = get_app_settings(request)
    client_id = resolve_client_identity(
        request,
        trust_forwarded_for=cfg.trust_forwarded_for,
    )

    if not cfg.rate_limit_enabled:
        return client_id

    limiter = get_rate_limiter(request)
    client_hash = hash_identifier(client_id)

    result = limiter.consume(client_id)
    if result.allowed:
        logger.info(
            "rate_limit.allowed",
            extra={
                "client_hash": client_hash,
                "limit": result.limit,
                "remaining": result.remaining,
            },
        )
        return client_id

    retry_after = result.retry_after_seconds or 0
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "client_hash": client_hash,
            "limit": result.limit,
            "remaining": result.remaining,
            "retry_after_s": retry_after,
        },
    )

    headers: dict[str, str] = {}
    if cfg.rate_limit_include_headers:
        headers["Retry-After"] = str(retry_after)
        headers["X-RateLimit-Limit"] = str(result.limit)
        headers["X-RateLimit-Remaining"] = str(result.remaining)
        headers["X-RateLimit-Reset"] = str(result.reset_at)

    raise RateLimitAppError(
        code="rate_limited",
        message=RATE_LIMITED_MESSAGE,
        details={"limit": result.limit, "retry_after": retry_after},
        headers=headers or None,
    )
