"""Rate limiter interfaces.

The API depends on this abstraction (not the concrete implementation) so the
in-process table can later be replaced by a shared store (e.g., Redis).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit consume operation.

    Attributes:
        allowed: Whether the request is admitted.
        limit: Max admissions per window.
        remaining: Admissions left in the current window (0 when blocked).
        reset_at: UNIX epoch seconds after which the window resets.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Interface for per-key admission control."""

    @abstractmethod
    def consume(self, key: str) -> RateLimitResult:
        """Record one attempt for ``key`` and decide whether it is admitted.

        Args:
            key: Client identity (e.g., network address).

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    def admit(self, key: str) -> bool:
        """Shorthand for ``consume(key).allowed``."""
        return self.consume(key).allowed
