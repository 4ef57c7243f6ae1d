"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: one lock guards the read-modify-write on every entry.
- Bounded: expired windows are swept and the table is capped at max_entries.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from contact_intake.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult

logger = logging.getLogger(__name__)


@dataclass
class _WindowState:
    window_start: float
    count: int


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter using a fixed time window per key.

    A key's window opens with its first admitted request and lasts
    ``window_seconds``. Within the window at most ``limit`` requests are
    admitted; rejected requests do not count. A request arriving exactly
    ``window_seconds`` after the window opened is still inside it; the
    window only resets once strictly more time has elapsed.

    Entries are kept ordered by window start (oldest first). Each call drops
    leading entries whose window has expired, and when more than
    ``max_entries`` keys are tracked the oldest windows are evicted.

    Important:
        This limiter is per-process only. If the API runs with multiple workers
        (e.g., multiple Uvicorn/Gunicorn workers), each worker will enforce its
        own independent limits.
    """

    def __init__(
        self,
        *,
        limit: int = 3,
        window_seconds: float = 15 * 60,
        max_entries: int | None = 10_000,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            limit: Maximum number of admissions per window.
            window_seconds: Length of the window in seconds.
            max_entries: Maximum number of tracked keys (None for unbounded).
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If any bound is invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1")

        self._limit = limit
        self._window_seconds = window_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._state_by_key: OrderedDict[str, _WindowState] = OrderedDict()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._state_by_key)

    def _is_expired(self, state: _WindowState, now: float) -> bool:
        return now - state.window_start > self._window_seconds

    def _open_window_locked(self, key: str, now: float) -> _WindowState:
        state = _WindowState(window_start=now, count=1)
        self._state_by_key[key] = state
        self._state_by_key.move_to_end(key)
        return state

    def _sweep_locked(self, now: float) -> None:
        """Drop expired windows from the oldest end, then enforce capacity."""
        swept = 0
        while self._state_by_key:
            oldest_key = next(iter(self._state_by_key))
            if not self._is_expired(self._state_by_key[oldest_key], now):
                break
            del self._state_by_key[oldest_key]
            swept += 1

        evicted = 0
        if self._max_entries is not None:
            while len(self._state_by_key) > self._max_entries:
                self._state_by_key.popitem(last=False)
                evicted += 1

        if swept or evicted:
            logger.debug(
                "rate_limit.sweep",
                extra={
                    "expired_removed": swept,
                    "capacity_evicted": evicted,
                    "size": len(self._state_by_key),
                },
            )

    def _reset_at(self, state: _WindowState) -> float:
        return state.window_start + self._window_seconds

    def consume(self, key: str) -> RateLimitResult:
        """Record an attempt for ``key`` and return the admission decision.

        Args:
            key: Unique identifier for rate limiting (e.g., client address).

        Returns:
            RateLimitResult with allowance decision and metadata.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("key must be a non-empty string")

        with self._lock:
            now = self._clock()
            state = self._state_by_key.get(key)

            if state is None or self._is_expired(state, now):
                state = self._open_window_locked(key, now)
                self._sweep_locked(now)
                return RateLimitResult(
                    allowed=True,
                    limit=self._limit,
                    remaining=self._limit - state.count,
                    reset_at=int(math.ceil(self._reset_at(state))),
                    retry_after_seconds=None,
                )

            if state.count >= self._limit:
                reset_at = self._reset_at(state)
                return RateLimitResult(
                    allowed=False,
                    limit=self._limit,
                    remaining=0,
                    reset_at=int(math.ceil(reset_at)),
                    retry_after_seconds=max(1, int(math.ceil(reset_at - now))),
                )

            state.count += 1
            return RateLimitResult(
                allowed=True,
                limit=self._limit,
                remaining=self._limit - state.count,
                reset_at=int(math.ceil(self._reset_at(state))),
                retry_after_seconds=None,
            )
