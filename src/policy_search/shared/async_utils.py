"""
Async Utilities for engine fan-out.

Provides:
- empty_on_failure: map any failure of an async search call to an empty list
- gather_settled: run coroutines concurrently with a join barrier (TaskGroup)
- CircuitBreaker: fault tolerance for a single upstream engine
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from .exceptions import RateLimitError

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Failure absorption
# =============================================================================


async def empty_on_failure(coro: Awaitable[list[T]], *, label: str) -> list[T]:
    """
    Await *coro* and return its result, or ``[]`` if it raised.

    The failure is logged at WARNING level and never re-raised. Cancellation
    (``BaseException``) is not absorbed.

    Example:
        results = await empty_on_failure(engine.search(q, 10), label="bing")
    """
    try:
        return await coro
    except Exception as e:
        logger.warning(f"{label} search failed: {e}")
        return []


async def gather_settled(*coros: Awaitable[T]) -> list[T]:
    """
    Execute coroutines in parallel using TaskGroup and wait for all of them.

    Results keep the order of *coros*. Callers are expected to pass
    coroutines that do not raise (see :func:`empty_on_failure`); if one does,
    the TaskGroup cancels the rest and re-raises as an ExceptionGroup.
    """
    async with asyncio.TaskGroup() as tg:
        tasks = [tg.create_task(coro) for coro in coros]
    return [task.result() for task in tasks]


# =============================================================================
# Circuit Breaker Pattern
# =============================================================================


@dataclass
class CircuitBreaker:
    """
    Circuit breaker for fault tolerance.

    States:
    - CLOSED: Normal operation
    - OPEN: Failing, reject requests immediately
    - HALF_OPEN: Testing if service recovered

    Example:
        breaker = CircuitBreaker(failure_threshold=5)

        async with breaker:
            result = await risky_api_call()
    """

    failure_threshold: int = 5
    recovery_timeout: float = 30.0
    half_open_max_calls: int = 3

    _failure_count: int = field(init=False, default=0)
    _last_failure_time: float | None = field(init=False, default=None)
    _state: str = field(init=False, default="closed")
    _half_open_calls: int = field(init=False, default=0)
    _lock: asyncio.Lock = field(init=False, default_factory=asyncio.Lock)

    @property
    def state(self) -> str:
        return self._state

    @property
    def is_open(self) -> bool:
        """Check if circuit is open (rejecting requests)."""
        if self._state == "open":
            if self._last_failure_time and time.monotonic() - self._last_failure_time > self.recovery_timeout:
                return False  # Move to half-open
            return True
        return False

    async def __aenter__(self) -> CircuitBreaker:
        async with self._lock:
            if self.is_open:
                raise RateLimitError("Circuit breaker is open", retry_after=self.recovery_timeout)

            if self._state == "open":
                self._state = "half_open"
                self._half_open_calls = 0

            if self._state == "half_open":
                if self._half_open_calls >= self.half_open_max_calls:
                    raise RateLimitError(
                        "Circuit breaker is half-open (max calls reached)",
                        retry_after=self.recovery_timeout / 2,
                    )
                self._half_open_calls += 1

        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        async with self._lock:
            if exc_val is not None:
                self._failure_count += 1
                self._last_failure_time = time.monotonic()

                if self._failure_count >= self.failure_threshold:
                    self._state = "open"
                    logger.warning(f"Circuit breaker opened after {self._failure_count} failures")
            elif self._state == "half_open":
                self._state = "closed"
                self._failure_count = 0
                logger.info("Circuit breaker closed (recovered)")
            elif self._state == "closed":
                self._failure_count = max(0, self._failure_count - 1)
