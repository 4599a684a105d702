"""Tests for async fan-out utilities."""

from __future__ import annotations

import asyncio
import logging

import pytest

from policy_search.shared.async_utils import CircuitBreaker, empty_on_failure, gather_settled
from policy_search.shared.exceptions import RateLimitError


async def _value(value, delay=0.0):
    await asyncio.sleep(delay)
    return value


async def _fail(error):
    raise error


class TestEmptyOnFailure:
    async def test_passes_result_through(self):
        assert await empty_on_failure(_value([1, 2]), label="x") == [1, 2]

    async def test_failure_becomes_empty(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = await empty_on_failure(_fail(ValueError("bad html")), label="baidu")

        assert result == []
        assert "baidu search failed: bad html" in caplog.text

    async def test_cancellation_not_absorbed(self):
        with pytest.raises(asyncio.CancelledError):
            await empty_on_failure(_fail(asyncio.CancelledError()), label="bing")


class TestGatherSettled:
    async def test_order_preserved(self):
        results = await gather_settled(_value("a", 0.03), _value("b"), _value("c", 0.01))
        assert results == ["a", "b", "c"]

    async def test_empty(self):
        assert await gather_settled() == []


class TestCircuitBreaker:
    async def test_opens_after_threshold(self):
        breaker = CircuitBreaker(failure_threshold=2, recovery_timeout=60.0)

        for _ in range(2):
            with pytest.raises(ValueError):
                async with breaker:
                    raise ValueError("boom")

        assert breaker.state == "open"
        with pytest.raises(RateLimitError):
            async with breaker:
                pass

    async def test_recovers_after_timeout(self):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=0.0)

        with pytest.raises(ValueError):
            async with breaker:
                raise ValueError("boom")
        await asyncio.sleep(0.01)

        async with breaker:
            pass

        assert breaker.state == "closed"
