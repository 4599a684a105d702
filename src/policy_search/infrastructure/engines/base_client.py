"""
Base Engine Client - common scraping pattern for HTML search engines.

Every engine adapter does the same thing: fetch a result page, select the
result nodes, map them to SearchResult, and page until the limit is met or
a page comes back empty. This base class provides:
- Lazy httpx.AsyncClient management (browser-like headers, optional proxy)
- Rate limiting (configurable interval between requests)
- Retry on 429 / request errors with exponential backoff (get_retry_delay)
- Circuit breaker for fault tolerance
- The paging loop

Subclasses set `name` and implement:
- `_build_request(query, page)`: URL + params (+ method/data) for one page
- `parse_results(html)`: SearchResult list for one page
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx
from bs4 import BeautifulSoup, Tag
from typing_extensions import Self

from policy_search.shared.async_utils import CircuitBreaker
from policy_search.shared.exceptions import (
    APIError,
    EngineError,
    NetworkError,
    RateLimitError,
    get_retry_delay,
    is_retryable_error,
)

if TYPE_CHECKING:
    from policy_search.domain.entities import SearchResult

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

BROWSER_HEADERS: dict[str, str] = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Cache-Control": "max-age=0",
}

# Date formats seen in result captions, tried in order
DATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\d{4}年\d{1,2}月\d{1,2}日"),  # 2024年3月8日
    re.compile(r"\d{4}-\d{1,2}-\d{1,2}"),  # 2024-03-08
    re.compile(r"\d{1,2}/\d{1,2}/\d{4}"),  # 3/8/2024
    re.compile(r"\d{4}\.\d{1,2}\.\d{1,2}"),  # 2024.03.08
)


def extract_publish_date(text: str, patterns: tuple[re.Pattern[str], ...] = DATE_PATTERNS) -> str | None:
    """Return the first date-looking substring of *text*, or None."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def clean_text(element: Tag | None) -> str:
    """Visible text of *element* with whitespace collapsed; "" for None."""
    if element is None:
        return ""
    return " ".join(element.get_text().split())


@dataclass
class PageRequest:
    """One HTTP request for one result page."""

    url: str
    params: dict[str, str] = field(default_factory=dict)
    method: str = "GET"
    data: dict[str, str] | None = None
    headers: dict[str, str] = field(default_factory=dict)


class BaseEngineClient:
    """
    Base class for HTML-scraping engine adapters.

    Example:
        class MyEngine(BaseEngineClient):
            name = "myengine"

            def _build_request(self, query, page):
                return PageRequest("https://example.com/s", {"q": query, "p": str(page)})

            def parse_results(self, html):
                ...
    """

    name: str = "engine"
    _MAX_RETRIES: int = 2
    _MAX_PAGES: int = 10

    def __init__(
        self,
        timeout: float = 10.0,
        min_interval: float = 0.2,
        proxy: str | None = None,
        headers: dict[str, str] | None = None,
        circuit_breaker: CircuitBreaker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize engine client.

        Args:
            timeout: Request timeout in seconds
            min_interval: Minimum seconds between requests (rate limiting)
            proxy: Optional proxy URL for all requests
            headers: Extra default headers merged over the browser headers
            circuit_breaker: Optional circuit breaker; default threshold=5, recovery=60s
            transport: httpx transport for every client built (tests)
        """
        self._timeout = timeout
        self._min_interval = min_interval
        self._last_request_time = 0.0
        self._headers = {**BROWSER_HEADERS, **(headers or {})}
        self._proxy = proxy
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._circuit_breaker = circuit_breaker or CircuitBreaker(failure_threshold=5, recovery_timeout=60.0)

    # ------------------------------------------------------------------
    # Engine capability
    # ------------------------------------------------------------------

    async def search(self, query: str, limit: int) -> list[SearchResult]:
        """
        Page through results until *limit* items are collected.

        Stops early on an empty page. Raises EngineError when a page cannot
        be fetched.
        """
        collected: list[SearchResult] = []
        page = 0

        while len(collected) < limit and page < self._MAX_PAGES:
            html = await self._fetch_page(query, page)
            batch = self.parse_results(html)
            if not batch:
                logger.debug(f"{self.name}: no more results after page {page}")
                break
            collected.extend(batch)
            page += 1

        return collected[:limit]

    def _build_request(self, query: str, page: int) -> PageRequest:
        raise NotImplementedError

    def parse_results(self, html: str) -> list[SearchResult]:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    async def _rate_limit(self) -> None:
        """Enforce minimum interval between requests."""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_interval:
            await asyncio.sleep(self._min_interval - elapsed)
        self._last_request_time = time.time()

    async def _fetch_page(self, query: str, page: int) -> str:
        """
        Fetch one result page with retry on 429 and transient request errors.

        Raises:
            EngineError: Page could not be fetched
        """
        request = self._build_request(query, page)

        for attempt in range(self._MAX_RETRIES + 1):
            await self._rate_limit()
            try:
                async with self._circuit_breaker:
                    response = await self._execute_request(request)

                    if response.status_code == 429:
                        error: APIError = RateLimitError(
                            "rate limited (429)", retry_after=self._get_retry_after(response) or 1.0
                        )
                    else:
                        response.raise_for_status()
                        return response.text

            except httpx.HTTPStatusError as e:
                raise EngineError(
                    self.name, f"HTTP error {e.response.status_code}: {e.response.reason_phrase}"
                ) from e
            except httpx.RequestError as e:
                error = NetworkError(f"request failed: {e!r}")
            except RateLimitError as e:
                # Raised by the open circuit breaker, not by the engine
                raise EngineError(self.name, str(e)) from e

            if attempt >= self._MAX_RETRIES or not is_retryable_error(error):
                if isinstance(error, RateLimitError):
                    raise EngineError(self.name, "rate limit exceeded after retries") from error
                raise EngineError(self.name, str(error)) from error

            delay = get_retry_delay(error, attempt)
            logger.warning(f"{self.name}: {error}, retry {attempt + 1}/{self._MAX_RETRIES} in {delay:.1f}s")
            await asyncio.sleep(delay)

        raise EngineError(self.name, "request failed")

    async def _execute_request(self, request: PageRequest) -> httpx.Response:
        """Execute the actual HTTP request. Override for custom behavior."""
        client = self._get_client()
        if request.method == "POST":
            return await client.post(request.url, params=request.params, data=request.data, headers=request.headers)
        return await client.get(request.url, params=request.params, headers=request.headers)

    @staticmethod
    def _get_retry_after(response: httpx.Response) -> float | None:
        """Retry-After header in seconds, None when absent or not a number."""
        try:
            return float(response.headers["Retry-After"])
        except (KeyError, ValueError):
            return None

    def _get_client(self) -> httpx.AsyncClient:
        """Shared HTTP client, rebuilt if a previous session closed it."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._headers,
                follow_redirects=True,
                proxy=self._proxy,
                transport=self._transport,
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5, keepalive_expiry=30.0),
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
