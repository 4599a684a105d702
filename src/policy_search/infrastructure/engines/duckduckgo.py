"""
DuckDuckGo HTML search adapter.

Uses `https://html.duckduckgo.com/html/` which does not require an API key.
Result links may be wrapped in a ``/l/?uddg=<target>`` redirect; the target
is unwrapped before the absolute-URL check.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlparse

from policy_search.domain.entities import EngineName, SearchResult

from .base_client import BaseEngineClient, PageRequest, clean_text, make_soup

logger = logging.getLogger(__name__)

DDG_HTML_URL = "https://html.duckduckgo.com/html/"
RESULTS_PER_PAGE = 30


def resolve_redirect(href: str) -> str:
    """Unwrap DuckDuckGo ``/l/?uddg=`` redirect links."""
    if href.startswith("//"):
        href = f"https:{href}"
    parsed = urlparse(href)
    if parsed.netloc.endswith("duckduckgo.com") and parsed.path.startswith("/l/"):
        target = parse_qs(parsed.query).get("uddg")
        if target:
            return target[0]
    return href


class DuckDuckGoEngine(BaseEngineClient):
    """DuckDuckGo HTML search adapter (no API key)."""

    name = EngineName.DUCKDUCKGO.value

    def _build_request(self, query: str, page: int) -> PageRequest:
        data = {"q": query}
        if page:
            offset = page * RESULTS_PER_PAGE
            data.update({"s": str(offset), "dc": str(offset + 1)})
        return PageRequest(
            url=DDG_HTML_URL,
            method="POST",
            data=data,
            headers={"Referer": "https://html.duckduckgo.com/"},
        )

    def parse_results(self, html: str) -> list[SearchResult]:
        soup = make_soup(html)
        results: list[SearchResult] = []

        for element in soup.select(".result__body"):
            if element.find_parent(class_="result--ad") is not None:
                continue

            link_el = element.select_one(".result__a")
            if link_el is None:
                continue

            url = resolve_redirect(link_el.get("href") or "")
            title = clean_text(link_el)
            if not url.startswith("http") or not title:
                continue

            results.append(
                SearchResult(
                    title=title,
                    url=url,
                    description=clean_text(element.select_one(".result__snippet")),
                    source=clean_text(element.select_one(".result__url")),
                    engine=self.name,
                )
            )

        logger.debug(f"duckduckgo: parsed {len(results)} results")
        return results
