"""
Baidu web search adapter (HTML scraping, no API key).

Pages via ``pn`` (result offset, 10 per page). Result links are Baidu
redirect URLs; the real host often only shows up in the snippet, which the
relevance scorer takes into account.
"""

from __future__ import annotations

import logging
import re
import secrets

from policy_search.domain.entities import EngineName, SearchResult

from .base_client import (
    DATE_PATTERNS,
    BaseEngineClient,
    PageRequest,
    clean_text,
    extract_publish_date,
    make_soup,
)

logger = logging.getLogger(__name__)

BAIDU_SEARCH_URL = "https://www.baidu.com/s"
RESULTS_PER_PAGE = 10

# Baidu captions only use the CJK and ISO date forms
_DATE_PATTERNS = DATE_PATTERNS[:2]


class BaiduEngine(BaseEngineClient):
    """
    Baidu search adapter.

    Usage:
        async with BaiduEngine() as engine:
            results = await engine.search("江西省 产业链 政策", limit=10)
    """

    name = EngineName.BAIDU.value

    def _build_request(self, query: str, page: int) -> PageRequest:
        return PageRequest(
            url=BAIDU_SEARCH_URL,
            params={"wd": query, "pn": str(page * RESULTS_PER_PAGE), "ie": "utf-8"},
            headers={
                "Referer": "https://www.baidu.com/",
                "Cookie": f"BAIDUID={secrets.token_hex(16).upper()}:FG=1",
            },
        )

    def parse_results(self, html: str) -> list[SearchResult]:
        soup = make_soup(html)
        container = soup.select_one("#content_left")
        if container is None:
            return []

        results: list[SearchResult] = []
        for element in container.find_all(recursive=False):
            title_el = element.find("h3")
            link_el = element.find("a")
            if title_el is None or link_el is None:
                continue

            url = link_el.get("href") or ""
            title = clean_text(title_el)
            if not url.startswith("http") or not title:
                continue

            results.append(
                SearchResult(
                    title=title,
                    url=url,
                    description=self._description(element),
                    source=clean_text(element.select_one(".cosc-source")),
                    engine=self.name,
                    publish_date=self._publish_date(element),
                )
            )

        logger.debug(f"baidu: parsed {len(results)} results")
        return results

    @staticmethod
    def _description(element) -> str:
        snippet = element.select_one(".c-font-normal.c-color-text")
        if snippet is not None and snippet.get("aria-label"):
            return snippet["aria-label"].strip()
        return clean_text(element.select_one(".cos-row"))

    @staticmethod
    def _publish_date(element) -> str | None:
        for date_el in element.select(".cos-color-text-minor, .c-color-gray, .g-c-gray"):
            text = date_el.get_text(strip=True)
            if extract_publish_date(text, _DATE_PATTERNS) is not None:
                # captions look like "2024年3月8日 -" with &nbsp; padding
                cleaned = text.replace("\xa0", "")
                return re.sub(r"\s*-\s*$", "", cleaned).strip()
        return None
