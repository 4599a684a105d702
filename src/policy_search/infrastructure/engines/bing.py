"""
Bing web search adapter (HTML scraping, no API key).

Pages via ``first`` (1-based result offset, 10 per page). Bing handles the
``site:`` / ``filetype:`` operators well, so it is the default engine of the
advanced policy search.
"""

from __future__ import annotations

import logging

from policy_search.domain.entities import EngineName, SearchResult

from .base_client import BaseEngineClient, PageRequest, clean_text, extract_publish_date, make_soup

logger = logging.getLogger(__name__)

BING_SEARCH_URL = "https://www.bing.com/search"
RESULTS_PER_PAGE = 10


class BingEngine(BaseEngineClient):
    """
    Bing search adapter.

    Usage:
        async with BingEngine() as engine:
            results = await engine.search("人工智能 site:miit.gov.cn", limit=10)
    """

    name = EngineName.BING.value

    def _build_request(self, query: str, page: int) -> PageRequest:
        return PageRequest(
            url=BING_SEARCH_URL,
            params={"q": query, "first": str(1 + page * RESULTS_PER_PAGE)},
            headers={"Referer": "https://www.bing.com/"},
        )

    def parse_results(self, html: str) -> list[SearchResult]:
        soup = make_soup(html)
        results: list[SearchResult] = []

        for element in soup.select("#b_content #b_results > *"):
            title_el = element.find("h2")
            link_el = element.find("a")
            if title_el is None or link_el is None:
                continue

            url = link_el.get("href") or ""
            title = clean_text(title_el)
            if not url.startswith("http") or not title:
                continue

            snippet_el = element.find("p")
            source_el = element.select_one(".b_tpcn")
            caption = " ".join(clean_text(el) for el in element.select(".b_caption, .b_attribution"))

            results.append(
                SearchResult(
                    title=title,
                    url=url,
                    description=clean_text(snippet_el),
                    source=clean_text(source_el),
                    engine=self.name,
                    publish_date=extract_publish_date(caption),
                )
            )

        logger.debug(f"bing: parsed {len(results)} results")
        return results
