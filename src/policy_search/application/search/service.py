"""
PolicySearchService - entry points of the search core.

    keyword ─► build_policy_query ─► Aggregator (parallel engines)
            ─► calculate_policy_score (per item) ─► rank_and_filter ─► results

Three entry points:
- search():                 generic multi-engine search, limit split across engines
- search_policy():          scored, filtered, deduplicated policy search
- search_policy_advanced(): site/filetype restricted search on one engine, unscored
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from policy_search.domain.entities import (
    DEFAULT_LIMIT,
    DEFAULT_MIN_SCORE,
    MAX_LIMIT,
    POLICY_ENGINES,
    EngineName,
    SearchRequest,
)
from policy_search.shared.exceptions import EmptyQueryError, InvalidParameterError

from .aggregator import Aggregator, distribute_limit, overfetch_limit
from .query_builder import build_advanced_query, build_policy_query
from .ranking import rank_and_filter
from .relevance import score_results

if TYPE_CHECKING:
    from collections.abc import Sequence

    from policy_search.domain.entities import DateRange, ScoredResult, SearchResult

    from .engine_registry import EngineRegistry

logger = logging.getLogger(__name__)


class PolicySearchService:
    """Coordinates query building, fan-out, scoring and ranking."""

    def __init__(
        self,
        registry: EngineRegistry,
        advanced_engine: str = EngineName.BING.value,
    ) -> None:
        self._aggregator = Aggregator(registry)
        self._advanced_engine = advanced_engine

    @property
    def aggregator(self) -> Aggregator:
        return self._aggregator

    @property
    def advanced_engine(self) -> str:
        return self._advanced_engine

    # ------------------------------------------------------------------
    # Request validation
    # ------------------------------------------------------------------

    @staticmethod
    def build_request(query: str, limit: int, engines: Sequence[str]) -> SearchRequest:
        """
        Validate raw parameters into a SearchRequest.

        Raises:
            EmptyQueryError: Query is empty after trimming
            InvalidParameterError: Limit out of range or no engines
        """
        clean_query = (query or "").strip()
        if not clean_query:
            raise EmptyQueryError(query)

        if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_LIMIT:
            raise InvalidParameterError("limit", limit, f"integer between 1 and {MAX_LIMIT}")

        engine_list = tuple(engines or ())
        if not engine_list:
            raise InvalidParameterError("engines", list(engine_list), "at least one engine")

        return SearchRequest(query=clean_query, limit=limit, engines=engine_list)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    async def search(
        self,
        query: str,
        engines: Sequence[str],
        limit: int = DEFAULT_LIMIT,
    ) -> list[SearchResult]:
        """
        Generic multi-engine search.

        The limit is split across engines (remainder to the first ones), the
        outputs are concatenated in engine order and capped at ``limit``.
        """
        request = self.build_request(query, limit, engines)
        logger.info(
            f'Executing search, query: "{request.query}", engines: {", ".join(request.engines)}, '
            f"limit: {request.limit}"
        )

        limits = distribute_limit(request.limit, len(request.engines))
        results = await self._aggregator.aggregate(request.query, request.engines, limits)
        return results[: request.limit]

    async def search_policy(
        self,
        keyword: str,
        limit: int = DEFAULT_LIMIT,
        *,
        region: str | None = None,
        engines: Sequence[str] = POLICY_ENGINES,
        min_score: int = DEFAULT_MIN_SCORE,
        government_only: bool = False,
    ) -> list[ScoredResult]:
        """
        Policy document search across engines with relevance filtering.

        Args:
            keyword: Free-text keyword
            limit: Maximum results (1-50)
            region: Optional region qualifier prepended to the query
            engines: Engines to query, in priority order
            min_score: Minimum policy score (0-100)
            government_only: Keep only government-site results

        Returns:
            Annotated ScoredResult list, best score first
        """
        request = self.build_request(keyword, limit, engines)
        if isinstance(min_score, bool) or not isinstance(min_score, int) or not 0 <= min_score <= 100:
            raise InvalidParameterError("min_score", min_score, "integer between 0 and 100")

        logger.info(f'🔍 Policy search: "{request.query}"' + (f" ({region})" if region else ""))

        query = build_policy_query(request.query, region)
        logger.info(f'📝 Rewritten query: "{query}"')

        per_engine = overfetch_limit(request.limit, len(request.engines))
        logger.info(f"🔎 Engines: {', '.join(request.engines)} ({per_engine} each)")

        combined = await self._aggregator.aggregate(query, request.engines, per_engine)
        scored = score_results(combined)

        return rank_and_filter(scored, min_score, government_only, request.limit)

    async def search_policy_advanced(
        self,
        keyword: str,
        limit: int = DEFAULT_LIMIT,
        *,
        site: str | None = None,
        file_type: str | None = None,
        date_range: DateRange | None = None,
    ) -> list[SearchResult]:
        """
        Site/file-type restricted policy search on a single engine.

        Results are neither scored nor deduplicated; the restriction tokens in
        the query do the filtering.
        """
        request = self.build_request(keyword, limit, (self._advanced_engine,))

        query = build_advanced_query(request.query, site, file_type)
        logger.info(f'🎯 Advanced search: "{query}"')

        results = await self._aggregator.aggregate(query, request.engines, request.limit * 2)
        results = self._apply_date_range(results, date_range)

        return results[: request.limit]

    @staticmethod
    def _apply_date_range(results: list[SearchResult], date_range: DateRange | None) -> list[SearchResult]:
        # publish_date is free text in several formats; no comparison policy is defined yet
        if date_range is not None and not date_range.is_empty:
            logger.debug(f"Date range {date_range} accepted but not applied")
        return results
