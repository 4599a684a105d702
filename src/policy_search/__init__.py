"""
Policy Search - Web and Government Policy Document Search

Aggregates results from several public search engines (Baidu, Bing,
DuckDuckGo) without API keys, scores them for policy relevance and exposes
everything as MCP tools.

Usage:
    from policy_search import PolicySearchService
    from policy_search.infrastructure import create_engine_registry

    service = PolicySearchService(create_engine_registry())
    results = await service.search_policy("1269行动计划", region="江西省")

    for item in results:
        print(f"{item.policy_score}: {item.title} {item.url}")

Features:
    - Policy query rewriting (region prefix, 政策 qualifier)
    - Parallel multi-engine fan-out with per-engine failure isolation
    - Policy relevance scoring (0-100) with government-site detection
    - Score filter, government-only filter, URL dedup, score ranking
    - site:/filetype: restricted advanced search
"""

from .application import PolicySearchService
from .domain import (
    DateRange,
    EngineName,
    ScoredResult,
    SearchRequest,
    SearchResult,
)
from .shared import (
    AggregateFailureError,
    EmptyQueryError,
    EngineError,
    PolicySearchError,
)

__version__ = "0.1.0"

__all__ = [
    # Service
    "PolicySearchService",
    # Entities
    "SearchResult",
    "ScoredResult",
    "SearchRequest",
    "DateRange",
    "EngineName",
    # Errors
    "PolicySearchError",
    "EmptyQueryError",
    "EngineError",
    "AggregateFailureError",
]
