"""
Policy Search Core

Query rewriting, multi-engine aggregation, relevance scoring and ranking.

Architecture:
    keyword
        │
        ▼
    ┌──────────────────┐
    │   QueryBuilder   │  ← region prefix, policy qualifier, site:/filetype:
    └────────┬─────────┘
             │
    ┌────────┴────────┐
    ▼        ▼        ▼
  Baidu     Bing    DuckDuckGo   ← Aggregator (parallel, failures → [])
    │        │        │
    └────────┴────────┘
             │
             ▼
    ┌──────────────────┐
    │ RelevanceScorer  │  ← additive 0-100 policy score
    └────────┬─────────┘
             ▼
    ┌──────────────────┐
    │  rank_and_filter │  ← threshold, gov-only, URL dedup, sort, annotate
    └────────┬─────────┘
             ▼
    ScoredResult[]
"""

from __future__ import annotations

from .aggregator import (
    OVERFETCH_FACTOR,
    Aggregator,
    EngineOutcome,
    distribute_limit,
    overfetch_limit,
)
from .engine_registry import EngineRegistry, SearchEngine
from .query_builder import build_advanced_query, build_policy_query, contains_policy_keyword
from .ranking import annotate, dedupe_by_url, rank_and_filter
from .relevance import (
    calculate_policy_score,
    count_title_keywords,
    is_government_site,
    score_results,
)
from .service import PolicySearchService

__all__ = [
    # Query building
    "build_policy_query",
    "build_advanced_query",
    "contains_policy_keyword",
    # Aggregation
    "Aggregator",
    "EngineOutcome",
    "EngineRegistry",
    "SearchEngine",
    "distribute_limit",
    "overfetch_limit",
    "OVERFETCH_FACTOR",
    # Scoring
    "calculate_policy_score",
    "count_title_keywords",
    "is_government_site",
    "score_results",
    # Ranking
    "rank_and_filter",
    "dedupe_by_url",
    "annotate",
    # Service
    "PolicySearchService",
]
