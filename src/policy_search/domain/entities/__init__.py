"""
Domain Entities

Pure value objects shared by the application and infrastructure layers.
"""

from __future__ import annotations

from .request import (
    DEFAULT_LIMIT,
    DEFAULT_MIN_SCORE,
    MAX_LIMIT,
    POLICY_ENGINES,
    DateRange,
    EngineName,
    SearchRequest,
)
from .result import ScoredResult, SearchResult

__all__ = [
    "SearchResult",
    "ScoredResult",
    "SearchRequest",
    "DateRange",
    "EngineName",
    "POLICY_ENGINES",
    "MAX_LIMIT",
    "DEFAULT_LIMIT",
    "DEFAULT_MIN_SCORE",
]
