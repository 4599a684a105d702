"""
Domain layer - pure entities with no I/O.
"""

from __future__ import annotations

from .entities import DateRange, EngineName, ScoredResult, SearchRequest, SearchResult

__all__ = ["DateRange", "EngineName", "SearchResult", "ScoredResult", "SearchRequest"]
