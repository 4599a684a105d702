"""
Domain Entity: SearchRequest, DateRange and engine identifiers.

Transient, request-scoped values built by the tool boundary (or a library
caller) and consumed once per aggregation call.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

MAX_LIMIT = 50
DEFAULT_LIMIT = 10
DEFAULT_MIN_SCORE = 30


class EngineName(str, Enum):
    """Identifiers of the built-in engine adapters."""

    BAIDU = "baidu"
    BING = "bing"
    DUCKDUCKGO = "duckduckgo"


POLICY_ENGINES: tuple[str, ...] = (EngineName.BAIDU.value, EngineName.BING.value)


@dataclass(frozen=True)
class DateRange:
    """Inclusive publish-date window for the advanced path."""

    start: date | None = None
    end: date | None = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None


@dataclass(frozen=True)
class SearchRequest:
    """A validated multi-engine search request."""

    query: str
    limit: int = DEFAULT_LIMIT
    engines: tuple[str, ...] = POLICY_ENGINES
