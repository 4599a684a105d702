"""
Domain Entity: SearchResult / ScoredResult

One discovered web resource, already uniform across engines.
Pure domain entities; engine-specific parsing lives in the
infrastructure layer adapters.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SearchResult:
    """
    Normalized search hit.

    Created once by an engine adapter from one parsed page element.
    ``url`` always starts with ``http``; adapters drop anything else.
    ``publish_date`` is free text and not normalized across engines
    (e.g. "2024年3月8日", "2024-03-08").
    """

    title: str
    url: str
    description: str = ""
    source: str = ""
    engine: str = ""
    publish_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the tool wire shape (camelCase, absent date omitted)."""
        data: dict[str, Any] = {
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "source": self.source,
            "engine": self.engine,
        }
        if self.publish_date:
            data["publishDate"] = self.publish_date
        return data


@dataclass(frozen=True)
class ScoredResult(SearchResult):
    """A SearchResult extended with its policy relevance score (0-100)."""

    policy_score: int = 0

    @classmethod
    def from_result(cls, result: SearchResult, score: int) -> ScoredResult:
        fields = {f.name: getattr(result, f.name) for f in dataclasses.fields(SearchResult)}
        return cls(**fields, policy_score=score)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["policyScore"] = self.policy_score
        return data
