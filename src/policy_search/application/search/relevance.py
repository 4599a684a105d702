"""
Relevance Scorer - additive policy relevance score (0-100).

Scoring rules:
    +50  government source (hostname / description domain / source marker)
    +10  per distinct policy keyword in the title, capped at +30
    +10  description contains a policy keyword
    +10  source contains a government-institution marker
    clamp to 100

Pure functions, no I/O. Results are reproducible for a fixed rule table.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlparse

from policy_search.domain.entities import ScoredResult

from .policy_rules import (
    DESCRIPTION_KEYWORD_POINTS,
    GOVERNMENT_DOMAINS,
    GOVERNMENT_POINTS,
    GOVERNMENT_SOURCE_MARKERS,
    INSTITUTION_SOURCE_MARKERS,
    INSTITUTION_SOURCE_POINTS,
    MAX_SCORE,
    POLICY_KEYWORDS,
    TITLE_KEYWORD_CAP,
    TITLE_KEYWORD_POINTS,
)

if TYPE_CHECKING:
    from policy_search.domain.entities import SearchResult


def is_government_site(url: str, description: str = "", source: str = "") -> bool:
    """
    Classify a result as coming from a government publisher.

    Checks the URL hostname first, then whitelisted domains quoted in the
    description (redirect links from Baidu hide the real host), then the
    source label. A URL that cannot be parsed is never a government site.
    """
    try:
        hostname = (urlparse(url).hostname or "").lower()
    except ValueError:
        return False

    if any(domain in hostname for domain in GOVERNMENT_DOMAINS):
        return True

    if description and any(domain in description for domain in GOVERNMENT_DOMAINS):
        return True

    return bool(source) and any(marker in source for marker in GOVERNMENT_SOURCE_MARKERS)


def count_title_keywords(title: str) -> int:
    """Number of distinct policy keywords found in *title*."""
    return sum(1 for keyword in POLICY_KEYWORDS if keyword in title)


def calculate_policy_score(result: SearchResult) -> int:
    """Compute the policy relevance score of one result."""
    score = 0

    if is_government_site(result.url, result.description, result.source):
        score += GOVERNMENT_POINTS

    score += min(count_title_keywords(result.title) * TITLE_KEYWORD_POINTS, TITLE_KEYWORD_CAP)

    if result.description and any(keyword in result.description for keyword in POLICY_KEYWORDS):
        score += DESCRIPTION_KEYWORD_POINTS

    if result.source and any(marker in result.source for marker in INSTITUTION_SOURCE_MARKERS):
        score += INSTITUTION_SOURCE_POINTS

    return min(score, MAX_SCORE)


def score_results(results: list[SearchResult]) -> list[ScoredResult]:
    """Attach a policy score to every result, preserving order."""
    return [ScoredResult.from_result(r, calculate_policy_score(r)) for r in results]
