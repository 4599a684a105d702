"""
Ranking & Filter Pipeline for scored policy results.

Steps, in order (the order decides which duplicate survives):
    1. drop results below ``min_score``
    2. optionally drop non-government results
    3. dedupe by URL, first occurrence wins (before sorting)
    4. stable sort by score, descending
    5. truncate to ``limit``
    6. annotate description/engine with the score and the policy tag
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from .policy_rules import POLICY_ENGINE_SUFFIX, SCORE_LABEL_TEMPLATE
from .relevance import is_government_site

if TYPE_CHECKING:
    from collections.abc import Iterable

    from policy_search.domain.entities import ScoredResult

logger = logging.getLogger(__name__)


def dedupe_by_url(results: Iterable[ScoredResult]) -> list[ScoredResult]:
    """Keep the first result for each distinct URL, preserving order."""
    seen: set[str] = set()
    unique: list[ScoredResult] = []
    for result in results:
        if result.url in seen:
            continue
        seen.add(result.url)
        unique.append(result)
    return unique


def annotate(result: ScoredResult) -> ScoredResult:
    """
    Prefix the description with the score label and tag the engine.

    Already-annotated results are returned unchanged.
    """
    label = SCORE_LABEL_TEMPLATE.format(score=result.policy_score)
    description = result.description
    if not description.startswith(label):
        description = f"{label}{description}"

    engine = result.engine
    if not engine.endswith(POLICY_ENGINE_SUFFIX):
        engine = f"{engine}{POLICY_ENGINE_SUFFIX}"

    if description == result.description and engine == result.engine:
        return result
    return dataclasses.replace(result, description=description, engine=engine)


def rank_and_filter(
    scored: list[ScoredResult],
    min_score: int,
    government_only: bool,
    limit: int,
) -> list[ScoredResult]:
    """
    Filter, dedupe, rank, truncate and annotate scored results.

    Args:
        scored: Scored results in engine dispatch order
        min_score: Minimum policy score to keep
        government_only: Keep only government-site results
        limit: Maximum number of results returned

    Returns:
        New list of annotated results, best score first
    """
    kept = [r for r in scored if r.policy_score >= min_score]

    if government_only:
        kept = [r for r in kept if is_government_site(r.url, r.description, r.source)]

    kept = dedupe_by_url(kept)
    kept = sorted(kept, key=lambda r: r.policy_score, reverse=True)

    logger.info(f"✅ After filtering: {len(kept)} policy-related results")

    return [annotate(r) for r in kept[:limit]]
