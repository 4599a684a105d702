"""
Aggregator - partial-failure-tolerant multi-engine fan-out.

One query is sent to every selected engine at the same time; the call
returns once every engine has settled. A failing or unknown engine
contributes an empty list and a WARNING, never an error. Results are
concatenated in the order the engines were requested.

    query ──┬── baidu.search(q, n1) ──┐
            ├── bing.search(q, n2) ───┼── flatten (engine order)
            └── xxx (unknown → [])  ──┘
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from policy_search.shared.async_utils import empty_on_failure, gather_settled
from policy_search.shared.exceptions import AggregateFailureError, UnsupportedEngineError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from policy_search.domain.entities import SearchResult

    from .engine_registry import EngineRegistry, SearchEngine

logger = logging.getLogger(__name__)

# Over-fetch factor for the policy path, compensates for post-filter attrition
OVERFETCH_FACTOR = 2


def distribute_limit(total_limit: int, engine_count: int) -> list[int]:
    """
    Split *total_limit* across engines; the remainder goes to the first ones.

    >>> distribute_limit(10, 3)
    [4, 3, 3]
    """
    if engine_count <= 0:
        return []
    base, remainder = divmod(total_limit, engine_count)
    return [base + (1 if i < remainder else 0) for i in range(engine_count)]


def overfetch_limit(limit: int, engine_count: int) -> int:
    """Per-engine request size for the policy path: ceil(2 * limit / engines)."""
    if engine_count <= 0:
        return 0
    return math.ceil(limit * OVERFETCH_FACTOR / engine_count)


@dataclass
class EngineOutcome:
    """What one engine contributed to an aggregation."""

    engine: str
    requested: int
    results: list[SearchResult] = field(default_factory=list)
    supported: bool = True


class Aggregator:
    """Fan a query out to registered engines and collect what comes back."""

    def __init__(self, registry: EngineRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> EngineRegistry:
        return self._registry

    async def fan_out(
        self,
        query: str,
        engines: Sequence[str],
        limits: Sequence[int],
    ) -> list[EngineOutcome]:
        """
        Dispatch one concurrent call per engine and wait for all of them.

        Args:
            query: Query string, already rewritten
            engines: Engine identifiers, in output order
            limits: Requested result count per engine (same length as engines)

        Raises:
            AggregateFailureError: The fan-out itself could not be completed
        """
        outcomes: list[EngineOutcome] = []
        calls = []
        for engine_name, engine_limit in zip(engines, limits, strict=True):
            outcome = EngineOutcome(engine=engine_name, requested=engine_limit)
            outcomes.append(outcome)

            engine = self._registry.get(engine_name)
            if engine is None:
                outcome.supported = False
                logger.warning(str(UnsupportedEngineError(engine_name, self._registry.names())))
                calls.append(_empty())
                continue

            logger.debug(f"Dispatching {engine_name} (limit={engine_limit})")
            calls.append(empty_on_failure(_search(engine, query, engine_limit), label=engine_name))

        try:
            settled = await gather_settled(*calls)
        except Exception as e:
            raise AggregateFailureError(f"Search fan-out failed: {e}") from e

        for outcome, results in zip(outcomes, settled, strict=True):
            outcome.results = list(results)
            logger.info(f"  ✓ {outcome.engine}: {len(outcome.results)} results")

        return outcomes

    async def aggregate(
        self,
        query: str,
        engines: Sequence[str],
        per_engine_limit: int | Sequence[int],
    ) -> list[SearchResult]:
        """
        Fan out and flatten in engine order.

        *per_engine_limit* is either one size for every engine or an explicit
        list (see :func:`distribute_limit`). No truncation happens here.
        """
        if isinstance(per_engine_limit, int):
            limits = [per_engine_limit] * len(engines)
        else:
            limits = list(per_engine_limit)

        outcomes = await self.fan_out(query, engines, limits)
        combined = [result for outcome in outcomes for result in outcome.results]
        logger.info(f"📊 Combined results: {len(combined)}")
        return combined


async def _search(engine: SearchEngine, query: str, limit: int) -> list[SearchResult]:
    return list(await engine.search(query, limit))


async def _empty() -> list[SearchResult]:
    return []
