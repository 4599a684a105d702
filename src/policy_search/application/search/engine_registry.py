"""
Engine Registry - mapping from engine identifier to adapter.

Every engine exposes one capability: ``search(query, limit)``. The aggregator
only ever talks to this registry, so adding an engine means registering one
more adapter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from policy_search.domain.entities import SearchResult

logger = logging.getLogger(__name__)


@runtime_checkable
class SearchEngine(Protocol):
    """Capability implemented by every engine adapter. May raise."""

    name: str

    async def search(self, query: str, limit: int) -> list[SearchResult]: ...


class EngineRegistry:
    """Ordered registry of engine adapters."""

    def __init__(self, engines: list[SearchEngine] | None = None) -> None:
        self._engines: dict[str, SearchEngine] = {}
        for engine in engines or []:
            self.register(engine)

    def register(self, engine: SearchEngine) -> None:
        if engine.name in self._engines:
            logger.warning(f"Replacing registered engine: {engine.name}")
        self._engines[engine.name] = engine

    def get(self, name: str) -> SearchEngine | None:
        return self._engines.get(name)

    def names(self) -> list[str]:
        return list(self._engines)

    def __contains__(self, name: object) -> bool:
        return name in self._engines

    def __iter__(self) -> Iterator[SearchEngine]:
        return iter(self._engines.values())

    def __len__(self) -> int:
        return len(self._engines)

    async def aclose(self) -> None:
        """Close adapters that hold network resources."""
        for engine in self._engines.values():
            close = getattr(engine, "close", None)
            if close is None:
                continue
            try:
                await close()
            except Exception as e:
                logger.warning(f"Failed to close engine {engine.name}: {e}")
