"""
Search Engine Adapters

HTML-scraping adapters, one per engine, each implementing
``search(query, limit) -> list[SearchResult]``:

    ┌──────────────────────────────────────────────┐
    │                 EngineRegistry               │
    │  ┌──────────┬──────────┬──────────────────┐  │
    │  │  Baidu   │   Bing   │    DuckDuckGo    │  │
    │  │ (pn=10n) │(first=…) │ (html endpoint)  │  │
    │  └──────────┴──────────┴──────────────────┘  │
    └──────────────────────────────────────────────┘
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from policy_search.application.search.engine_registry import EngineRegistry

from .baidu import BaiduEngine
from .base_client import BaseEngineClient, PageRequest, clean_text, extract_publish_date
from .bing import BingEngine
from .duckduckgo import DuckDuckGoEngine

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

ENGINE_CLASSES: dict[str, type[BaseEngineClient]] = {
    BaiduEngine.name: BaiduEngine,
    BingEngine.name: BingEngine,
    DuckDuckGoEngine.name: DuckDuckGoEngine,
}

SUPPORTED_ENGINES: tuple[str, ...] = tuple(ENGINE_CLASSES)


def create_engine_registry(
    engines: Iterable[str] | None = None,
    timeout: float = 10.0,
    proxy: str | None = None,
) -> EngineRegistry:
    """
    Build a registry with one adapter per requested engine.

    Args:
        engines: Engine identifiers to register (default: all supported)
        timeout: Per-request timeout in seconds
        proxy: Optional proxy URL shared by every adapter
    """
    registry = EngineRegistry()
    for name in engines or SUPPORTED_ENGINES:
        engine_cls = ENGINE_CLASSES.get(name)
        if engine_cls is None:
            logger.warning(f"Skipping unknown engine: {name}")
            continue
        registry.register(engine_cls(timeout=timeout, proxy=proxy))
    logger.info(f"Engines registered: {', '.join(registry.names())}")
    return registry


__all__ = [
    "BaseEngineClient",
    "PageRequest",
    "BaiduEngine",
    "BingEngine",
    "DuckDuckGoEngine",
    "ENGINE_CLASSES",
    "SUPPORTED_ENGINES",
    "clean_text",
    "create_engine_registry",
    "extract_publish_date",
]
