"""
Application DI Container (dependency-injector).

Owns the engine adapters (one httpx client each) and the search service.

Usage::

    from policy_search.container import ApplicationContainer

    container = ApplicationContainer()
    container.config.from_dict({
        "timeout": 10.0,
        "proxy_url": None,
        "advanced_engine": "bing",
    })

    service = container.search_service()

    # In tests, override any provider:
    container.engine_registry.override(providers.Object(fake_registry))
"""

from __future__ import annotations

import logging

from dependency_injector import containers, providers

logger = logging.getLogger(__name__)


def _create_engine_registry(timeout: float | None, proxy_url: str | None) -> object:
    """Lazy factory for the EngineRegistry (avoids importing httpx/bs4 at import time)."""
    from policy_search.infrastructure.engines import create_engine_registry

    return create_engine_registry(timeout=timeout or 10.0, proxy=proxy_url or None)


def _create_search_service(registry: object, advanced_engine: str | None) -> object:
    """Lazy factory for PolicySearchService."""
    from policy_search.application.search import PolicySearchService

    return PolicySearchService(registry, advanced_engine=advanced_engine or "bing")  # type: ignore[arg-type]


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for Policy Search MCP.

    - ``engine_registry``: Baidu / Bing / DuckDuckGo adapters
    - ``search_service``: query building, fan-out, scoring and ranking
    """

    config = providers.Configuration()

    engine_registry = providers.Singleton(
        _create_engine_registry,
        timeout=config.timeout,
        proxy_url=config.proxy_url,
    )

    search_service = providers.Singleton(
        _create_search_service,
        registry=engine_registry,
        advanced_engine=config.advanced_engine,
    )


__all__ = ["ApplicationContainer"]
