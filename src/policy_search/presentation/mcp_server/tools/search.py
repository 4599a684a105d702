"""
Generic web search tool.

- search: multi-engine search, the limit is split across engines and the
  outputs are concatenated in engine order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from policy_search.domain.entities import DEFAULT_LIMIT, MAX_LIMIT, EngineName
from policy_search.shared.exceptions import PolicySearchError

from ._common import InputNormalizer, ResponseFormatter, get_tool_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mcp.server.fastmcp import FastMCP

    from policy_search.application.search import PolicySearchService

logger = logging.getLogger(__name__)

SEARCH_TOOL_DEFAULT_NAME = "search"
SEARCH_TOOL_ENV = "MCP_TOOL_SEARCH_NAME"

_DISPLAY_NAMES = {
    EngineName.BAIDU.value: "Baidu",
    EngineName.BING.value: "Bing",
    EngineName.DUCKDUCKGO.value: "DuckDuckGo",
}


def describe_search_tool(allowed_engines: Sequence[str]) -> str:
    """Tool description listing the engines the caller may use."""
    if not allowed_engines:
        names = ", ".join(_DISPLAY_NAMES.values())
        return f"Search the web using multiple engines (e.g., {names}) with no API key required"
    names = ", ".join(_DISPLAY_NAMES.get(e, e.capitalize()) for e in allowed_engines)
    return f"Search the web using these engines: {names} (no API key required)"


def resolve_engines(
    requested: Sequence[str],
    allowed_engines: Sequence[str],
    default_engine: str,
) -> list[str]:
    """
    Restrict *requested* to the allow list.

    Falls back to ``[default_engine]`` when nothing is requested or nothing
    survives the allow list.
    """
    engines = list(requested) or [default_engine]
    if allowed_engines:
        engines = [e for e in engines if e in allowed_engines]
        if not engines:
            logger.info(f"No requested engine is allowed, using default: {default_engine}")
            engines = [default_engine]
    return engines


def register_search_tools(
    mcp: FastMCP,
    service: PolicySearchService,
    default_engine: str = EngineName.BING.value,
    allowed_engines: Sequence[str] = (),
) -> str:
    """Register the generic search tool. Returns the registered tool name."""
    tool_name = get_tool_name(SEARCH_TOOL_ENV, SEARCH_TOOL_DEFAULT_NAME)
    allowed = tuple(allowed_engines)

    @mcp.tool(name=tool_name, description=describe_search_tool(allowed))
    async def search(
        query: str,
        limit: int = DEFAULT_LIMIT,
        engines: list[str] | None = None,
    ) -> str:
        """
        Search the web across engines.

        Args:
            query: Search query (must not be empty)
            limit: Total number of results, 1-50 (default 10)
            engines: Engines to use, e.g. ["bing", "duckduckgo"]
        """
        try:
            limit = InputNormalizer.normalize_int(limit, "limit", 1, MAX_LIMIT)
            selected = resolve_engines(
                InputNormalizer.normalize_engines(engines),
                allowed,
                default_engine,
            )
            logger.info(f'Searching for "{query}" using engines: {", ".join(selected)}')

            results = await service.search(query, selected, limit)

            return ResponseFormatter.json(
                {
                    "query": query.strip(),
                    "engines": selected,
                    "totalResults": len(results),
                    "results": [r.to_dict() for r in results],
                }
            )
        except PolicySearchError as e:
            logger.warning(f"Search rejected: {e.to_dict()}")
            raise ResponseFormatter.error("Search", e) from e
        except Exception as e:
            logger.exception(f"Search tool execution failed: {e}")
            raise ResponseFormatter.error("Search", e) from e

    return tool_name


__all__ = ["describe_search_tool", "register_search_tools", "resolve_engines"]
