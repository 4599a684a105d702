"""
Tool Registry - central registration of MCP tools.

Usage:
    from .tool_registry import register_all_mcp_tools

    stats = register_all_mcp_tools(mcp, service, default_engine="bing")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mcp.server.fastmcp import FastMCP

    from policy_search.application.search import PolicySearchService

logger = logging.getLogger(__name__)


# ============================================================================
# Registration
# ============================================================================


def register_all_mcp_tools(
    mcp: FastMCP,
    service: PolicySearchService,
    default_engine: str = "bing",
    allowed_engines: Sequence[str] = (),
) -> dict[str, int]:
    """
    Register all MCP tools.

    Args:
        mcp: FastMCP server instance
        service: PolicySearchService instance
        default_engine: Fallback engine of the generic search tool
        allowed_engines: Allow list for the generic search tool (empty = all)

    Returns:
        Dict with category names and tool counts
    """
    from .tools import register_policy_tools, register_search_tools

    stats: dict[str, int] = {}

    logger.info("Registering search tools...")
    search_name = register_search_tools(mcp, service, default_engine, allowed_engines)
    stats["search"] = 1

    logger.info("Registering policy tools...")
    policy_names = register_policy_tools(mcp, service)
    stats["policy"] = len(policy_names)

    logger.info(f"Registered tools: {', '.join([search_name, *policy_names])}")
    return stats


__all__ = ["register_all_mcp_tools"]
