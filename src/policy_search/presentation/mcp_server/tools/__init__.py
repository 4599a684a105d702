"""
Policy Search MCP Tools

Search (1):
- search: generic multi-engine web search

Policy (2):
- searchPolicy: scored policy document search
- searchPolicyAdvanced: site/filetype restricted policy search

Tool names can be overridden with MCP_TOOL_SEARCH_NAME,
MCP_TOOL_SEARCH_POLICY_NAME and MCP_TOOL_SEARCH_POLICY_ADVANCED_NAME.

Usage:
    from .tools import register_all_tools
    register_all_tools(mcp, service)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._common import InputNormalizer, ResponseFormatter, get_tool_name
from .policy import register_policy_tools
from .search import register_search_tools

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mcp.server.fastmcp import FastMCP

    from policy_search.application.search import PolicySearchService


def register_all_tools(
    mcp: FastMCP,
    service: PolicySearchService,
    default_engine: str = "bing",
    allowed_engines: Sequence[str] = (),
) -> list[str]:
    """Register every tool; returns the registered tool names."""
    names = [register_search_tools(mcp, service, default_engine, allowed_engines)]
    names.extend(register_policy_tools(mcp, service))
    return names


__all__ = [
    "InputNormalizer",
    "ResponseFormatter",
    "get_tool_name",
    "register_all_tools",
    "register_policy_tools",
    "register_search_tools",
]
