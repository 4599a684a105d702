"""
Policy Search MCP Server

Usage as standalone server:
    python -m policy_search.presentation.mcp_server

Or in mcp.json:
    {
        "servers": {
            "policy-search": {
                "type": "stdio",
                "command": "policy-search-mcp"
            }
        }
    }

Usage for integration:
    from policy_search.presentation.mcp_server import create_server, register_all_tools

    # Option 1: Create standalone server
    server = create_server()
    server.run()

    # Option 2: Register tools to an existing server
    register_all_tools(your_mcp_server, service)
"""

from __future__ import annotations

from .server import create_server, main
from .tools import register_all_tools

__all__ = ["create_server", "main", "register_all_tools"]
