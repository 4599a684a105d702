"""
Policy Search MCP Server

A standalone Model Context Protocol server for web and government policy
document search across Baidu, Bing and DuckDuckGo.

Architecture:
- instructions.py: SERVER_INSTRUCTIONS for AI agents
- tool_registry.py: Centralized tool registration
- tools/: Tool implementations (generic search, policy search)
- container: DI container (dependency-injector) for engine/service lifecycle
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import TYPE_CHECKING, Any, cast

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from policy_search.config import Settings
from policy_search.container import ApplicationContainer
from policy_search.shared.exceptions import ConfigurationError

from .instructions import SERVER_INSTRUCTIONS
from .tool_registry import register_all_mcp_tools

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from policy_search.application.search import EngineRegistry, PolicySearchService

logger = logging.getLogger(__name__)

TRANSPORTS = ("stdio", "sse", "streamable-http")
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

# ── Module-level DI container ──────────────────────────────────────────────
_container: ApplicationContainer | None = None


def get_container() -> ApplicationContainer:
    """Get the application DI container.

    Raises:
        RuntimeError: If ``create_server()`` has not been called yet.
    """
    if _container is None:
        msg = "Container not initialized. Call create_server() first."
        raise RuntimeError(msg)
    return _container


def _make_lifespan(
    container: ApplicationContainer,
) -> Callable[[FastMCP[Any]], AbstractAsyncContextManager[ApplicationContainer]]:
    """
    Create a FastMCP lifespan handler bound to *container*.

    FastMCP enters the lifespan once per client session (every SSE or
    streamable-http connection), so engine HTTP clients are closed only when
    the last open session ends. Engines rebuild their client on next use.
    """
    active_sessions = 0

    @asynccontextmanager
    async def _lifespan(server: FastMCP[Any]) -> AsyncIterator[ApplicationContainer]:
        """Session lifecycle: startup → yield → shutdown."""
        nonlocal active_sessions
        active_sessions += 1
        logger.info(f"Lifecycle: session started ({active_sessions} active)")
        try:
            yield container
        finally:
            active_sessions -= 1
            if active_sessions == 0:
                registry = cast("EngineRegistry", container.engine_registry())
                await registry.aclose()
                logger.info("Lifecycle: last session ended, engine HTTP clients closed")

    return _lifespan


def create_server(
    settings: Settings | None = None,
    name: str = "policy-search",
    disable_security: bool = False,
    json_response: bool = False,
    stateless_http: bool = False,
) -> FastMCP:
    """
    Create and configure the Policy Search MCP server.

    Args:
        settings: Server settings. Default: ``Settings.from_env()``
        name: Server name.
        disable_security: Disable DNS rebinding protection (needed for remote access).
        json_response: Use JSON responses instead of SSE.
        stateless_http: Use stateless HTTP mode.

    Returns:
        Configured FastMCP server instance.
    """
    global _container
    settings = settings or Settings.from_env()
    logger.info("Initializing Policy Search MCP Server...")

    # ── DI container ────────────────────────────────────────────────────
    _container = ApplicationContainer()
    _container.config.from_dict(settings.to_container_config())

    service = cast("PolicySearchService", _container.search_service())

    logger.info(f"Default engine: {settings.default_engine}, advanced engine: {settings.advanced_engine}")
    if settings.allowed_engines:
        logger.info(f"Allowed engines: {', '.join(settings.allowed_engines)}")
    if settings.proxy:
        logger.info(f"Using proxy: {settings.proxy}")

    # ── Transport security ──────────────────────────────────────────────
    if disable_security:
        transport_security = TransportSecuritySettings(enable_dns_rebinding_protection=False)
        logger.info("DNS rebinding protection disabled for remote access")
    else:
        transport_security = None

    # ── Create MCP server with lifespan ─────────────────────────────────
    mcp = FastMCP(
        name,
        instructions=SERVER_INSTRUCTIONS,
        transport_security=transport_security,
        json_response=json_response,
        stateless_http=stateless_http,
        lifespan=_make_lifespan(_container),
    )

    stats = register_all_mcp_tools(
        mcp=mcp,
        service=service,
        default_engine=settings.default_engine,
        allowed_engines=settings.allowed_engines,
    )
    logger.info("Tool registration complete: %s", stats)

    logger.info("Policy Search MCP Server initialized successfully")
    return mcp


def _build_parser() -> argparse.ArgumentParser:
    mode = os.environ.get("MODE", "stdio").strip().lower()
    parser = argparse.ArgumentParser(prog="policy-search-mcp", description="Run the Policy Search MCP server")
    parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default=mode if mode in TRANSPORTS else "stdio",
        help="Transport protocol (default: $MODE or stdio)",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("MCP_HOST", DEFAULT_HOST),
        help=f"HTTP host for sse/streamable-http (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("MCP_PORT", str(DEFAULT_PORT))),
        help=f"HTTP port for sse/streamable-http (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--no-security",
        action="store_true",
        help="Disable DNS rebinding protection",
    )
    return parser


def main(argv: list[str] | None = None):
    """Run the MCP server."""

    # Logs go to stderr so stdio transport stays clean
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = _build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    server = create_server(settings=settings, disable_security=args.no_security)

    if args.transport != "stdio":
        server.settings.host = args.host
        server.settings.port = args.port
        logger.info(f"Starting {args.transport} server at http://{args.host}:{args.port}")

    server.run(transport=args.transport)


if __name__ == "__main__":
    main()
