"""
Policy Search MCP Tools

- searchPolicy: scored, deduplicated policy document search across
  Baidu and Bing, with region qualifier and government-only filter
- searchPolicyAdvanced: site:/filetype: restricted search on one engine
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from policy_search.domain.entities import DEFAULT_LIMIT, DEFAULT_MIN_SCORE, MAX_LIMIT, POLICY_ENGINES
from policy_search.shared.exceptions import InvalidParameterError, PolicySearchError

from ._common import InputNormalizer, ResponseFormatter, get_tool_name

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from policy_search.application.search import PolicySearchService

logger = logging.getLogger(__name__)

POLICY_TOOL_DEFAULT_NAME = "searchPolicy"
POLICY_TOOL_ENV = "MCP_TOOL_SEARCH_POLICY_NAME"
ADVANCED_TOOL_DEFAULT_NAME = "searchPolicyAdvanced"
ADVANCED_TOOL_ENV = "MCP_TOOL_SEARCH_POLICY_ADVANCED_NAME"


def _policy_engines(engines: list[str] | str | None) -> list[str]:
    selected = InputNormalizer.normalize_engines(engines) or list(POLICY_ENGINES)
    unsupported = [e for e in selected if e not in POLICY_ENGINES]
    if unsupported:
        raise InvalidParameterError("engines", unsupported, f"subset of {list(POLICY_ENGINES)}")
    return selected


def register_policy_tools(mcp: FastMCP, service: PolicySearchService) -> list[str]:
    """Register the two policy search tools. Returns the registered tool names."""
    policy_tool_name = get_tool_name(POLICY_TOOL_ENV, POLICY_TOOL_DEFAULT_NAME)
    advanced_tool_name = get_tool_name(ADVANCED_TOOL_ENV, ADVANCED_TOOL_DEFAULT_NAME)

    @mcp.tool(
        name=policy_tool_name,
        description=(
            "Search for government policy documents using multiple search engines "
            "with intelligent filtering"
        ),
    )
    async def search_policy(
        keyword: str,
        limit: int = DEFAULT_LIMIT,
        region: str | None = None,
        engines: list[str] | None = None,
        minScore: int = DEFAULT_MIN_SCORE,  # noqa: N803
        governmentOnly: bool = False,  # noqa: N803
    ) -> str:
        """
        Search for policy documents.

        Args:
            keyword: Policy topic, e.g. "产业链" or "1269行动计划"
            limit: Maximum results, 1-50 (default 10)
            region: Region filter, e.g. "江西省", "北京市"
            engines: Subset of ["baidu", "bing"] (default both)
            minScore: Minimum policy relevance score, 0-100 (default 30)
            governmentOnly: Only return results from government websites
        """
        try:
            limit = InputNormalizer.normalize_int(limit, "limit", 1, MAX_LIMIT)
            min_score = InputNormalizer.normalize_int(minScore, "minScore", 0, 100)
            government_only = InputNormalizer.normalize_bool(governmentOnly)
            region = InputNormalizer.normalize_optional_str(region)
            selected = _policy_engines(engines)

            logger.info(f'Searching for policy: "{keyword}"' + (f" in {region}" if region else ""))

            results = await service.search_policy(
                keyword,
                limit,
                region=region,
                engines=selected,
                min_score=min_score,
                government_only=government_only,
            )

            return ResponseFormatter.json(
                {
                    "query": keyword,
                    "region": region or "all",
                    "engines": selected,
                    "filters": {"minScore": min_score, "governmentOnly": government_only},
                    "totalResults": len(results),
                    "results": [r.to_dict() for r in results],
                }
            )
        except PolicySearchError as e:
            logger.warning(f"Policy search rejected: {e.to_dict()}")
            raise ResponseFormatter.error("Policy search", e) from e
        except Exception as e:
            logger.exception(f"Policy search tool execution failed: {e}")
            raise ResponseFormatter.error("Policy search", e) from e

    @mcp.tool(
        name=advanced_tool_name,
        description="Advanced search for policy documents with site and file type filters",
    )
    async def search_policy_advanced(
        keyword: str,
        limit: int = DEFAULT_LIMIT,
        site: str | None = None,
        fileType: str | None = None,  # noqa: N803
    ) -> str:
        """
        Advanced policy search with site/file-type restriction.

        Args:
            keyword: Policy topic
            limit: Maximum results, 1-50 (default 10)
            site: Website domain, e.g. "www.gov.cn", "miit.gov.cn", "jiangxi.gov.cn"
            fileType: File type, e.g. "pdf", "doc", "docx"
        """
        try:
            limit = InputNormalizer.normalize_int(limit, "limit", 1, MAX_LIMIT)
            site = InputNormalizer.normalize_optional_str(site)
            file_type = InputNormalizer.normalize_optional_str(fileType)

            logger.info(
                f'Advanced policy search: "{keyword}"'
                + (f" site:{site}" if site else "")
                + (f" filetype:{file_type}" if file_type else "")
            )

            results = await service.search_policy_advanced(keyword, limit, site=site, file_type=file_type)

            return ResponseFormatter.json(
                {
                    "query": keyword,
                    "filters": {"site": site, "fileType": file_type},
                    "totalResults": len(results),
                    "results": [r.to_dict() for r in results],
                }
            )
        except PolicySearchError as e:
            logger.warning(f"Advanced policy search rejected: {e.to_dict()}")
            raise ResponseFormatter.error("Advanced policy search", e) from e
        except Exception as e:
            logger.exception(f"Advanced policy search tool execution failed: {e}")
            raise ResponseFormatter.error("Advanced policy search", e) from e

    return [policy_tool_name, advanced_tool_name]


__all__ = ["register_policy_tools"]
