"""
Query Builder - rewrite a keyword into an engine-consumable query string.

Pure and deterministic; never raises.
"""

from __future__ import annotations

from .policy_rules import POLICY_KEYWORDS, POLICY_QUALIFIER


def contains_policy_keyword(text: str) -> bool:
    """Whether *text* contains any policy keyword."""
    return any(keyword in text for keyword in POLICY_KEYWORDS)


def build_policy_query(keyword: str, region: str | None = None) -> str:
    """
    Build the query used by the policy search path.

    Examples:
        >>> build_policy_query("政策")
        '政策'
        >>> build_policy_query("产业链")
        '产业链 政策'
        >>> build_policy_query("产业链", "江西省")
        '江西省 产业链 政策'
    """
    query = keyword
    if not contains_policy_keyword(keyword):
        query = f"{query} {POLICY_QUALIFIER}"

    if region:
        query = f"{region} {query}"

    return query


def build_advanced_query(
    keyword: str,
    site: str | None = None,
    file_type: str | None = None,
) -> str:
    """
    Build a site/file-type restricted query.

    Example:
        >>> build_advanced_query("人工智能", "miit.gov.cn", "pdf")
        '人工智能 site:miit.gov.cn filetype:pdf'
    """
    query = keyword
    if site:
        query += f" site:{site}"
    if file_type:
        query += f" filetype:{file_type}"
    return query
