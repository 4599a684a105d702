"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from policy_search.application.search import EngineRegistry, PolicySearchService
from policy_search.domain.entities import SearchResult

# ============================================================
# Result Fixtures
# ============================================================


def make_result(
    url: str,
    title: str = "新闻",
    description: str = "",
    source: str = "",
    engine: str = "bing",
    publish_date: str | None = None,
) -> SearchResult:
    return SearchResult(
        title=title,
        url=url,
        description=description,
        source=source,
        engine=engine,
        publish_date=publish_date,
    )


@pytest.fixture
def baidu_results():
    """Deterministic Baidu results for the 江西省 policy scenario."""
    return [
        # gov host 50 + 方案/计划 20 + description 10 + 政府 source 10 = 90
        make_result(
            "https://www.jiangxi.gov.cn/art/2024/1269.html",
            title="江西省1269行动计划实施方案",
            description="省政府印发方案",
            source="江西省人民政府",
            engine="baidu",
        ),
        # 0, filtered out
        make_result("https://travel.example.com/jx", title="江西旅游攻略", engine="baidu"),
        # 计划/通知 20 + description 10 = 30
        make_result(
            "https://news.example.com/1269",
            title="关于1269行动计划的通知",
            description="政策解读",
            engine="baidu",
        ),
    ]


@pytest.fixture
def bing_results():
    """Deterministic Bing results for the 江西省 policy scenario."""
    return [
        # same URL as Baidu's third hit but would score 80
        make_result(
            "https://news.example.com/1269",
            title="关于1269行动计划的通知",
            description="www.gov.cn 转载政策",
            engine="bing",
        ),
        # gov host 50 + 通知 10 + 发改委 source 10 = 70
        make_result(
            "https://www.ndrc.gov.cn/xxgk/1.html",
            title="发改委通知",
            source="国家发改委",
            engine="bing",
        ),
    ]


# ============================================================
# Engine Fixtures
# ============================================================


def make_engine(name: str, results: list[SearchResult] | None = None, error: Exception | None = None):
    """Stub engine adapter: AsyncMock ``search`` returning *results* or raising *error*."""
    engine = MagicMock()
    engine.name = name
    if error is not None:
        engine.search = AsyncMock(side_effect=error)
    else:
        engine.search = AsyncMock(return_value=list(results or []))
    engine.close = AsyncMock()
    return engine


@pytest.fixture
def engine_factory():
    return make_engine


@pytest.fixture
def policy_registry(baidu_results, bing_results):
    return EngineRegistry(
        [
            make_engine("baidu", baidu_results),
            make_engine("bing", bing_results),
        ]
    )


@pytest.fixture
def policy_service(policy_registry):
    return PolicySearchService(policy_registry)

