"""Tests for PolicySearchService entry points."""

from __future__ import annotations

from datetime import date

import pytest
from conftest import make_engine, make_result

from policy_search.application.search import EngineRegistry, PolicySearchService
from policy_search.domain.entities import DateRange
from policy_search.shared.exceptions import EmptyQueryError, EngineError, InvalidParameterError

# ============================================================================
# searchPolicy
# ============================================================================


class TestSearchPolicy:
    async def test_jiangxi_scenario(self, policy_service, policy_registry):
        results = await policy_service.search_policy(
            "江西省1269行动计划",
            10,
            region="江西省",
            engines=["baidu", "bing"],
            min_score=30,
            government_only=False,
        )

        expected_query = "江西省 江西省1269行动计划"
        policy_registry.get("baidu").search.assert_awaited_once_with(expected_query, 10)
        policy_registry.get("bing").search.assert_awaited_once_with(expected_query, 10)

        assert [r.policy_score for r in results] == [90, 70, 30]
        assert [r.url for r in results] == [
            "https://www.jiangxi.gov.cn/art/2024/1269.html",
            "https://www.ndrc.gov.cn/xxgk/1.html",
            "https://news.example.com/1269",
        ]
        assert all(r.engine.endswith("-policy") for r in results)
        # the duplicate URL keeps Baidu's copy
        assert results[2].engine == "baidu-policy"
        assert results[0].description.startswith("[政策相关度: 90分] ")

    async def test_qualifier_appended(self, policy_service, policy_registry):
        await policy_service.search_policy("产业链", region="江西省")

        policy_registry.get("baidu").search.assert_awaited_once_with("江西省 产业链 政策", 10)

    async def test_overfetch_single_engine(self, policy_service, policy_registry):
        await policy_service.search_policy("产业链", 7, engines=["bing"])

        policy_registry.get("bing").search.assert_awaited_once_with("产业链 政策", 14)
        policy_registry.get("baidu").search.assert_not_awaited()

    async def test_government_only(self, policy_service):
        results = await policy_service.search_policy("1269", min_score=0, government_only=True)

        # Baidu's non-government copy of the shared URL is filtered before dedup,
        # so Bing's copy (gov.cn quoted in the snippet) survives
        assert [r.policy_score for r in results] == [90, 80, 70]

    async def test_truncates_to_limit(self, policy_service):
        results = await policy_service.search_policy("1269", 1, min_score=0)

        assert len(results) == 1
        assert results[0].policy_score == 90

    async def test_one_engine_failing(self, baidu_results):
        registry = EngineRegistry(
            [make_engine("baidu", baidu_results), make_engine("bing", error=EngineError("bing", "HTTP error 403"))]
        )
        service = PolicySearchService(registry)

        results = await service.search_policy("1269")

        assert [r.policy_score for r in results] == [90, 30]

    async def test_all_engines_failing(self):
        registry = EngineRegistry(
            [
                make_engine("baidu", error=EngineError("baidu", "blocked")),
                make_engine("bing", error=EngineError("bing", "blocked")),
            ]
        )

        assert await PolicySearchService(registry).search_policy("产业链") == []

    @pytest.mark.parametrize("keyword", ["", "   "])
    async def test_empty_keyword(self, policy_service, policy_registry, keyword):
        with pytest.raises(EmptyQueryError, match="Query string cannot be empty"):
            await policy_service.search_policy(keyword)

        policy_registry.get("baidu").search.assert_not_awaited()

    @pytest.mark.parametrize("limit", [0, 51, -1])
    async def test_invalid_limit(self, policy_service, limit):
        with pytest.raises(InvalidParameterError):
            await policy_service.search_policy("产业链", limit)

    @pytest.mark.parametrize("min_score", [-1, 101])
    async def test_invalid_min_score(self, policy_service, min_score):
        with pytest.raises(InvalidParameterError):
            await policy_service.search_policy("产业链", min_score=min_score)

    async def test_no_engines(self, policy_service):
        with pytest.raises(InvalidParameterError):
            await policy_service.search_policy("产业链", engines=[])


# ============================================================================
# searchPolicyAdvanced
# ============================================================================


class TestSearchPolicyAdvanced:
    @pytest.fixture
    def bing(self):
        return make_engine("bing", [make_result(f"https://www.miit.gov.cn/{i}.pdf") for i in range(30)])

    async def test_query_and_overfetch(self, bing):
        service = PolicySearchService(EngineRegistry([bing]))

        results = await service.search_policy_advanced("人工智能", 5, site="miit.gov.cn", file_type="pdf")

        bing.search.assert_awaited_once_with("人工智能 site:miit.gov.cn filetype:pdf", 10)
        assert len(results) == 5

    async def test_results_not_scored_or_tagged(self, bing):
        service = PolicySearchService(EngineRegistry([bing]))

        results = await service.search_policy_advanced("人工智能", 3)

        assert all(r.engine == "bing" for r in results)
        assert not any(hasattr(r, "policy_score") for r in results)

    async def test_configured_engine(self):
        baidu = make_engine("baidu", [make_result("https://www.gov.cn/1")])
        service = PolicySearchService(EngineRegistry([baidu]), advanced_engine="baidu")

        results = await service.search_policy_advanced("人工智能", site="www.gov.cn")

        baidu.search.assert_awaited_once_with("人工智能 site:www.gov.cn", 20)
        assert len(results) == 1

    async def test_engine_failure_is_empty(self):
        service = PolicySearchService(EngineRegistry([make_engine("bing", error=EngineError("bing", "403"))]))

        assert await service.search_policy_advanced("人工智能") == []

    async def test_date_range_passthrough(self, bing):
        service = PolicySearchService(EngineRegistry([bing]))

        results = await service.search_policy_advanced(
            "人工智能", 4, date_range=DateRange(start=date(2024, 1, 1), end=date(2024, 12, 31))
        )

        assert len(results) == 4

    async def test_empty_keyword(self, bing):
        service = PolicySearchService(EngineRegistry([bing]))

        with pytest.raises(EmptyQueryError):
            await service.search_policy_advanced(" ")


# ============================================================================
# Generic search
# ============================================================================


class TestSearch:
    async def test_limit_distributed(self):
        engines = [
            make_engine(name, [make_result(f"https://{name}.example.com/{i}") for i in range(10)])
            for name in ("baidu", "bing", "duckduckgo")
        ]
        service = PolicySearchService(EngineRegistry(engines))

        await service.search("python", ["baidu", "bing", "duckduckgo"], 10)

        assert [e.search.await_args.args for e in engines] == [("python", 4), ("python", 3), ("python", 3)]

    async def test_capped_and_in_engine_order(self):
        baidu = make_engine("baidu", [make_result(f"https://baidu.example.com/{i}") for i in range(4)])
        bing = make_engine("bing", [make_result(f"https://bing.example.com/{i}") for i in range(4)])
        service = PolicySearchService(EngineRegistry([baidu, bing]))

        results = await service.search("python", ["baidu", "bing"], 6)

        assert len(results) == 6
        assert [r.url for r in results[:4]] == [f"https://baidu.example.com/{i}" for i in range(4)]

    async def test_query_trimmed(self):
        bing = make_engine("bing")
        service = PolicySearchService(EngineRegistry([bing]))

        await service.search("  python  ", ["bing"], 5)

        bing.search.assert_awaited_once_with("python", 5)

    async def test_empty_query(self):
        service = PolicySearchService(EngineRegistry([make_engine("bing")]))

        with pytest.raises(EmptyQueryError):
            await service.search("", ["bing"])


class TestBuildRequest:
    def test_valid(self):
        request = PolicySearchService.build_request(" 产业链 ", 20, ["baidu"])

        assert request.query == "产业链"
        assert request.limit == 20
        assert request.engines == ("baidu",)

    def test_bool_limit_rejected(self):
        with pytest.raises(InvalidParameterError):
            PolicySearchService.build_request("产业链", True, ["baidu"])
