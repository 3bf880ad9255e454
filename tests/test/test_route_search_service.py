"""
RouteSearchService 테스트
"""

import threading

import pytest
from unittest.mock import MagicMock, patch

from app.core.exceptions import (
    EdgeSourceException,
    InvalidRouteQueryException,
    RouteNotFoundException,
    SearchCancelledException,
)
from app.services.edge_sources import InMemoryEdgeSource
from app.services.route_search_service import RouteSearchService


class BrokenEdgeSource:
    async def next_edges(self, from_station, excluded, not_before):
        raise EdgeSourceException("구간 조회에 실패했습니다: connection refused")


class TestRouteSearchService:
    """RouteSearchService 테스트 클래스"""

    @pytest.fixture
    def route_cache(self):
        cache = MagicMock()
        cache.get_cached_route.return_value = None
        cache.cache_route.return_value = True
        return cache

    @pytest.fixture
    def service(self, detour_timetable, route_cache):
        return RouteSearchService(
            edge_source=InMemoryEdgeSource(detour_timetable), route_cache=route_cache
        )

    @pytest.mark.asyncio
    async def test_search_route(self, service, route_cache):
        """탐색 결과 반환 및 캐싱"""
        result = await service.search_route("A", "C", 0)

        assert result == {
            "departure_ids": ["AD", "DC"],
            "total_cost": 200,
            "final_arrival_time": 60,
        }
        route_cache.get_cached_route.assert_called_once_with("route:A:C:0")
        route_cache.cache_route.assert_called_once()
        cache_key, cached = route_cache.cache_route.call_args[0]
        assert cache_key == "route:A:C:0"
        assert cached == result

    @pytest.mark.asyncio
    async def test_cache_hit_skips_search(self, route_cache):
        """캐시 HIT이면 Edge Source 조회 없음"""
        cached = {"departure_ids": ["X"], "total_cost": 1, "final_arrival_time": 2}
        route_cache.get_cached_route.return_value = cached
        edge_source = MagicMock()
        service = RouteSearchService(edge_source=edge_source, route_cache=route_cache)

        result = await service.search_route("A", "C", 0)

        assert result == cached
        edge_source.next_edges.assert_not_called()
        route_cache.cache_route.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found_is_not_cached(self, service, route_cache):
        """경로 없음 -> RouteNotFoundException, 캐싱 안 함"""
        with pytest.raises(RouteNotFoundException):
            await service.search_route("A", "Z", 0)

        route_cache.cache_route.assert_not_called()

    @pytest.mark.asyncio
    async def test_cache_write_failure_is_not_fatal(self, service, route_cache):
        """캐싱 실패해도 결과 반환"""
        route_cache.cache_route.return_value = False

        result = await service.search_route("A", "C", 0)

        assert result["departure_ids"] == ["AD", "DC"]

    @pytest.mark.asyncio
    async def test_without_cache(self, detour_timetable):
        """캐시 없이 동작"""
        service = RouteSearchService(edge_source=InMemoryEdgeSource(detour_timetable))

        result = await service.search_route("A", "A", 42)

        assert result == {"departure_ids": [], "total_cost": 0, "final_arrival_time": 42}

    @pytest.mark.asyncio
    async def test_invalid_query_before_cache(self, service, route_cache):
        """잘못된 입력은 캐시 조회 전에 거부"""
        with pytest.raises(InvalidRouteQueryException):
            await service.search_route("", "C", 0)

        route_cache.get_cached_route.assert_not_called()

    @pytest.mark.asyncio
    async def test_edge_source_error_propagates(self, route_cache):
        """Edge Source 오류는 경로 없음으로 바뀌지 않음"""
        service = RouteSearchService(edge_source=BrokenEdgeSource(), route_cache=route_cache)

        with pytest.raises(EdgeSourceException):
            await service.search_route("A", "C", 0)

        route_cache.cache_route.assert_not_called()

    @pytest.mark.asyncio
    async def test_timeout(self, service):
        """제한 시간 초과 -> SearchCancelledException"""
        with patch("app.services.route_search_service.find_route") as mock_find:
            mock_find.side_effect = SearchCancelledException()

            with pytest.raises(SearchCancelledException):
                await service.search_route("A", "C", 0)

    @pytest.mark.asyncio
    async def test_search_settings_are_applied(self, service):
        """제한 시간 / 최대 구간 수 설정 전달"""
        with patch("app.services.route_search_service.settings") as mock_settings:
            mock_settings.SEARCH_TIMEOUT_SECONDS = 0
            mock_settings.SEARCH_MAX_LEGS = 1
            mock_settings.ENABLE_CACHE_METRICS = False

            with pytest.raises(RouteNotFoundException):
                await service.search_route("A", "C", 0)

    @pytest.mark.asyncio
    async def test_metrics_logged(self, service, caplog):
        """METRICS 로그 출력"""
        with patch("app.services.route_search_service.settings") as mock_settings:
            mock_settings.SEARCH_TIMEOUT_SECONDS = 10
            mock_settings.SEARCH_MAX_LEGS = 0
            mock_settings.ROUTE_CACHE_TTL_SECONDS = 600
            mock_settings.ENABLE_CACHE_METRICS = True

            with caplog.at_level("INFO", logger="app.services.route_search_service"):
                await service.search_route("A", "C", 0)

        assert any("METRICS:" in record.message for record in caplog.records)

    @pytest.mark.asyncio
    async def test_cache_calls_run_off_event_loop(self, service, route_cache):
        """redis 호출은 이벤트 루프 스레드를 막지 않음"""
        loop_thread = threading.get_ident()
        called_from = []

        def record_get(cache_key):
            called_from.append(threading.get_ident())
            return None

        def record_set(cache_key, data, ttl):
            called_from.append(threading.get_ident())
            return True

        route_cache.get_cached_route.side_effect = record_get
        route_cache.cache_route.side_effect = record_set

        await service.search_route("A", "C", 0)

        assert len(called_from) == 2
        assert loop_thread not in called_from
