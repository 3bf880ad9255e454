# 경로 탐색 서비스

import asyncio
import logging
import time
import json
from typing import Optional, Dict, Any

from app.algorithms.edge_source import EdgeSource
from app.algorithms.earliest_arrival import find_route, validate_route_query
from app.core.config import settings
from app.core.exceptions import (
    RouteNotFoundException,
    InvalidRouteQueryException,
    SearchCancelledException,
    EdgeSourceException,
)
from app.db.redis_client import RouteCacheManager
from app.services.edge_sources import DatabaseEdgeSource

logger = logging.getLogger(__name__)


class RouteSearchService:
    def __init__(
        self,
        edge_source: Optional[EdgeSource] = None,
        route_cache: Optional[RouteCacheManager] = None,
    ):
        self.edge_source = edge_source if edge_source is not None else DatabaseEdgeSource()
        # None이면 캐싱 없이 매번 탐색
        self.route_cache = route_cache
        logger.info(
            f"RouteSearchService 초기화 완료, 캐싱={'on' if route_cache else 'off'}"
        )

    async def search_route(
        self, start: str, destination: str, start_time: int
    ) -> Dict[str, Any]:
        """
        가장 빨리 도착하는 경로 탐색

        Args:
            start: 출발역
            destination: 목적지
            start_time: 탐색 시작 시각 (epoch ms)

        Returns:
            {"departure_ids", "total_cost", "final_arrival_time"}

        Raises:
            InvalidRouteQueryException: 입력 오류
            RouteNotFoundException: 경로가 없을 때
            SearchCancelledException: 제한 시간 초과
            EdgeSourceException: 구간 조회 실패 (경로 없음으로 바꾸지 않음)
        """
        request_start = time.time()

        try:
            validate_route_query(start, destination, start_time)

            logger.info(f"경로 탐색 요청: {start} → {destination}, time={start_time}")

            cache_key = RouteCacheManager.build_route_key(start, destination, start_time)

            if self.route_cache is not None:
                cached_result = await asyncio.to_thread(
                    self.route_cache.get_cached_route, cache_key
                )

                # 캐시 HIT
                if cached_result:
                    elapsed_time = time.time() - request_start
                    logger.info(
                        f"캐시에서 경로 반환: {start} → {destination}, "
                        f"응답시간={elapsed_time*1000:.1f}ms"
                    )
                    self._log_search_metrics(
                        cache_hit=True,
                        response_time_ms=elapsed_time * 1000,
                        start=start,
                        destination=destination,
                    )
                    return cached_result

            deadline = None
            if settings.SEARCH_TIMEOUT_SECONDS > 0:
                deadline = time.monotonic() + settings.SEARCH_TIMEOUT_SECONDS

            calculation_start = time.time()
            found = await find_route(
                self.edge_source,
                start,
                destination,
                start_time,
                deadline=deadline,
                max_legs=settings.SEARCH_MAX_LEGS,
            )
            calculation_time = time.time() - calculation_start

            if found is None:
                raise RouteNotFoundException(
                    f"{start}에서 {destination}까지 경로를 찾을 수 없습니다"
                )

            result = {
                "departure_ids": list(found.departure_ids),
                "total_cost": found.total_cost,
                "final_arrival_time": found.final_arrival_time,
            }

            # 경로 없음 결과는 캐싱하지 않음
            if self.route_cache is not None:
                cache_success = await asyncio.to_thread(
                    self.route_cache.cache_route,
                    cache_key,
                    result,
                    ttl=settings.ROUTE_CACHE_TTL_SECONDS,
                )
                if not cache_success:
                    logger.warning(f"경로 캐싱 실패 (계속 진행): {cache_key}")

            elapsed_time = time.time() - request_start
            logger.info(
                f"경로 탐색 완료: {start} → {destination}, 구간 {len(found.departure_ids)}개, "
                f"총 응답시간={elapsed_time:.2f}s, 계산시간={calculation_time:.2f}s"
            )

            self._log_search_metrics(
                cache_hit=False,
                response_time_ms=elapsed_time * 1000,
                calculation_time_ms=calculation_time * 1000,
                start=start,
                destination=destination,
                legs=len(found.departure_ids),
            )
            return result

        except (
            InvalidRouteQueryException,
            RouteNotFoundException,
            SearchCancelledException,
            EdgeSourceException,
        ) as e:
            logger.error(f"경로 탐색 실패: {e.message}")
            raise
        except Exception as e:
            logger.error(f"경로 탐색 오류: {e}", exc_info=True)
            raise

    def _log_search_metrics(
        self,
        cache_hit: bool,
        response_time_ms: float,
        start: str,
        destination: str,
        calculation_time_ms: Optional[float] = None,
        legs: Optional[int] = None,
    ) -> None:
        """
        탐색 메트릭 로깅 => 로그 수집기에서 분석
        """
        if not settings.ENABLE_CACHE_METRICS:
            return

        metrics = {
            "event": "route_search",
            "cache_hit": cache_hit,
            "response_time_ms": round(response_time_ms, 2),
            "start": start,
            "destination": destination,
        }

        if calculation_time_ms is not None:
            metrics["calculation_time_ms"] = round(calculation_time_ms, 2)

        if legs is not None:
            metrics["legs"] = legs

        logger.info(f"METRICS: {json.dumps(metrics, ensure_ascii=False)}")
