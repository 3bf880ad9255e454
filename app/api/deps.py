from functools import lru_cache
from typing import Optional

from app.core.config import settings
from app.db.redis_client import RouteCacheManager, init_redis
from app.services.departure_service import DepartureService
from app.services.route_search_service import RouteSearchService


# lru_cache 사용하여 싱글톤 패턴과 유사한 효과, 의존성 주입
@lru_cache()
def get_route_cache() -> Optional[RouteCacheManager]:
    if not settings.ENABLE_ROUTE_CACHE:
        return None
    return init_redis()


@lru_cache()
def get_route_search_service() -> RouteSearchService:
    return RouteSearchService(route_cache=get_route_cache())


@lru_cache()
def get_departure_service() -> DepartureService:
    return DepartureService(route_cache=get_route_cache())
