"""
데이터베이스 연결 및 경로 캐시
"""

from app.db.database import (
    initialize_pool,
    close_pool,
    get_db_connection,
    get_db_cursor,
    ensure_schema,
    create_departure,
    get_departure,
    delete_departure,
    find_earliest_departures,
)
from app.db.redis_client import RouteCacheManager, init_redis

__all__ = [
    "initialize_pool",
    "close_pool",
    "get_db_connection",
    "get_db_cursor",
    "ensure_schema",
    "create_departure",
    "get_departure",
    "delete_departure",
    "find_earliest_departures",
    "RouteCacheManager",
    "init_redis",
]
