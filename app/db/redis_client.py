import redis
import json
from typing import Optional, Dict, Any
import logging

from app.core.config import settings, ROUTE_CACHE_PREFIX

logger = logging.getLogger(__name__)


class RouteCacheManager:
    """
    경로 탐색 결과 캐시

    redis 장애는 캐시 MISS / no-op으로 처리 => 탐색 자체는 실패하지 않음
    """

    def __init__(self):
        self.redis_client = redis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            decode_responses=True,
        )

    @staticmethod
    def build_route_key(start: str, destination: str, start_time: int) -> str:
        return f"{ROUTE_CACHE_PREFIX}:{start}:{destination}:{start_time}"

    def get_cached_route(self, cache_key: str) -> Optional[Dict[str, Any]]:
        """
        캐시된 경로 조회 => 캐시 hit/miss 로그로 기록
        """
        try:
            cached_data = self.redis_client.get(cache_key)
            if cached_data:
                logger.debug(f"캐시 HIT:{cache_key}")
                return json.loads(cached_data)
            logger.debug(f"캐시 MISS: {cache_key}")
            return None
        except redis.RedisError as e:
            logger.warning(f"Redis 캐시 조회 실패 (fallback: 재계산): {e}")
            return None
        except json.JSONDecodeError as e:
            logger.error(f"캐시 데이터 파싱 실패: {cache_key}, 오류: {e}")
            return None

    def cache_route(
        self,
        cache_key: str,
        route_data: Dict[str, Any],
        ttl: int = settings.ROUTE_CACHE_TTL_SECONDS,
    ) -> bool:
        """
        경로 탐색 결과 redis에 캐싱
        """
        try:
            serialized_data = json.dumps(route_data, ensure_ascii=False)
            self.redis_client.setex(cache_key, ttl, serialized_data)
            logger.debug(f"경로 캐싱 성공: {cache_key}, TTL={ttl}")
            return True
        except redis.RedisError as e:
            logger.error(f"redis 캐싱 실패: {cache_key}, 오류: {e}")
            return False
        except (TypeError, ValueError) as e:
            logger.error(f"경로 데이터 직렬화 실패: {e}")
            return False

    def invalidate_route_cache(self, pattern: str = f"{ROUTE_CACHE_PREFIX}:*") -> int:
        """
        경로 캐시 무효화 <- departure 생성/삭제 시 사용, default : 모든 경로 캐시 삭제
        """
        try:
            keys = list(self.redis_client.scan_iter(match=pattern))
            if keys:
                deleted_count = self.redis_client.delete(*keys)
                logger.info(
                    f"캐시 무효화 완료: {deleted_count}개 삭제 -> 패턴: {pattern}"
                )
                return deleted_count
            logger.info(f"무효화할 캐시 없음 -> 패턴: {pattern}")
            return 0
        except redis.RedisError as e:
            logger.error(f"캐시 무효화 실패: {e}")
            return 0

    def ping(self) -> bool:
        try:
            return bool(self.redis_client.ping())
        except redis.RedisError as e:
            logger.error(f"Redis ping 실패: {e}")
            return False


def init_redis():
    return RouteCacheManager()
