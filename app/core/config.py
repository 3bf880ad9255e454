import os
from typing import Dict, Any
from dotenv import load_dotenv

load_dotenv()  # 환경변수 읽어오기


class Settings:
    PROJECT_NAME: str = "Departures Routing Backend"
    VERSION: str = "1.0.0"

    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    PORT: int = int(os.getenv("PORT", 3000))

    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", 5432))
    DB_NAME: str = os.getenv("DB_NAME", "trains")
    DB_USER: str = os.getenv("DB_USER", "postgres")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "password")
    DB_SSLMODE: str = os.getenv("DB_SSLMODE", "prefer")
    # connection pool 크기
    DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", 2))
    DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", 20))

    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", 6379))
    REDIS_DB: int = int(os.getenv("REDIS_DB", 0))

    # 경로 캐시 => departure 생성/삭제 시 전체 무효화
    ENABLE_ROUTE_CACHE: bool = (
        os.getenv("ENABLE_ROUTE_CACHE", "true").lower() == "true"
    )
    ROUTE_CACHE_TTL_SECONDS: int = int(
        os.getenv("ROUTE_CACHE_TTL_SECONDS", 600)
    )  # 10분

    # 캐시 메트릭 활성화 플래그
    ENABLE_CACHE_METRICS: bool = (
        os.getenv("ENABLE_CACHE_METRICS", "true").lower() == "true"
    )

    # 탐색 제한 시간(초), 0이면 제한 없음
    SEARCH_TIMEOUT_SECONDS: float = float(os.getenv("SEARCH_TIMEOUT_SECONDS", 10))
    # 경로당 최대 구간 수, 0이면 제한 없음
    # 경로가 길어질수록 Edge Source에 넘기는 제외 역 목록도 길어짐
    SEARCH_MAX_LEGS: int = int(os.getenv("SEARCH_MAX_LEGS", 0))

    ENABLE_PERFORMANCE_MONITORING: bool = (
        os.getenv("ENABLE_PERFORMANCE_MONITORING", "true").lower() == "true"
    )
    SLOW_REQUEST_THRESHOLD_MS: int = int(os.getenv("SLOW_REQUEST_THRESHOLD_MS", 1000))

    # CORS 설정
    ALLOWED_ORIGINS: list[str] = os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000",
    ).split(",")

    @property
    def DB_CONFIG(self) -> Dict[str, Any]:
        return {
            "host": self.DB_HOST,
            "port": self.DB_PORT,
            "database": self.DB_NAME,
            "user": self.DB_USER,
            "password": self.DB_PASSWORD,
            "sslmode": self.DB_SSLMODE,
            "connect_timeout": 30,
        }


settings = Settings()  # 모듈화


# 경로 캐시 key prefix
ROUTE_CACHE_PREFIX = "route"
