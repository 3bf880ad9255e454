"""
Departures Routing Backend - FastAPI Application

운행 구간(departure) 관리 및 최단 도착 시각 경로 탐색
"""

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.db.database import initialize_pool, close_pool, ensure_schema
from app.api.v1.router import api_router
from app.api.deps import get_route_cache
from app.middleware.performance_monitoring import PerformanceMonitoringMiddleware

# 로깅 설정
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션 생명주기 관리

    서버 시작 시 실행:
    - PostgreSQL 연결 풀 초기화 및 departures 스키마 확인
    - 경로 캐시 연결 확인 (실패해도 캐시 없이 동작)

    서버 종료 시 실행:
    - PostgreSQL 연결 풀 종료
    """
    logger.info("Departures Routing Backend 시작 중...")

    try:
        logger.info("1/2 PostgreSQL 연결 풀 초기화 중...")
        initialize_pool()
        ensure_schema()

        logger.info("2/2 경로 캐시 확인 중...")
        route_cache = get_route_cache()
        if route_cache is None:
            logger.info("경로 캐시 비활성화")
        elif not route_cache.ping():
            logger.warning("Redis 연결 실패 => 캐시 MISS로 동작")

        logger.info("Departures Routing Backend 시작 완료")

    except Exception as e:
        logger.error(f"초기화 실패: {e}", exc_info=True)
        raise

    yield

    logger.info("Departures Routing Backend 종료 중...")
    try:
        close_pool()
        logger.info("Departures Routing Backend 종료 완료")
    except Exception as e:
        logger.error(f"종료 중 오류: {e}", exc_info=True)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    ## 운행 구간 기반 경로 탐색

    - departure 생성 / 조회 / 삭제
    - 시작 시각 이후 가장 빨리 도착하는 경로 탐색 (요금은 누적만 하고 비교하지 않음)
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.ENABLE_PERFORMANCE_MONITORING:
    app.add_middleware(PerformanceMonitoringMiddleware)

app.include_router(api_router, prefix="/v1")


# ========== Health Check Endpoints ==========


@app.get("/")
async def root():
    """서비스 기본 정보"""
    return {
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """
    헬스 체크 엔드포인트

    - 데이터베이스 연결 상태
    - Redis 연결 상태 (캐시 비활성화 시 disabled)
    """
    try:
        from app.db.database import get_db_connection

        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
        db_status = "healthy"

    except Exception as e:
        logger.error(f"DB 헬스 체크 실패: {e}")
        db_status = "unhealthy"

    route_cache = get_route_cache()
    if route_cache is None:
        redis_status = "disabled"
    else:
        redis_status = "healthy" if route_cache.ping() else "unhealthy"

    # redis는 캐시 용도 => DB 상태만 전체 상태에 반영
    overall_status = "healthy" if db_status == "healthy" else "unhealthy"
    status_code = 200 if overall_status == "healthy" else 503

    return JSONResponse(
        status_code=status_code,
        content={
            "status": overall_status,
            "version": settings.VERSION,
            "timestamp": time.time(),
            "components": {
                "database": db_status,
                "redis": redis_status,
            },
        },
    )


# ========== Exception Handlers ==========


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """
    전역 예외 핸들러

    예상치 못한 오류 처리
    """
    logger.error(f"예상치 못한 오류: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "message": "서버 내부 오류가 발생했습니다",
            "detail": str(exc) if settings.DEBUG else "Internal Server Error",
        },
    )


if __name__ == "__main__":
    import uvicorn

    logger.info("개발 서버 시작...")

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True,
    )
