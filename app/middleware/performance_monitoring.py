# 요청 처리 시간 측정 미들웨어

import time
import logging
import json
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.config import settings

logger = logging.getLogger(__name__)


class PerformanceMonitoringMiddleware(BaseHTTPMiddleware):
    """
    모든 HTTP 요청의 처리 시간을 X-Process-Time-Ms 헤더와 로그로 남김
    기준 시간을 넘는 요청은 WARNING
    """

    def __init__(self, app: ASGIApp, slow_threshold_ms: int = None):
        super().__init__(app)
        self.slow_threshold_ms = (
            slow_threshold_ms
            if slow_threshold_ms is not None
            else settings.SLOW_REQUEST_THRESHOLD_MS
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_time_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"요청 처리 중 예외 발생: {request.method} {request.url.path}, "
                f"소요시간={elapsed_time_ms:.2f}ms, 예외={e}",
                exc_info=True,
            )
            raise

        elapsed_time_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Process-Time-Ms"] = f"{elapsed_time_ms:.2f}"

        is_slow = elapsed_time_ms > self.slow_threshold_ms
        if is_slow:
            logger.warning(
                f"느린 요청 감지: {request.method} {request.url.path}, "
                f"소요시간={elapsed_time_ms:.2f}ms (기준: {self.slow_threshold_ms}ms)"
            )

        metrics = {
            "event": "http_request",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "elapsed_time_ms": round(elapsed_time_ms, 2),
            "slow_request": is_slow,
        }
        logger.info(f"PERFORMANCE: {json.dumps(metrics, ensure_ascii=False)}")

        return response
