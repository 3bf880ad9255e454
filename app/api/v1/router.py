"""API v1 main router
모든 엔드포인트를 통합하여 하나의 API 라우터로 제공
"""

from fastapi import APIRouter
from app.api.v1.endpoints import departures

# API v1 main router
api_router = APIRouter()

api_router.include_router(departures.router, prefix="/departures", tags=["departures"])
