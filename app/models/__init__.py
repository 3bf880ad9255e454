"""
pydantic models for 요청, 응답, 도메인 객체
"""


from app.models.requests import DepartureCreateRequest, RouteSearchRequest
from app.models.responses import (
    DepartureResponse,
    RouteSearchResponse,
)
from app.models.domain import Departure

__all__ = [
    "DepartureCreateRequest",
    "RouteSearchRequest",
    "DepartureResponse",
    "RouteSearchResponse",
    "Departure",
]
