"""
Core 설정 및 utilities, 커스텀 예외
"""

from app.core.config import settings

from app.core.exceptions import (
    RoutingException,
    RouteNotFoundException,
    InvalidRouteQueryException,
    SearchCancelledException,
    EdgeSourceException,
    DepartureNotFoundException,
    InvalidDepartureIdException,
)

__all__ = [
    "settings",
    "RoutingException",
    "RouteNotFoundException",
    "InvalidRouteQueryException",
    "SearchCancelledException",
    "EdgeSourceException",
    "DepartureNotFoundException",
    "InvalidDepartureIdException",
]
