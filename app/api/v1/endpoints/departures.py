"""
departure 레코드 및 경로 탐색 REST API
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
import logging

from app.api.deps import get_departure_service, get_route_search_service
from app.core.exceptions import (
    DepartureNotFoundException,
    EdgeSourceException,
    InvalidDepartureIdException,
    InvalidRouteQueryException,
    RouteNotFoundException,
    RoutingException,
    SearchCancelledException,
)
from app.models.requests import DepartureCreateRequest, RouteSearchRequest
from app.models.responses import DepartureResponse, RouteSearchResponse
from app.services.departure_service import DepartureService
from app.services.route_search_service import RouteSearchService

router = APIRouter()
logger = logging.getLogger(__name__)

# 예외 -> HTTP status
_STATUS_BY_EXCEPTION = (
    (RouteNotFoundException, status.HTTP_404_NOT_FOUND),
    (DepartureNotFoundException, status.HTTP_404_NOT_FOUND),
    (InvalidRouteQueryException, status.HTTP_400_BAD_REQUEST),
    (InvalidDepartureIdException, status.HTTP_400_BAD_REQUEST),
    (SearchCancelledException, status.HTTP_504_GATEWAY_TIMEOUT),
    (EdgeSourceException, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def _to_http_exception(e: RoutingException) -> HTTPException:
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for exc_type, code in _STATUS_BY_EXCEPTION:
        if isinstance(e, exc_type):
            status_code = code
            break
    return HTTPException(
        status_code=status_code, detail={"message": e.message, "code": e.code}
    )


@router.post("/search", response_model=RouteSearchResponse)
async def search_route(
    request: RouteSearchRequest,
    service: RouteSearchService = Depends(get_route_search_service),
):
    """
    가장 빨리 도착하는 경로 탐색

    - **time**: 탐색 시작 시각 (epoch ms 또는 ISO 8601)
    - **start**: 출발역
    - **destination**: 목적지

    Example:
        POST /v1/departures/search
        {
            "time": 0,
            "start": "A",
            "destination": "C"
        }
    """
    try:
        return await service.search_route(
            start=request.start,
            destination=request.destination,
            start_time=request.time,
        )
    except RoutingException as e:
        raise _to_http_exception(e)


@router.post(
    "", response_model=DepartureResponse, status_code=status.HTTP_201_CREATED
)
def create_departure(
    request: DepartureCreateRequest,
    service: DepartureService = Depends(get_departure_service),
):
    """departure 생성"""
    departure = service.create_departure(request)
    return departure.to_dict()


@router.get("/{departure_id}", response_model=DepartureResponse)
def get_departure(
    departure_id: str,
    service: DepartureService = Depends(get_departure_service),
):
    """departure 조회"""
    try:
        return service.get_departure(departure_id).to_dict()
    except RoutingException as e:
        raise _to_http_exception(e)


@router.delete("/{departure_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_departure(
    departure_id: str,
    service: DepartureService = Depends(get_departure_service),
):
    """departure 삭제"""
    try:
        service.delete_departure(departure_id)
    except RoutingException as e:
        raise _to_http_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
