# departure 레코드 생성/조회/삭제

import logging
import uuid
from typing import Dict, Optional

from app.core.exceptions import DepartureNotFoundException, InvalidDepartureIdException
from app.core.timestamps import from_epoch_ms, to_epoch_ms
from app.db import database
from app.db.redis_client import RouteCacheManager
from app.models.domain import Departure
from app.models.requests import DepartureCreateRequest

logger = logging.getLogger(__name__)


def row_to_departure(row: Dict) -> Departure:
    """DB row (datetime, Decimal) -> Departure (epoch ms, float)"""
    return Departure(
        departure_id=str(row["departure_id"]),
        departing_station=row["departing_station"],
        departing_time=to_epoch_ms(row["departing_time"]),
        arrival_station=row["arrival_station"],
        arrival_time=to_epoch_ms(row["arrival_time"]),
        ticket_price=float(row["ticket_price"]),
        number_of_seats=row["number_of_seats"],
    )


def parse_departure_id(raw_id: str) -> str:
    try:
        return str(uuid.UUID(raw_id))
    except (ValueError, AttributeError, TypeError):
        raise InvalidDepartureIdException(f"유효하지 않은 departure id입니다: {raw_id}")


class DepartureService:
    def __init__(self, route_cache: Optional[RouteCacheManager] = None):
        # 시간표가 바뀌면 캐시된 경로는 더 이상 유효하지 않음
        self.route_cache = route_cache

    def create_departure(self, request: DepartureCreateRequest) -> Departure:
        departure_id = str(uuid.uuid4())
        row = database.create_departure(
            departure_id=departure_id,
            departing_station=request.departing_station,
            departing_time=from_epoch_ms(request.departing_time),
            arrival_station=request.arrival_station,
            arrival_time=from_epoch_ms(request.arrival_time),
            ticket_price=request.ticket_price,
            number_of_seats=request.number_of_seats,
        )
        logger.info(
            f"departure 생성: {departure_id} "
            f"({request.departing_station} → {request.arrival_station})"
        )
        self._invalidate_routes()
        return row_to_departure(row)

    def get_departure(self, raw_id: str) -> Departure:
        departure_id = parse_departure_id(raw_id)
        row = database.get_departure(departure_id)
        if not row:
            raise DepartureNotFoundException(
                f"departure를 찾을 수 없습니다: {departure_id}"
            )
        return row_to_departure(row)

    def delete_departure(self, raw_id: str) -> None:
        departure_id = parse_departure_id(raw_id)
        if not database.delete_departure(departure_id):
            raise DepartureNotFoundException(
                f"departure를 찾을 수 없습니다: {departure_id}"
            )
        logger.info(f"departure 삭제: {departure_id}")
        self._invalidate_routes()

    def _invalidate_routes(self) -> None:
        if self.route_cache is not None:
            self.route_cache.invalidate_route_cache()
