"""
DepartureService 테스트
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from app.core.exceptions import DepartureNotFoundException, InvalidDepartureIdException
from app.models.requests import DepartureCreateRequest
from app.services.departure_service import (
    DepartureService,
    parse_departure_id,
    row_to_departure,
)

DEPARTURE_ID = "0f0b6a52-4f3c-4f53-9b39-5c0f2b9f5e11"


class TestDepartureService:
    """DepartureService 테스트 클래스"""

    @pytest.fixture
    def route_cache(self):
        return MagicMock()

    @pytest.fixture
    def service(self, route_cache):
        return DepartureService(route_cache=route_cache)

    def test_row_to_departure(self, sample_departure_row):
        """DB row -> Departure (epoch ms, float)"""
        departure = row_to_departure(sample_departure_row)

        assert departure.departure_id == DEPARTURE_ID
        assert departure.departing_time == 0
        assert departure.arrival_time == 1000
        assert departure.ticket_price == 100.0
        assert isinstance(departure.ticket_price, float)

    def test_parse_departure_id(self):
        """UUID 정규화"""
        assert parse_departure_id(DEPARTURE_ID.upper()) == DEPARTURE_ID

    @pytest.mark.parametrize("raw_id", ["not-a-uuid", "", "1234"])
    def test_parse_departure_id_invalid(self, raw_id):
        """잘못된 UUID"""
        with pytest.raises(InvalidDepartureIdException):
            parse_departure_id(raw_id)

    @patch("app.db.database.create_departure")
    def test_create_departure(
        self, mock_create, service, route_cache, sample_departure_row
    ):
        """생성 후 경로 캐시 무효화"""
        mock_create.return_value = sample_departure_row
        request = DepartureCreateRequest(
            departing_station="A",
            departing_time=0,
            arrival_station="B",
            arrival_time=1000,
            ticket_price=100,
            number_of_seats=5,
        )

        departure = service.create_departure(request)

        assert departure.departing_station == "A"
        kwargs = mock_create.call_args.kwargs
        assert kwargs["departing_time"] == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert kwargs["arrival_time"] == datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)
        assert len(kwargs["departure_id"]) == 36
        route_cache.invalidate_route_cache.assert_called_once()

    @patch("app.db.database.get_departure")
    def test_get_departure(self, mock_get, service, sample_departure_row):
        """조회"""
        mock_get.return_value = sample_departure_row

        departure = service.get_departure(DEPARTURE_ID)

        assert departure.departure_id == DEPARTURE_ID
        mock_get.assert_called_once_with(DEPARTURE_ID)

    @patch("app.db.database.get_departure")
    def test_get_departure_not_found(self, mock_get, service):
        """존재하지 않는 departure"""
        mock_get.return_value = None

        with pytest.raises(DepartureNotFoundException):
            service.get_departure(DEPARTURE_ID)

    @patch("app.db.database.get_departure")
    def test_get_departure_invalid_id(self, mock_get, service):
        """잘못된 id는 DB 조회 전에 거부"""
        with pytest.raises(InvalidDepartureIdException):
            service.get_departure("abc")

        mock_get.assert_not_called()

    @patch("app.db.database.delete_departure")
    def test_delete_departure(self, mock_delete, service, route_cache):
        """삭제 후 경로 캐시 무효화"""
        mock_delete.return_value = True

        service.delete_departure(DEPARTURE_ID)

        mock_delete.assert_called_once_with(DEPARTURE_ID)
        route_cache.invalidate_route_cache.assert_called_once()

    @patch("app.db.database.delete_departure")
    def test_delete_departure_not_found(self, mock_delete, service, route_cache):
        """존재하지 않는 departure 삭제"""
        mock_delete.return_value = False

        with pytest.raises(DepartureNotFoundException):
            service.delete_departure(DEPARTURE_ID)

        route_cache.invalidate_route_cache.assert_not_called()

    @patch("app.db.database.delete_departure")
    def test_without_cache(self, mock_delete):
        """캐시 없이 동작"""
        mock_delete.return_value = True

        DepartureService().delete_departure(DEPARTURE_ID)


class TestDepartureCreateRequest:
    """요청 모델 검증 테스트"""

    def test_iso_times(self):
        """ISO 8601 문자열 -> epoch ms"""
        request = DepartureCreateRequest(
            departing_station="A",
            departing_time="1970-01-01T00:00:00Z",
            arrival_station="B",
            arrival_time="1970-01-01T00:00:01+00:00",
            ticket_price=1,
            number_of_seats=1,
        )

        assert request.departing_time == 0
        assert request.arrival_time == 1000

    def test_arrival_before_departure(self):
        """도착 시각이 출발 시각보다 빠르면 거부"""
        with pytest.raises(ValueError):
            DepartureCreateRequest(
                departing_station="A",
                departing_time=100,
                arrival_station="B",
                arrival_time=50,
                ticket_price=1,
                number_of_seats=1,
            )

    def test_negative_price(self):
        """음수 요금 거부"""
        with pytest.raises(ValueError):
            DepartureCreateRequest(
                departing_station="A",
                departing_time=0,
                arrival_station="B",
                arrival_time=50,
                ticket_price=-1,
                number_of_seats=1,
            )
