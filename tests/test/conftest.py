"""
Pytest 설정 및 공통 Fixture
"""

import os
import pytest
import sys
from pathlib import Path
from unittest.mock import MagicMock

# 테스트 모드 환경 변수 설정 (모듈 임포트 전에 설정해야 함)
os.environ["TESTING"] = "true"
os.environ.setdefault("ENABLE_ROUTE_CACHE", "false")

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.models.domain import Departure  # noqa: E402


def make_departure(
    departure_id: str,
    departing_station: str,
    departing_time: int,
    arrival_station: str,
    arrival_time: int,
    ticket_price: float = 100,
    number_of_seats: int = 5,
) -> Departure:
    return Departure(
        departure_id=departure_id,
        departing_station=departing_station,
        departing_time=departing_time,
        arrival_station=arrival_station,
        arrival_time=arrival_time,
        ticket_price=ticket_price,
        number_of_seats=number_of_seats,
    )


@pytest.fixture
def departure_factory():
    """Departure 생성 헬퍼"""
    return make_departure


@pytest.fixture
def fast_and_slow_timetable():
    """같은 구간 A -> B, 빠른 편과 느린 편 (요금 동일)"""
    return [
        make_departure("slow", "A", 0, "B", 100, ticket_price=100),
        make_departure("fast", "A", 0, "B", 10, ticket_price=100),
    ]


@pytest.fixture
def detour_timetable():
    """
    A -> B -> C : A -> B는 빠르지만 B -> C가 매우 느림
    A -> D -> C : A -> D는 느리지만 D -> C가 매우 빠름
    """
    return [
        make_departure("AB", "A", 0, "B", 10),
        make_departure("BC", "B", 10, "C", 110),
        make_departure("AD", "A", 0, "D", 50),
        make_departure("DC", "D", 50, "C", 60),
    ]


@pytest.fixture
def sample_network():
    """
    여러 경로와 되돌아가는 구간이 섞인 시간표

    A -> B -> E 가 가장 빨리 도착
    A -> C -> E 는 더 싸지만 늦음
    B -> A 는 이미 방문한 역으로 돌아가는 구간
    """
    return [
        make_departure("A-B", "A", 100, "B", 200, ticket_price=30),
        make_departure("A-C", "A", 100, "C", 150, ticket_price=5),
        make_departure("B-A", "B", 210, "A", 260, ticket_price=1),
        make_departure("B-E", "B", 220, "E", 300, ticket_price=30),
        make_departure("C-E", "C", 160, "E", 400, ticket_price=5),
        make_departure("C-D", "C", 170, "D", 180, ticket_price=5),
        make_departure("D-E", "D", 190, "E", 350, ticket_price=5),
        # 출발 시각 이전이라 탈 수 없는 구간
        make_departure("A-E-early", "A", 50, "E", 60, ticket_price=1),
    ]


@pytest.fixture
def mock_redis_client():
    """Mock Redis 클라이언트"""
    mock = MagicMock()
    mock.get.return_value = None
    mock.setex.return_value = True
    mock.delete.return_value = 1
    mock.ping.return_value = True
    return mock


@pytest.fixture
def sample_departure_row():
    """DB에서 반환되는 departure row (RealDictCursor)"""
    from datetime import datetime, timezone
    from decimal import Decimal

    return {
        "departure_id": "0f0b6a52-4f3c-4f53-9b39-5c0f2b9f5e11",
        "departing_station": "A",
        "departing_time": datetime(1970, 1, 1, 0, 0, 0, tzinfo=timezone.utc),
        "arrival_station": "B",
        "arrival_time": datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc),
        "ticket_price": Decimal("100.00"),
        "number_of_seats": 5,
    }
