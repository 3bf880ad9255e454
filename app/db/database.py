import psycopg2
from psycopg2 import pool
from psycopg2.extras import RealDictCursor
from typing import List, Dict, Optional, Sequence
from contextlib import contextmanager
from datetime import datetime
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

_connection_pool = None

# 컬럼 목록 => 조회 쿼리에서 공통 사용
# uuid는 text로 변환하여 반환
DEPARTURE_COLUMNS = """
    departure_id::text AS departure_id,
    departing_station,
    departing_time,
    arrival_station,
    arrival_time,
    ticket_price,
    number_of_seats
"""


def initialize_pool():
    global _connection_pool
    if _connection_pool is None:
        _connection_pool = pool.ThreadedConnectionPool(
            minconn=settings.DB_POOL_MIN,
            maxconn=settings.DB_POOL_MAX,
            **settings.DB_CONFIG,
        )
        logger.info("Database connection pool initialized")


def close_pool():
    global _connection_pool
    if _connection_pool:
        _connection_pool.closeall()
        _connection_pool = None
        logger.info("Database connection pool closed")


@contextmanager
def get_db_connection():
    if _connection_pool is None:
        raise RuntimeError("Connection pool이 초기화되지 않았습니다")

    connection = None
    try:
        connection = _connection_pool.getconn()
        yield connection
    except psycopg2.Error as e:
        logger.error(f"Database error: {e}")
        if connection:
            connection.rollback()
        raise
    finally:
        if connection:
            _connection_pool.putconn(connection)


@contextmanager
def get_db_cursor(cursor_factory=RealDictCursor):
    with get_db_connection() as connection:
        cursor = connection.cursor(cursor_factory=cursor_factory)
        try:
            yield cursor
            connection.commit()
        except Exception as e:
            connection.rollback()
            logger.error(f"Transaction rolled back: {e}")
            raise
        finally:
            cursor.close()


def ensure_schema():
    """departures 테이블 및 탐색용 인덱스 생성 (없을 때만)"""
    query = """
    CREATE TABLE IF NOT EXISTS departures (
        departure_id UUID PRIMARY KEY,
        departing_station TEXT NOT NULL,
        departing_time TIMESTAMPTZ NOT NULL,
        arrival_station TEXT NOT NULL,
        arrival_time TIMESTAMPTZ NOT NULL,
        ticket_price NUMERIC(12, 2) NOT NULL,
        number_of_seats INTEGER NOT NULL,
        CHECK (arrival_time >= departing_time)
    );
    CREATE INDEX IF NOT EXISTS idx_departures_from_time
        ON departures (departing_station, departing_time);
    """

    with get_db_cursor() as cursor:
        cursor.execute(query)
    logger.info("departures 스키마 확인 완료")


def create_departure(
    departure_id: str,
    departing_station: str,
    departing_time: datetime,
    arrival_station: str,
    arrival_time: datetime,
    ticket_price: float,
    number_of_seats: int,
) -> Dict:
    query = f"""
    INSERT INTO departures (
        departure_id, departing_station, departing_time,
        arrival_station, arrival_time, ticket_price, number_of_seats
    )
    VALUES (
        %(departure_id)s, %(departing_station)s, %(departing_time)s,
        %(arrival_station)s, %(arrival_time)s, %(ticket_price)s, %(number_of_seats)s
    )
    RETURNING {DEPARTURE_COLUMNS}
    """
    params = {
        "departure_id": departure_id,
        "departing_station": departing_station,
        "departing_time": departing_time,
        "arrival_station": arrival_station,
        "arrival_time": arrival_time,
        "ticket_price": ticket_price,
        "number_of_seats": number_of_seats,
    }

    with get_db_cursor() as cursor:
        cursor.execute(query, params)
        return cursor.fetchone()


def get_departure(departure_id: str) -> Optional[Dict]:
    query = f"""
    SELECT {DEPARTURE_COLUMNS}
    FROM departures
    WHERE departure_id = %(departure_id)s
    """

    with get_db_cursor() as cursor:
        cursor.execute(query, {"departure_id": departure_id})
        return cursor.fetchone()


def delete_departure(departure_id: str) -> bool:
    query = """
    DELETE FROM departures
    WHERE departure_id = %(departure_id)s
    """

    with get_db_cursor() as cursor:
        cursor.execute(query, {"departure_id": departure_id})
        return cursor.rowcount > 0


def find_earliest_departures(
    from_station: str, excluded: Sequence[str], not_before: datetime
) -> List[Dict]:
    """
    도착역별로 가장 빨리 도착하는 departure 한 건씩 조회

    - from_station에서 출발
    - 도착역이 excluded에 없음
    - not_before 이후 출발
    동일 도착 시각은 departure_id 순으로 결정
    좌석 수는 조건에 포함하지 않음
    """
    query = """
    SELECT DISTINCT ON (arrival_station)
        departure_id::text AS departure_id,
        arrival_station,
        arrival_time,
        ticket_price
    FROM departures
    WHERE departing_station = %(from_station)s
      AND NOT (arrival_station = ANY(%(excluded)s::text[]))
      AND departing_time >= %(not_before)s
    ORDER BY arrival_station, arrival_time, departure_id
    """
    params = {
        "from_station": from_station,
        "excluded": list(excluded),
        "not_before": not_before,
    }

    with get_db_cursor() as cursor:
        cursor.execute(query, params)
        return cursor.fetchall()
