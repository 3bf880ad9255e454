# Edge Source 구현체 (메모리 / PostgreSQL)

import asyncio
import logging
from collections import defaultdict
from typing import AbstractSet, Dict, Iterable, List

import psycopg2

from app.algorithms.edge_source import EdgeCandidate
from app.core.exceptions import EdgeSourceException
from app.core.timestamps import from_epoch_ms, to_epoch_ms
from app.db.database import find_earliest_departures
from app.models.domain import Departure

logger = logging.getLogger(__name__)


def earliest_arrival_per_destination(
    departures: Iterable[Departure],
    from_station: str,
    excluded: AbstractSet[str],
    not_before: int,
) -> List[EdgeCandidate]:
    """
    DB의 DISTINCT ON 그룹핑을 그대로 재현하는 reduction

    조건을 만족하는 departure 중 도착역별 arrival_time 최솟값 한 건
    동일 도착 시각이면 입력 순서상 먼저 나온 departure 유지
    결과 순서 = 도착역이 처음 등장한 순서
    """
    best: Dict[str, Departure] = {}

    for departure in departures:
        if departure.departing_station != from_station:
            continue
        if departure.arrival_station in excluded:
            continue
        if departure.departing_time < not_before:
            continue

        current = best.get(departure.arrival_station)
        if current is None or departure.arrival_time < current.arrival_time:
            best[departure.arrival_station] = departure

    return [
        EdgeCandidate(
            to_station=d.arrival_station,
            edge_id=d.departure_id,
            price=d.ticket_price,
            arrive_time=d.arrival_time,
        )
        for d in best.values()
    ]


class InMemoryEdgeSource:
    """고정 시간표용 Edge Source (출발역 기준 인덱스)"""

    def __init__(self, departures: Iterable[Departure] = ()):
        self._by_origin: Dict[str, List[Departure]] = defaultdict(list)
        for departure in departures:
            self.add(departure)

    def add(self, departure: Departure) -> None:
        self._by_origin[departure.departing_station].append(departure)

    async def next_edges(
        self, from_station: str, excluded: AbstractSet[str], not_before: int
    ) -> List[EdgeCandidate]:
        return earliest_arrival_per_destination(
            self._by_origin.get(from_station, ()),
            from_station,
            excluded,
            not_before,
        )


class DatabaseEdgeSource:
    """
    PostgreSQL departures 테이블 기반 Edge Source

    psycopg2는 blocking이므로 worker thread에서 실행
    DB 오류는 EdgeSourceException으로 감싸서 전파 (재시도 없음)
    """

    async def next_edges(
        self, from_station: str, excluded: AbstractSet[str], not_before: int
    ) -> List[EdgeCandidate]:
        try:
            rows = await asyncio.to_thread(
                find_earliest_departures,
                from_station,
                sorted(excluded),
                from_epoch_ms(not_before),
            )
        except (psycopg2.Error, RuntimeError) as e:
            logger.error(f"구간 조회 실패: from={from_station}, 오류: {e}")
            raise EdgeSourceException(f"구간 조회에 실패했습니다: {e}") from e

        return [
            EdgeCandidate(
                to_station=row["arrival_station"],
                edge_id=row["departure_id"],
                price=float(row["ticket_price"]),
                arrive_time=to_epoch_ms(row["arrival_time"]),
            )
            for row in rows
        ]
