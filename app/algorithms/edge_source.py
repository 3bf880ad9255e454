"""Edge Source contract

탐색 엔진이 다음 구간을 가져오는 유일한 통로
저장소 구현(DB, 메모리)은 app.services.edge_sources에 위치
"""

from dataclasses import dataclass
from typing import AbstractSet, Protocol, Sequence


@dataclass(frozen=True, slots=True)
class EdgeCandidate:
    """도착역별 가장 빨리 도착하는 departure 한 건"""

    to_station: str
    edge_id: str
    price: float
    arrive_time: int  # epoch ms


class EdgeSource(Protocol):
    async def next_edges(
        self,
        from_station: str,
        excluded: AbstractSet[str],
        not_before: int,
    ) -> Sequence[EdgeCandidate]:
        """
        from_station에서 출발하는 구간 조회

        Args:
            from_station: 출발역
            excluded: 도착역으로 허용하지 않는 역 집합
            not_before: 이 시각(epoch ms) 이후 출발하는 구간만 허용

        Returns:
            도착역마다 정확히 하나, arrive_time이 가장 이른 구간
        """
        ...
