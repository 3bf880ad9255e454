from dataclasses import dataclass, field
from typing import Tuple

EMPTY_FROZENSET = frozenset()


# 탐색 상태 노드 => 생성 후 절대 수정하지 않음
# 후속 경로는 항상 새 객체로 생성 (frozen + slots)
@dataclass(frozen=True, slots=True)
class PartialRoute:
    current_station: str
    accumulated_cost: float
    # 현재 역 도착 시각 (epoch ms)
    current_time: int
    # 도착 지점으로 사용된 역 => 재방문 방지
    # 떠나는 역은 확장 시점에 추가됨
    visited: frozenset = field(default_factory=lambda: EMPTY_FROZENSET)
    # 지금까지 이용한 departure id 순서
    path: Tuple[str, ...] = ()

    @classmethod
    def seed(cls, start: str, start_time: int) -> "PartialRoute":
        """탐색 시작 경로 (비용 0, 방문 역 없음)"""
        return cls(
            current_station=start,
            accumulated_cost=0,
            current_time=start_time,
        )

    @property
    def legs(self) -> int:
        return len(self.path)

    def extend(
        self, to_station: str, edge_id: str, price: float, arrive_time: int
    ) -> "PartialRoute":
        """
        한 구간을 이어 붙인 후속 경로 생성

        현재 역은 이 시점에 visited에 추가됨 (떠나는 역)
        self는 읽기만 함
        """
        return PartialRoute(
            current_station=to_station,
            accumulated_cost=self.accumulated_cost + price,
            current_time=arrive_time,
            visited=self.visited | {self.current_station},
            path=self.path + (edge_id,),
        )
