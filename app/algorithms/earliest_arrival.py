# 최단 도착 시각 경로 탐색 (비용 최적화 아님)
import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from app.algorithms.best_first import SearchStatus, best_first_search
from app.algorithms.edge_source import EdgeSource
from app.algorithms.route_state import PartialRoute
from app.core.exceptions import InvalidRouteQueryException, SearchCancelledException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteFound:
    departure_ids: Tuple[str, ...]
    total_cost: float
    final_arrival_time: int  # epoch ms


def compare_routes(a: PartialRoute, b: PartialRoute) -> int:
    """
    도착 시각 오름차순, accumulated_cost는 절대 비교하지 않음
    => 더 싸지만 늦은 경로가 더 비싸지만 빠른 경로보다 앞설 수 없음
    동률은 0 (frontier의 삽입 순서로 결정)
    """
    if a.current_time < b.current_time:
        return -1
    if a.current_time > b.current_time:
        return 1
    return 0


class EarliestArrivalStrategy:
    """목적지 판정 + Edge Source 기반 확장 + 도착 시각 비교"""

    def __init__(
        self, edge_source: EdgeSource, destination: str, max_legs: int = 0
    ):
        self.edge_source = edge_source
        self.destination = destination
        # 0이면 제한 없음
        self.max_legs = max_legs

    def is_goal(self, route: PartialRoute) -> bool:
        return route.current_station == self.destination

    def compare(self, a: PartialRoute, b: PartialRoute) -> int:
        return compare_routes(a, b)

    async def expand(self, route: PartialRoute) -> List[PartialRoute]:
        if self.max_legs and route.legs >= self.max_legs:
            return []

        # 떠나는 역도 도착역으로 허용하지 않음 (자기 자신으로 돌아오는 구간 차단)
        excluded = route.visited | {route.current_station}

        # 도착역별 가장 이른 구간만 돌아옴
        # 같은 도착역의 늦지만 싼 구간은 여기서 영구히 버려짐
        candidates = await self.edge_source.next_edges(
            route.current_station, excluded, route.current_time
        )

        return [
            route.extend(c.to_station, c.edge_id, c.price, c.arrive_time)
            for c in candidates
        ]


def validate_route_query(start, destination, start_time) -> None:
    for name, station in (("start", start), ("destination", destination)):
        if not isinstance(station, str) or not station.strip():
            raise InvalidRouteQueryException(
                f"{name} 역 값이 올바르지 않습니다: {station!r}"
            )

    # bool은 int의 하위 타입이므로 별도 차단
    if isinstance(start_time, bool) or not isinstance(start_time, int):
        raise InvalidRouteQueryException(
            f"출발 시각은 epoch ms 정수여야 합니다: {start_time!r}"
        )


async def find_route(
    edge_source: EdgeSource,
    start: str,
    destination: str,
    start_time: int,
    *,
    deadline: Optional[float] = None,
    cancel_event: Optional[asyncio.Event] = None,
    max_legs: int = 0,
) -> Optional[RouteFound]:
    """
    start에서 destination까지 가장 빨리 도착하는 경로 탐색

    Returns:
        RouteFound 또는 None (경로 없음)

    Raises:
        InvalidRouteQueryException: 입력이 잘못된 경우 (Edge Source 조회 전)
        SearchCancelledException: deadline 초과 또는 cancel_event
        Edge Source 예외는 변환 없이 그대로 전파
    """
    validate_route_query(start, destination, start_time)

    strategy = EarliestArrivalStrategy(edge_source, destination, max_legs=max_legs)
    outcome = await best_first_search(
        [PartialRoute.seed(start, start_time)],
        strategy,
        deadline=deadline,
        cancel_event=cancel_event,
    )

    if outcome.status is SearchStatus.CANCELLED:
        raise SearchCancelledException(
            f"{start}에서 {destination}까지 경로 탐색이 중단되었습니다 "
            f"(확장 {outcome.expansions}회)"
        )

    if outcome.status is SearchStatus.EXHAUSTED:
        return None

    route = outcome.route
    return RouteFound(
        departure_ids=route.path,
        total_cost=route.accumulated_cost,
        final_arrival_time=route.current_time,
    )
