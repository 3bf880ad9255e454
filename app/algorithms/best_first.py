"""
비동기 best-first 탐색 루프

목적지 판정, 확장, 비교는 SearchStrategy로 주입받음
=> 테스트에서 가짜 Edge Source를 그대로 끼워 넣을 수 있음
"""

import asyncio
import enum
import logging
import time
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence

from app.algorithms.frontier import Frontier
from app.algorithms.route_state import PartialRoute

logger = logging.getLogger(__name__)


class SearchStrategy(Protocol):
    def is_goal(self, route: PartialRoute) -> bool: ...

    async def expand(self, route: PartialRoute) -> Sequence[PartialRoute]: ...

    def compare(self, a: PartialRoute, b: PartialRoute) -> int: ...


class SearchStatus(str, enum.Enum):
    SEARCHING = "searching"
    FOUND = "found"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SearchOutcome:
    status: SearchStatus
    route: Optional[PartialRoute] = None
    # 확장(Edge Source 조회) 횟수 => 메트릭 용도
    expansions: int = 0


def _is_cancelled(
    deadline: Optional[float], cancel_event: Optional[asyncio.Event]
) -> bool:
    if cancel_event is not None and cancel_event.is_set():
        return True
    return deadline is not None and time.monotonic() >= deadline


async def best_first_search(
    initial_routes: Iterable[PartialRoute],
    strategy: SearchStrategy,
    *,
    deadline: Optional[float] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> SearchOutcome:
    """
    frontier에서 최선의 경로를 꺼내 목적지 판정 -> 확장 -> 병합 반복

    Args:
        initial_routes: 시작 경로들
        strategy: is_goal / expand / compare 구현체
        deadline: time.monotonic() 기준 종료 시각, 대기 중인 expand에도 적용
        cancel_event: set 되면 다음 반복에서 중단

    Returns:
        SearchOutcome (FOUND | EXHAUSTED | CANCELLED)

    expand에서 발생한 예외는 그대로 전파 (재시도, 부분 결과 없음)
    """
    frontier = Frontier(strategy.compare)
    frontier.insert_all(initial_routes)

    status = SearchStatus.SEARCHING
    expansions = 0

    while status is SearchStatus.SEARCHING:
        if _is_cancelled(deadline, cancel_event):
            logger.info(f"탐색 중단: 확장 {expansions}회, frontier={len(frontier)}")
            return SearchOutcome(SearchStatus.CANCELLED, expansions=expansions)

        if frontier.is_empty():
            status = SearchStatus.EXHAUSTED
            continue

        best = frontier.peek_best()
        if strategy.is_goal(best):
            # 목적지 경로는 pop하지 않고 그대로 반환
            logger.info(
                f"경로 발견: 구간 {len(best.path)}개, 확장 {expansions}회"
            )
            return SearchOutcome(SearchStatus.FOUND, best, expansions)

        route = frontier.pop_best()
        expansions += 1

        if deadline is None:
            successors = await strategy.expand(route)
        else:
            remaining = deadline - time.monotonic()
            # 시간 초과와 expand가 던진 TimeoutError를 구분하기 위해 task로 대기
            task = asyncio.ensure_future(strategy.expand(route))
            done, _ = await asyncio.wait({task}, timeout=max(remaining, 0))
            if task not in done:
                task.cancel()
                logger.info(f"탐색 시간 초과: 확장 {expansions}회")
                return SearchOutcome(SearchStatus.CANCELLED, expansions=expansions)
            # expand 예외는 여기서 그대로 다시 발생
            successors = task.result()

        logger.debug(
            f"확장: {route.current_station} -> 후속 경로 {len(successors)}개"
        )
        frontier.insert_all(successors)

    logger.info(f"경로 없음: 확장 {expansions}회")
    return SearchOutcome(status, expansions=expansions)
