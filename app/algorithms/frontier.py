# 탐색 대기 중인 PartialRoute 집합
import heapq
import itertools
from functools import cmp_to_key
from typing import Callable, Iterable, List, Tuple

from app.algorithms.route_state import PartialRoute

RouteComparator = Callable[[PartialRoute, PartialRoute], int]


class Frontier:
    """
    comparator 순서를 유지하는 우선순위 큐

    매 삽입마다 전체 정렬하는 대신 heap 사용
    => insert_all 이후에도 peek_best/pop_best는 전체 내용 기준 최선의 경로 반환
    동순위 경로는 삽입 순서대로 나옴 (sequence 번호) => 같은 입력이면 같은 결과
    중복 제거 없음: 같은 역에 도착한 다른 경로도 각자 경쟁
    """

    def __init__(self, compare: RouteComparator):
        self._key = cmp_to_key(compare)
        self._heap: List[Tuple[object, int, PartialRoute]] = []
        self._sequence = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def peek_best(self) -> PartialRoute:
        if not self._heap:
            raise IndexError("peek_best on empty frontier")
        return self._heap[0][2]

    def pop_best(self) -> PartialRoute:
        if not self._heap:
            raise IndexError("pop_best on empty frontier")
        return heapq.heappop(self._heap)[2]

    def insert_all(self, routes: Iterable[PartialRoute]) -> None:
        for route in routes:
            heapq.heappush(
                self._heap, (self._key(route), next(self._sequence), route)
            )
