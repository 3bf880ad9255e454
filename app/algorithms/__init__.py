"""
best-first 경로 탐색 엔진 (Frontier, 탐색 루프, 최단 도착 전략)
"""

from app.algorithms.route_state import PartialRoute
from app.algorithms.edge_source import EdgeSource, EdgeCandidate
from app.algorithms.frontier import Frontier
from app.algorithms.best_first import (
    SearchStrategy,
    SearchStatus,
    SearchOutcome,
    best_first_search,
)
from app.algorithms.earliest_arrival import (
    EarliestArrivalStrategy,
    RouteFound,
    compare_routes,
    find_route,
)

__all__ = [
    "PartialRoute",
    "EdgeSource",
    "EdgeCandidate",
    "Frontier",
    "SearchStrategy",
    "SearchStatus",
    "SearchOutcome",
    "best_first_search",
    "EarliestArrivalStrategy",
    "RouteFound",
    "compare_routes",
    "find_route",
]
