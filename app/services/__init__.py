"""
Business logic services
"""

from app.services.route_search_service import RouteSearchService
from app.services.departure_service import DepartureService
from app.services.edge_sources import (
    InMemoryEdgeSource,
    DatabaseEdgeSource,
    earliest_arrival_per_destination,
)

__all__ = [
    "RouteSearchService",
    "DepartureService",
    "InMemoryEdgeSource",
    "DatabaseEdgeSource",
    "earliest_arrival_per_destination",
]
