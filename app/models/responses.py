from typing import List
from pydantic import BaseModel, Field

# service 별 응답 구조 정의


class DepartureResponse(BaseModel):
    departure_id: str = Field(..., description="departure ID")
    departing_station: str = Field(..., description="출발역")
    departing_time: int = Field(..., description="출발 시각 (epoch ms)")
    arrival_station: str = Field(..., description="도착역")
    arrival_time: int = Field(..., description="도착 시각 (epoch ms)")
    ticket_price: float = Field(..., description="요금")
    number_of_seats: int = Field(..., description="좌석 수")


# 경로 탐색 응답 => 가장 빨리 도착하는 경로 하나
class RouteSearchResponse(BaseModel):
    departure_ids: List[str] = Field(..., description="이용 departure 순서")
    total_cost: float = Field(..., description="총 요금")
    final_arrival_time: int = Field(..., description="최종 도착 시각 (epoch ms)")
