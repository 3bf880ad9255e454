from typing import Any
from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.timestamps import to_epoch_ms

# service별 requests 구조 정의


def _normalize_time(value: Any) -> int:
    # ISO 문자열, datetime, epoch ms 모두 허용 -> epoch ms
    try:
        return to_epoch_ms(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"시각 형식이 올바르지 않습니다: {e}")


# departure 생성
class DepartureCreateRequest(BaseModel):
    departing_station: str = Field(..., min_length=1, description="출발역")
    departing_time: int = Field(..., description="출발 시각 (epoch ms 또는 ISO 8601)")
    arrival_station: str = Field(..., min_length=1, description="도착역")
    arrival_time: int = Field(..., description="도착 시각 (epoch ms 또는 ISO 8601)")
    ticket_price: float = Field(..., ge=0, description="요금")
    number_of_seats: int = Field(..., ge=0, description="좌석 수")

    @field_validator("departing_time", "arrival_time", mode="before")
    @classmethod
    def normalize_time(cls, value: Any) -> int:
        return _normalize_time(value)

    @model_validator(mode="after")
    def check_time_order(self) -> "DepartureCreateRequest":
        if self.arrival_time < self.departing_time:
            raise ValueError("도착 시각은 출발 시각보다 빠를 수 없습니다")
        return self


# 경로 탐색 요청
class RouteSearchRequest(BaseModel):
    time: int = Field(..., description="탐색 시작 시각 (epoch ms 또는 ISO 8601)")
    start: str = Field(..., min_length=1, description="출발역")
    destination: str = Field(..., min_length=1, description="목적지")

    @field_validator("time", mode="before")
    @classmethod
    def normalize_time(cls, value: Any) -> int:
        return _normalize_time(value)
