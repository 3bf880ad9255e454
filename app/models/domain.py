from dataclasses import dataclass, asdict
from typing import Any, Dict

# domain 정의


# 운행 구간(departure) 한 건 => 생성 후 변경 없음
# 시각은 epoch ms로 통일
@dataclass(frozen=True)
class Departure:
    departure_id: str
    departing_station: str
    departing_time: int
    arrival_station: str
    arrival_time: int
    ticket_price: float
    number_of_seats: int  # 탐색에는 사용하지 않음

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
