# 시스템 경계에서만 사용하는 시각 변환
# 내부 연산은 epoch ms 정수로 통일
from datetime import datetime, timezone
from typing import Union

TimestampLike = Union[int, float, str, datetime]


def to_epoch_ms(value: TimestampLike) -> int:
    """
    datetime / ISO 문자열 / epoch ms 숫자 -> epoch ms 정수

    timezone이 없는 datetime은 UTC로 간주
    """
    if isinstance(value, bool):
        raise TypeError("bool은 시각으로 사용할 수 없습니다")

    if isinstance(value, (int, float)):
        return int(value)

    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
        # "Z" 접미사 대응
        value = datetime.fromisoformat(text.replace("Z", "+00:00"))

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(round(value.timestamp() * 1000))

    raise TypeError(f"지원하지 않는 시각 형식: {type(value).__name__}")


def from_epoch_ms(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
