# app/utils/formatters.py

"""
날짜와 금액 형식 변환 유틸리티.

SQLite 등 일부 드라이버는 TIMESTAMP(timezone=True) 컬럼을 시간대 정보 없이 돌려주므로,
시간대가 없는 datetime은 UTC로 간주합니다.
"""

import math
from datetime import UTC, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

CENT = Decimal("0.01")


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """datetime을 UTC 기준의 aware datetime으로 변환합니다."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def utc_now() -> datetime:
    return datetime.now(UTC)


def is_past_day(value: datetime, now: Optional[datetime] = None) -> bool:
    """value의 UTC 날짜가 오늘(UTC)보다 이전이면 True. 오늘 날짜는 과거로 보지 않습니다."""
    today = (now or utc_now()).astimezone(UTC).date()
    return as_utc(value).date() < today


def days_remaining(return_date: datetime, now: Optional[datetime] = None) -> int:
    """반납 예정일까지 남은 일수 (올림). 이미 지났으면 0 이하입니다."""
    delta = as_utc(return_date) - (now or utc_now())
    return math.ceil(delta / timedelta(days=1))


def quantize_money(value: Union[Decimal, int, float, str]) -> Decimal:
    """금액을 소수점 둘째 자리로 반올림합니다 (ROUND_HALF_UP)."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
