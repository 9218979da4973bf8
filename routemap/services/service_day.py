# 요청의 운행일 유형 / 기준 시각 해석 (서비스 공용)

from datetime import datetime
from typing import Optional

from routemap.algorithms.day_type import resolve_day_type, service_date
from routemap.algorithms.time_utils import now_to_seconds, to_seconds
from routemap.core.config import DAY_TYPES, settings
from routemap.core.exceptions import RoutemapException
from routemap.db.cache import get_holidays


def resolve_request_day_type(day_type: Optional[str], now: datetime) -> str:
    """
    'weekday' / 'holiday' 별칭 또는 시간표 태그 그대로,
    생략 시 운행일(새벽은 전날) 기준으로 평일/토일휴일 판단
    """
    if day_type:
        resolved = DAY_TYPES.get(day_type, day_type)
        if resolved not in DAY_TYPES.values():
            raise RoutemapException(
                f"알 수 없는 운행일 유형입니다: {day_type}", code="INVALID_DAY_TYPE"
            )
        return resolved

    today = service_date(now, settings.NIGHT_SERVICE_END_HOUR)
    return resolve_day_type(today, get_holidays())


def resolve_request_time(time_string: Optional[str], now: datetime) -> int:
    """'H:MM' 이 주어지면 그대로, 생략 시 현재 시각 (새벽은 24시 이후로)"""
    if time_string:
        return to_seconds(time_string)
    return now_to_seconds(now)
