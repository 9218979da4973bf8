"""
시각 문자열 <=> 0:00부터의 경과 초 변환

운행일 기준: 0:00 ~ 4:59 는 전날의 24:00 ~ 28:59 로 취급한다 (심야 열차).
시간표의 "25:10" 과 현재 시각 오전 1:10 이 같은 축에서 비교되도록 하기 위함.
"""

import math
import re
from bisect import bisect_left, bisect_right
from datetime import datetime, time
from typing import Optional, Sequence, Union

from routemap.core.config import settings
from routemap.core.exceptions import InvalidTimeError

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def to_seconds(time_string: str) -> int:
    """'10:35' => 38100"""
    if not isinstance(time_string, str):
        raise InvalidTimeError(f"시각은 문자열이어야 합니다: {time_string!r}")

    match = _TIME_PATTERN.match(time_string.strip())
    if not match:
        raise InvalidTimeError(f"시각 형식이 올바르지 않습니다: {time_string!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes >= 60:
        raise InvalidTimeError(f"분은 0~59 범위여야 합니다: {time_string!r}")

    return hours * 3600 + minutes * 60


def now_to_seconds(
    wall_clock: Union[datetime, time], night_end_hour: Optional[int] = None
) -> int:
    """
    현재 시각을 운행일 0:00부터의 경과 초로 변환

    5:32 => 19920, 0:05 => 86700
    """
    if night_end_hour is None:
        night_end_hour = settings.NIGHT_SERVICE_END_HOUR

    hour = wall_clock.hour
    if hour < night_end_hour:
        hour += 24
    return hour * 3600 + wall_clock.minute * 60 + wall_clock.second


def seconds_to_time_string(sec: int) -> str:
    """38100 => '10:35' (24시 이후도 그대로 25:10 처럼 표기)"""
    hours = sec // 3600
    minutes = (sec % 3600) // 60
    return f"{hours}:{minutes:02d}"


def min_value_greater_than(values: Sequence[int], n: float) -> float:
    """오름차순 배열에서 n보다 큰 최솟값, 없으면 inf"""
    idx = bisect_right(values, n)
    return values[idx] if idx < len(values) else math.inf


def min_value_at_least(values: Sequence[int], n: float) -> float:
    """오름차순 배열에서 n 이상의 최솟값, 없으면 inf"""
    idx = bisect_left(values, n)
    return values[idx] if idx < len(values) else math.inf


def max_value_at_most(values: Sequence[int], n: float) -> float:
    """오름차순 배열에서 n 이하의 최댓값, 없으면 -inf"""
    idx = bisect_right(values, n)
    return values[idx - 1] if idx > 0 else -math.inf
