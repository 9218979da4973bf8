from collections import abc
from datetime import date, datetime, timedelta
from typing import AbstractSet, Iterable, Set, Union

from routemap.core.config import HOLIDAY, WEEKDAY


def _parse_holiday(value: str) -> date:
    """'2022/10/10', '2022/1/3' 형식"""
    year, month, day = (int(part) for part in value.strip().split("/"))
    return date(year, month, day)


def holiday_set(holidays: Iterable[str]) -> Set[date]:
    return {_parse_holiday(h) for h in holidays}


def service_date(now: datetime, night_end_hour: int) -> date:
    """새벽 운행 시간대(0시 ~ night_end_hour 전)는 전날 운행일에 속한다"""
    if now.hour < night_end_hour:
        return (now - timedelta(days=1)).date()
    return now.date()


def resolve_day_type(
    today: Union[date, datetime], holidays: Union[AbstractSet[date], Iterable[str]]
) -> str:
    """
    날짜와 공휴일 목록으로 '平日' or '土日休' 반환

    토·일요일 또는 공휴일이면 土日休
    holidays: 파싱된 날짜 set (캐시) 또는 'YYYY/M/D' 문자열 목록
    """
    if isinstance(today, datetime):
        today = today.date()

    if today.weekday() >= 5:
        return HOLIDAY
    if not isinstance(holidays, abc.Set):
        holidays = holiday_set(holidays)
    if today in holidays:
        return HOLIDAY
    return WEEKDAY
