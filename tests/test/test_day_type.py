"""
운행일 유형 판단 테스트
"""

from datetime import date, datetime

import pytest

from routemap.algorithms.day_type import holiday_set, resolve_day_type, service_date
from routemap.core.config import DAY_TYPES, HOLIDAY, WEEKDAY

HOLIDAYS = ["2022/10/10", "2022/11/3", "2022/11/23"]


class TestResolveDayType:
    @pytest.mark.parametrize(
        "today, expected",
        [
            (date(2022, 10, 11), WEEKDAY),  # 화
            (date(2022, 10, 8), HOLIDAY),  # 토
            (date(2022, 10, 9), HOLIDAY),  # 일
            (date(2022, 10, 10), HOLIDAY),  # 스포츠의 날
            (date(2022, 11, 3), HOLIDAY),
        ],
    )
    def test_resolve(self, today, expected):
        assert resolve_day_type(today, HOLIDAYS) == expected

    def test_accepts_datetime(self):
        assert resolve_day_type(datetime(2022, 11, 23, 8, 0), HOLIDAYS) == HOLIDAY

    def test_accepts_parsed_holiday_set(self):
        parsed = holiday_set(HOLIDAYS)
        assert resolve_day_type(date(2022, 11, 3), parsed) == HOLIDAY
        assert resolve_day_type(date(2022, 11, 4), parsed) == WEEKDAY

    def test_empty_holiday_list(self):
        assert resolve_day_type(date(2022, 10, 10), []) == WEEKDAY

    def test_zero_padded_holiday(self):
        assert holiday_set(["2022/01/03", " 2022/1/4 "]) == {
            date(2022, 1, 3),
            date(2022, 1, 4),
        }

    def test_api_aliases(self):
        assert DAY_TYPES == {"weekday": "平日", "holiday": "土日休"}


class TestServiceDate:
    def test_late_night_belongs_to_previous_day(self):
        assert service_date(datetime(2022, 10, 11, 0, 30), 5) == date(2022, 10, 10)

    def test_after_night_end(self):
        assert service_date(datetime(2022, 10, 11, 5, 0), 5) == date(2022, 10, 11)

    def test_month_boundary(self):
        assert service_date(datetime(2022, 11, 1, 4, 59), 5) == date(2022, 10, 31)
