"""
Cache / loader 모듈 테스트
"""

import json
from datetime import date

import pytest

from routemap.core.config import HOLIDAY, WEEKDAY, settings
from routemap.core.exceptions import TimetableLoadException
from routemap.db.loader import load_holidays, load_timetable


class TestTimetableCache:
    """번들 샘플 시간표 기준"""

    def test_graphs_per_day_type(self, fresh_cache):
        weekday = fresh_cache.get_graph(WEEKDAY)
        holiday = fresh_cache.get_graph(HOLIDAY)

        # 6개 노선-방향 x 4역
        assert len(weekday) == 24
        assert len(holiday) == 24
        assert weekday is not holiday

    def test_alias_returns_same_graph(self, fresh_cache):
        assert fresh_cache.get_graph("weekday") is fresh_cache.get_graph(WEEKDAY)
        assert fresh_cache.get_graph("holiday") is fresh_cache.get_graph(HOLIDAY)

    def test_unknown_day_type(self, fresh_cache):
        with pytest.raises(KeyError):
            fresh_cache.get_graph("祝日")

    def test_station_names(self, fresh_cache):
        names = fresh_cache.get_station_names()

        assert len(names) == 9
        assert names[0] == "名古屋"
        assert {"栄", "千種", "金山", "久屋大通"} <= set(names)

    def test_reverse_line_run_time_in_sample(self, fresh_cache):
        """栄 -> 千種(종점) 소요시간은 역방향 千種 -> 栄 에서 180초"""
        node = fresh_cache.get_graph(WEEKDAY).get("栄", "東山線（藤が丘行）")
        assert node.typical_run_time == 180

    def test_holidays_loaded(self, fresh_cache):
        assert date(2026, 10, 12) in fresh_cache.get_holidays()

    def test_initialize_is_idempotent(self, fresh_cache):
        graph = fresh_cache.get_graph(WEEKDAY)
        fresh_cache.initialize_cache()

        assert fresh_cache.get_graph(WEEKDAY) is graph

    def test_lazy_initialization(self, empty_cache):
        assert not empty_cache.is_initialized()

        assert len(empty_cache.get_graph(WEEKDAY)) == 24
        assert empty_cache.is_initialized()

    def test_clear_and_reload(self, fresh_cache):
        old = fresh_cache.get_graph(WEEKDAY)

        fresh_cache.clear_cache()
        assert not fresh_cache.is_initialized()

        fresh_cache.reload_cache()
        assert fresh_cache.is_initialized()
        assert fresh_cache.get_graph(WEEKDAY) is not old


class TestSearchStations:
    @pytest.mark.parametrize(
        "keyword, expected",
        [
            ("栄", ["栄"]),
            ("久屋", ["久屋大通"]),
            ("  名古屋 ", ["名古屋"]),
            ("없는역", []),
            ("   ", []),
        ],
    )
    def test_search(self, fresh_cache, keyword, expected):
        assert fresh_cache.search_stations_by_name(keyword) == expected

    def test_priority_and_limit(self, fresh_cache, monkeypatch):
        monkeypatch.setattr(
            fresh_cache, "_station_names_cache", ["Sakae-machi", "Osakae", "Sakae"]
        )

        assert fresh_cache.search_stations_by_name("sakae") == [
            "Sakae",
            "Sakae-machi",
            "Osakae",
        ]
        assert fresh_cache.search_stations_by_name("sakae", limit=1) == ["Sakae"]


class TestLoader:
    def test_missing_timetable_file(self, tmp_path):
        with pytest.raises(TimetableLoadException) as exc_info:
            load_timetable(str(tmp_path / "missing.json"))

        assert exc_info.value.code == "TIMETABLE_LOAD_ERROR"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(TimetableLoadException):
            load_timetable(str(path))

    def test_entry_without_line_name(self, tmp_path):
        path = tmp_path / "timetable.json"
        path.write_text(json.dumps([{"type": "平日", "stations": []}]), encoding="utf-8")

        with pytest.raises(TimetableLoadException):
            load_timetable(str(path))

    def test_invalid_holiday_list(self, tmp_path):
        path = tmp_path / "holiday.json"
        path.write_text(json.dumps({"2022/10/10": True}), encoding="utf-8")

        with pytest.raises(TimetableLoadException):
            load_holidays(str(path))

    def test_cache_initialization_fails_on_missing_file(
        self, empty_cache, monkeypatch, tmp_path
    ):
        monkeypatch.setattr(settings, "TIMETABLE_PATH", str(tmp_path / "none.json"))

        with pytest.raises(TimetableLoadException):
            empty_cache.initialize_cache()

        assert not empty_cache.is_initialized()

    def test_cache_initialization_fails_on_bad_holiday_format(
        self, empty_cache, monkeypatch, tmp_path
    ):
        path = tmp_path / "holiday.json"
        path.write_text(json.dumps(["2026/1/1", "2026-01-12"]), encoding="utf-8")
        monkeypatch.setattr(settings, "HOLIDAY_PATH", str(path))

        with pytest.raises(TimetableLoadException) as exc_info:
            empty_cache.initialize_cache()

        assert exc_info.value.code == "TIMETABLE_LOAD_ERROR"
        assert not empty_cache.is_initialized()
        assert empty_cache._graphs_cache == {}
