"""
시간표 정규화 테스트
"""

import logging

import pytest

from routemap.algorithms.graph import ScheduleGraph
from routemap.algorithms.timetable import (
    ScheduleNode,
    _typical_run_time,
    base_line_name,
    is_reversed_line,
    make_diffs,
    median_low,
    normalize,
)
from routemap.core.config import HOLIDAY, WEEKDAY
from routemap.core.exceptions import InvalidTimeError


class TestNormalize:
    """원본 시간표 => ScheduleNode 리스트"""

    def test_linear_line(self, sample_raw_timetable):
        nodes = normalize(sample_raw_timetable, WEEKDAY)

        assert [(n.station, n.next_station) for n in nodes] == [
            ("中村区役所", "名古屋"),
            ("名古屋", "国際センター"),
            ("国際センター", None),
        ]
        assert all(n.line == "桜通線（徳重行）" for n in nodes)
        assert nodes[0].departure_times == (19800, 20400, 21000)
        assert nodes[1].departure_times == (19860, 20520, 21120)
        assert nodes[2].departure_times == (19980, 20580, 21180)

    def test_typical_run_time_is_lower_median(self, sample_raw_timetable):
        nodes = normalize(sample_raw_timetable, WEEKDAY)

        # 차이 [60, 120, 120] => 120, [120, 60, 60] => 60
        assert nodes[0].typical_run_time == 120
        assert nodes[1].typical_run_time == 60
        assert nodes[2].typical_run_time is None

    def test_filters_by_day_type(self, sample_raw_timetable):
        assert normalize(sample_raw_timetable, HOLIDAY) == []

    def test_loop_wraps_to_first_station(self):
        raw = [
            {
                "type": WEEKDAY,
                "lineName": "名城線（右回り）",
                "loop": True,
                "stations": [
                    {"name": "栄", "time": ["6:00", "6:30"]},
                    {"name": "久屋大通", "time": ["6:02", "6:32"]},
                ],
            }
        ]
        nodes = normalize(raw, WEEKDAY)

        assert nodes[-1].station == "久屋大通"
        assert nodes[-1].next_station == "栄"
        # 6:02 -> 6:30 (28분)
        assert nodes[-1].typical_run_time == 28 * 60

    def test_single_station_loop_has_no_next(self):
        raw = [
            {
                "type": WEEKDAY,
                "lineName": "Shuttle",
                "loop": True,
                "stations": [{"name": "Only", "time": ["6:00"]}],
            }
        ]
        nodes = normalize(raw, WEEKDAY)

        assert nodes[0].next_station is None
        assert nodes[0].typical_run_time is None

    def test_terminus_borrows_reverse_line(self, bidirectional_raw_timetable):
        nodes = {n.key: n for n in normalize(bidirectional_raw_timetable, WEEKDAY)}

        assert nodes[("P", "X線（R行）")].typical_run_time == 120
        # Q -> R(종점): 역방향 R -> Q 시간표에서 180초
        assert nodes[("Q", "X線（R行）")].typical_run_time == 180
        assert nodes[("R", "X線（R行）")].is_terminus
        assert nodes[("Q", "X線（P行）")].typical_run_time == 120

    def test_terminus_without_reverse_line(self):
        raw = [
            {
                "type": WEEKDAY,
                "lineName": "Branch",
                "stations": [
                    {"name": "A", "time": ["6:00"]},
                    {"name": "B", "time": []},
                ],
            }
        ]
        nodes = normalize(raw, WEEKDAY)

        assert nodes[0].typical_run_time is None
        assert nodes[1].is_terminus

    def test_unsorted_departures_are_sorted_with_warning(self, caplog):
        raw = [
            {
                "type": WEEKDAY,
                "lineName": "L",
                "stations": [{"name": "A", "time": ["6:10", "6:00", "6:10"]}],
            }
        ]
        with caplog.at_level(logging.WARNING):
            nodes = normalize(raw, WEEKDAY)

        assert nodes[0].departure_times == (21600, 22200)
        assert "오름차순이 아니거나 중복됨" in caplog.text

    def test_malformed_time_raises(self):
        raw = [
            {
                "type": WEEKDAY,
                "lineName": "L",
                "stations": [{"name": "A", "time": ["6:00", "late"]}],
            }
        ]
        with pytest.raises(InvalidTimeError):
            normalize(raw, WEEKDAY)

    def test_null_time_list_is_empty(self):
        raw = [
            {
                "type": WEEKDAY,
                "lineName": "L",
                "stations": [
                    {"name": "A", "time": ["6:00"]},
                    {"name": "B", "time": None},
                ],
            },
            {"type": WEEKDAY, "lineName": "Empty", "stations": None},
        ]
        nodes = normalize(raw, WEEKDAY)

        assert [n.station for n in nodes] == ["A", "B"]
        assert nodes[1].departure_times == ()
        assert nodes[1].is_terminus

    def test_repeated_station_uses_first_occurrence(self):
        """A -> B -> A -> C: 첫 번째 A의 소요시간은 자기 출발 시각 기준"""
        raw = [
            {
                "type": WEEKDAY,
                "lineName": "L",
                "stations": [
                    {"name": "A", "time": ["6:00", "6:30"]},
                    {"name": "B", "time": ["6:05", "6:35"]},
                    {"name": "A", "time": ["7:00", "7:30"]},
                    {"name": "C", "time": []},
                ],
            }
        ]
        nodes = normalize(raw, WEEKDAY)

        assert nodes[0].typical_run_time == 300
        # B -> A 는 첫 번째 A의 출발 시각으로 계산
        assert nodes[1].typical_run_time == 1500
        assert ScheduleGraph(nodes).get("A", "L") is nodes[0]

    def test_nodes_are_immutable(self, sample_raw_timetable):
        node = normalize(sample_raw_timetable, WEEKDAY)[0]

        with pytest.raises(AttributeError):
            node.next_station = "somewhere"


class TestTypicalRunTime:
    def test_missing_next_node_degrades_to_none(self, caplog):
        """다음 역 노드가 없으면 예외 없이 None + 경고"""
        times_by_key = {("A", "L"): (100, 200)}

        with caplog.at_level(logging.WARNING):
            result = _typical_run_time(
                "A", "L", "Ghost", (100, 200), times_by_key, ["L"]
            )

        assert result is None
        assert "다음 역 시간표를 찾을 수 없음" in caplog.text


class TestHelpers:
    @pytest.mark.parametrize(
        "line_name, expected",
        [
            ("名城線（右回り）", "名城線"),
            ("桜通線（徳重行）", "桜通線"),
            ("LoopLine (clockwise)", "LoopLine"),
            ("Plain", "Plain"),
        ],
    )
    def test_base_line_name(self, line_name, expected):
        assert base_line_name(line_name) == expected

    def test_is_reversed_line(self):
        assert is_reversed_line("名城線（右回り）", "名城線（左回り）")
        assert is_reversed_line("LoopLine (clockwise)", "LoopLine (counter)")
        assert not is_reversed_line("名城線（右回り）", "名城線（右回り）")
        assert not is_reversed_line("名城線（右回り）", "桜通線（徳重行）")

    def test_make_diffs_skips_unmatched(self):
        assert make_diffs([0, 100, 500], [60, 160]) == [60, 60]

    def test_median_low(self):
        assert median_low([]) is None
        assert median_low([5]) == 5
        assert median_low([3, 1, 2, 4]) == 2

    def test_schedule_node_key(self):
        node = ScheduleNode("A", "L", None, ())
        assert node.key == ("A", "L")
        assert node.is_terminus
