"""
시간표 정규화

노선·방향별 원본 시간표(JSON) => (역, 노선) 단위 ScheduleNode 리스트
각 노드는 정렬된 출발 시각과 다음 역까지의 대표 소요시간(중앙값)을 가진다.
"""

import logging
import re
import statistics
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from routemap.algorithms.time_utils import min_value_greater_than, to_seconds

logger = logging.getLogger(__name__)

# '桜通線（徳重行）', 'LoopLine (clockwise)' => 방향 표기 앞부분이 노선명
_DIRECTION_SUFFIX = re.compile(r"\s*[（(]")


@dataclass(frozen=True, slots=True)
class ScheduleNode:
    """(역, 노선-방향) 단위 그래프 정점. 생성 후 불변"""

    station: str
    line: str
    next_station: Optional[str]
    departure_times: Tuple[int, ...]
    typical_run_time: Optional[int] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.station, self.line)

    @property
    def is_terminus(self) -> bool:
        """출발 시각이 하나도 없으면 종점"""
        return not self.departure_times


def base_line_name(line_name: str) -> str:
    """'名城線（右回り）' => '名城線'"""
    return _DIRECTION_SUFFIX.split(line_name, maxsplit=1)[0]


def is_reversed_line(line_name1: str, line_name2: str) -> bool:
    """노선명이 같고 방향만 다르면 True"""
    if line_name1 == line_name2:
        return False
    return base_line_name(line_name1) == base_line_name(line_name2)


def make_diffs(from_times: Sequence[int], to_times: Sequence[int]) -> List[int]:
    """각 출발 시각 d에 대해, to_times 중 d보다 큰 최솟값과의 차이"""
    diffs = []
    for departure in from_times:
        arrival = min_value_greater_than(to_times, departure)
        if arrival != float("inf"):
            diffs.append(arrival - departure)
    return diffs


def median_low(values: Sequence[int]) -> Optional[int]:
    """짝수 개일 때는 작은 쪽 중앙값 (정수 유지)"""
    if not values:
        return None
    return statistics.median_low(values)


def _parse_departures(time_strings: Iterable[str], station: str, line: str) -> Tuple[int, ...]:
    parsed = [to_seconds(s) for s in time_strings]
    normalized = tuple(sorted(set(parsed)))
    if len(normalized) != len(parsed) or list(normalized) != parsed:
        logger.warning(
            f"출발 시각이 오름차순이 아니거나 중복됨, 정렬하여 사용: {station} / {line}"
        )
    return normalized


def _typical_run_time(
    station: str,
    line: str,
    next_station: Optional[str],
    curr_times: Tuple[int, ...],
    times_by_key: Dict[Tuple[str, str], Tuple[int, ...]],
    line_names: List[str],
) -> Optional[int]:
    if next_station is None:
        return None

    next_times = times_by_key.get((next_station, line))
    if next_times is None:
        # 다음 역 데이터 없음 => 전체 빌드를 실패시키지 않고 None으로 강등
        logger.warning(f"다음 역 시간표를 찾을 수 없음: {station} → {next_station} ({line})")
        return None

    # 종점 바로 앞 역: 다음 역(종점)의 출발 시각이 비어 있으므로
    # 같은 선로의 역방향 노선 시간표로 소요시간을 구한다
    if curr_times and not next_times:
        reversed_line = next(
            (name for name in line_names if is_reversed_line(name, line)), None
        )
        if reversed_line is None:
            return None
        curr_times = times_by_key.get((next_station, reversed_line), curr_times)
        next_times = times_by_key.get((station, reversed_line), next_times)

    return median_low(make_diffs(curr_times, next_times))


def normalize(raw_timetable: List[Dict], day_type: str) -> List[ScheduleNode]:
    """
    원본 시간표에서 평일 또는 토일휴일 ScheduleNode 리스트를 만든다

    Args:
        raw_timetable: [{type, lineName, loop?, stations: [{name, time: ['5:30', ...]}]}]
        day_type: '平日' or '土日休'

    Returns:
        시간표에 나열된 순서대로의 ScheduleNode 리스트

    Raises:
        InvalidTimeError: 시각 문자열을 해석할 수 없을 때
    """
    drafts = []
    line_names: List[str] = []

    for line_entry in raw_timetable:
        if line_entry.get("type") != day_type:
            continue

        line_name = line_entry["lineName"]
        stations = line_entry.get("stations") or []
        is_loop = bool(line_entry.get("loop", False))
        if line_name not in line_names:
            line_names.append(line_name)

        for i, station in enumerate(stations):
            next_station = None
            if i < len(stations) - 1:
                next_station = stations[i + 1]["name"]
            elif is_loop and len(stations) > 1:
                next_station = stations[0]["name"]

            departures = _parse_departures(
                station.get("time") or [], station["name"], line_name
            )
            drafts.append((station["name"], line_name, next_station, departures))

    # 같은 노선에 같은 역이 두 번 나오면 첫 번째를 사용 (ScheduleGraph와 동일)
    times_by_key: Dict[Tuple[str, str], Tuple[int, ...]] = {}
    for name, line, _, times in drafts:
        times_by_key.setdefault((name, line), times)

    nodes = [
        ScheduleNode(
            station=name,
            line=line,
            next_station=next_station,
            departure_times=times,
            typical_run_time=_typical_run_time(
                name, line, next_station, times, times_by_key, line_names
            ),
        )
        for name, line, next_station, times in drafts
    ]

    logger.info(
        f"시간표 정규화 완료: type={day_type}, 노선 {len(line_names)}개, 노드 {len(nodes)}개"
    )
    return nodes
