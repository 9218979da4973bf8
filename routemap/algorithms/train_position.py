"""
시간표 기반 열차 위치 추정

실시간 위치 피드가 아니라, 시간표상 시각 t에 두 역 사이를 달리고 있어야 할 열차를 구한다.
순환선의 운행 단절 판단 허용 오차(tolerance)는 정책 파라미터로 받는다.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Union

from routemap.algorithms.graph import ScheduleGraph
from routemap.algorithms.time_utils import (
    max_value_at_most,
    min_value_at_least,
    min_value_greater_than,
)
from routemap.algorithms.timetable import ScheduleNode


@dataclass(slots=True)
class RunningTrain:
    line: str
    from_station: str
    to_station: str
    departed_at: int
    arrives_at: int
    observed_at: int

    @property
    def progress(self) -> float:
        """출발역 0.0 ~ 도착역 1.0"""
        span = self.arrives_at - self.departed_at
        if span <= 0:
            return 1.0
        return min(max((self.observed_at - self.departed_at) / span, 0.0), 1.0)


def is_between(
    curr: ScheduleNode, nxt: ScheduleNode, t: int, tolerance: int
) -> bool:
    """
    시각 t에 curr -> nxt 사이에 열차가 있으면 True

    - t1: curr에서 t 이전(포함) 마지막 출발
    - 다음 역이 종점이면 t - t1 <= 대표 소요시간
    - 아니면 t1 이후 nxt의 첫 출발 t2에 대해 t <= t2 이고,
      (t2 - t1)이 대표 소요시간과 tolerance 이내로 같거나 t - t1 <= 대표 소요시간
    """
    run_time = curr.typical_run_time
    if run_time is None:
        return False

    t1 = max_value_at_most(curr.departure_times, t)
    if t1 == -math.inf:
        return False

    if not nxt.departure_times:
        return t - t1 <= run_time

    t2 = min_value_greater_than(nxt.departure_times, t1)
    if t2 == math.inf or t > t2:
        return False

    if abs(t2 - t1 - run_time) <= tolerance:
        return True

    return t - t1 <= run_time


def extract_schedules(
    line_nodes: Sequence[ScheduleNode], start_station: str
) -> List[ScheduleNode]:
    """start_station부터 next를 따라간 노드 리스트 (순환선은 한 바퀴까지)"""
    by_station = {node.station: node for node in line_nodes}
    result: List[ScheduleNode] = []

    target = start_station
    while target is not None and len(result) < len(line_nodes):
        node = by_station.get(target)
        if node is None:
            break
        result.append(node)
        target = node.next_station

    return result


def downstream_times(
    schedules: Sequence[ScheduleNode], current_time: int, tolerance: int
) -> Dict[str, int]:
    """
    열차를 따라가며 역 이름 -> 출발 시각 맵을 만든다

    종점·막차이거나, 직전 역 시각 + 대표 소요시간 + tolerance 보다 늦은 출발밖에 없으면
    (순환선 운행 단절) 직전 시각 + 대표 소요시간을 그 역의 시각으로 하고 중단한다
    """
    result: Dict[str, int] = {}
    if not schedules:
        return result

    first = schedules[0]
    first_time = min_value_at_least(first.departure_times, current_time)
    if first_time == math.inf:
        return result
    result[first.station] = first_time

    prev, prev_time = first, first_time
    for schedule in schedules[1:]:
        time = min_value_at_least(schedule.departure_times, prev_time)
        run_time = prev.typical_run_time

        if time == math.inf or (
            run_time is not None and time > prev_time + run_time + tolerance
        ):
            if run_time is not None:
                result[schedule.station] = prev_time + run_time
            break

        result[schedule.station] = time
        prev, prev_time = schedule, time

    return result


def running_trains(
    nodes: Union[ScheduleGraph, Sequence[ScheduleNode]], t: int, tolerance: int
) -> List[RunningTrain]:
    """시각 t에 역 사이를 달리고 있는 열차 목록"""
    graph = nodes if isinstance(nodes, ScheduleGraph) else ScheduleGraph(nodes)
    trains: List[RunningTrain] = []

    for curr in graph:
        if curr.next_station is None:
            continue
        nxt = graph.get(curr.next_station, curr.line)
        if nxt is None or not is_between(curr, nxt, t, tolerance):
            continue

        departed_at = max_value_at_most(curr.departure_times, t)
        arrives_at = min_value_greater_than(nxt.departure_times, departed_at)
        if arrives_at == math.inf:
            arrives_at = departed_at + curr.typical_run_time

        trains.append(
            RunningTrain(
                line=curr.line,
                from_station=curr.station,
                to_station=nxt.station,
                departed_at=departed_at,
                arrives_at=arrives_at,
                observed_at=t,
            )
        )

    return trains
