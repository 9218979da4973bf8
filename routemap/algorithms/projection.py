from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from routemap.algorithms.dijkstra import PathEntry, PathState, find_destination, route
from routemap.algorithms.graph import ScheduleGraph
from routemap.algorithms.timetable import ScheduleNode
from routemap.algorithms.time_utils import seconds_to_time_string


@dataclass(slots=True)
class Leg:
    """한 노선을 타고 이동한 구간 (승차역 -> 하차역)"""

    line: str
    from_station: str
    departure: int
    to_station: str
    arrival: int
    stops: List[str] = field(default_factory=list)

    @property
    def duration(self) -> int:
        return self.arrival - self.departure


@dataclass(slots=True)
class RoutingResult:
    """
    역 이름 -> 시각 리스트

    stations 의 키는 처음 방문한 순서(출발지 -> 목적지),
    각 시각 리스트는 목적지에 가까운 것부터 (환승역은 2개 이상)
    """

    origin: str
    destination: str
    arrival_time: int
    stations: Dict[str, List[int]]
    path: List[PathEntry]
    legs: List[Leg]

    def __bool__(self) -> bool:
        return True

    @property
    def departure_time(self) -> int:
        return self.path[0].time

    @property
    def transfer_stations(self) -> List[str]:
        return [leg.from_station for leg in self.legs[1:]]

    def label_for(self, station: str) -> Optional[int]:
        """같은 역에 시각이 여러 개면 목적지에 가까운 쪽"""
        times = self.stations.get(station)
        return times[0] if times else None

    def labels(self) -> Dict[str, str]:
        """역 이름 -> 표시용 시각 문자열"""
        return {
            station: seconds_to_time_string(times[0])
            for station, times in self.stations.items()
        }


@dataclass(slots=True)
class Unreachable:
    """경로 없음 (막차 종료 등). 예외가 아니라 정상 결과로 취급"""

    origin: Optional[str]
    destination: str
    reason: str = "no_service"

    def __bool__(self) -> bool:
        return False


def summarize(state: PathState) -> List[Leg]:
    """
    연속해서 같은 노선인 구간을 하나의 Leg로 묶는다

    출발역에서 바로 환승한 경우처럼 승차 구간이 없는 노드는 제외
    """
    legs: List[Leg] = []
    group: List[PathEntry] = []

    def flush():
        if len(group) > 1:
            legs.append(
                Leg(
                    line=group[0].line,
                    from_station=group[0].station,
                    departure=group[0].time,
                    to_station=group[-1].station,
                    arrival=group[-1].time,
                    stops=[entry.station for entry in group],
                )
            )

    for entry in state.chronological_path():
        if group and entry.line != group[-1].line:
            flush()
            group = []
        group.append(entry)
    flush()

    return legs


def project(
    destination_station: str, settled_nodes: Sequence[PathState]
) -> Union[RoutingResult, Unreachable]:
    """
    확정된 노드들에서 목적지까지의 경로를 역 -> 시각 맵으로 변환

    Returns:
        RoutingResult, 목적지에 도달하지 못하면 Unreachable
    """
    state = find_destination(destination_station, settled_nodes)
    if state is None:
        origin = None
        origins = [s for s in settled_nodes if s.arrived_by is None]
        if origins:
            origin = origins[0].station
        return Unreachable(origin=origin, destination=destination_station)

    chronological = state.chronological_path()

    stations: Dict[str, List[int]] = {}
    for entry in chronological:
        stations.setdefault(entry.station, []).append(entry.time)
    for times in stations.values():
        times.reverse()

    return RoutingResult(
        origin=chronological[0].station,
        destination=destination_station,
        arrival_time=state.earliest_arrival,
        stations=stations,
        path=chronological,
        legs=summarize(state),
    )


def find_route(
    origin_station: str,
    origin_time: int,
    destination_station: str,
    transfer_penalty: int,
    nodes: Union[ScheduleGraph, Sequence[ScheduleNode]],
) -> Union[RoutingResult, Unreachable]:
    """출발역·시각에서 도착역까지 탐색 후 바로 역 -> 시각 맵으로 변환"""
    settled = route(origin_station, origin_time, transfer_penalty, nodes)
    return project(destination_station, settled)
