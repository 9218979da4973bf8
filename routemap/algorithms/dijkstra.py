# 시간 의존 다익스트라 (최소 도착 시각)
import heapq
import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from routemap.algorithms.graph import Edge, EdgeKind, ScheduleGraph
from routemap.algorithms.time_utils import min_value_at_least, min_value_greater_than
from routemap.algorithms.timetable import ScheduleNode

logger = logging.getLogger(__name__)

INFINITY = math.inf


class PathEntry(NamedTuple):
    station: str
    line: str
    time: int

    def __str__(self) -> str:
        return f"{self.station}:{self.time}"


@dataclass(slots=True)
class PathState:
    """
    탐색 중인 (역, 노선) 노드

    path는 목적지 -> 출발지 순서 (갱신 시 앞에 추가)
    settled 이후에는 earliest_arrival, path가 변하지 않는다
    """

    node: ScheduleNode
    earliest_arrival: float = INFINITY
    path: List[PathEntry] = field(default_factory=list)
    # 마지막 갱신이 어떤 간선으로 이루어졌는지 (출발 노드는 None)
    arrived_by: Optional[EdgeKind] = None
    settled: bool = False
    settle_order: int = -1

    @property
    def station(self) -> str:
        return self.node.station

    @property
    def line(self) -> str:
        return self.node.line

    @property
    def next_station(self) -> Optional[str]:
        return self.node.next_station

    @property
    def typical_run_time(self) -> Optional[int]:
        return self.node.typical_run_time

    @property
    def is_reached(self) -> bool:
        return self.earliest_arrival != INFINITY

    def chronological_path(self) -> List[PathEntry]:
        """출발지 -> 목적지 순서"""
        return self.path[::-1]


class TimeDependentDijkstra:
    """
    (역, 노선) 그래프 위의 단일 출발 최소 도착 시각 탐색

    - 같은 노선 다음 역: 추가 비용 0
    - 같은 역 다른 노선: 환승 시간(transfer_penalty) 추가
    - 다음 노드의 시간표에서 (도착 + 환승) 보다 큰 최소 출발 시각을 도착 시각으로 사용
    """

    def __init__(self, graph: ScheduleGraph):
        self.graph = graph

    def route(
        self, origin_station: str, origin_time: int, transfer_penalty: int
    ) -> List[PathState]:
        """
        모든 도달 가능한 노드를 확정 순서대로 반환

        Args:
            origin_station: 출발역 이름
            origin_time: 출발 시각 (운행일 0:00부터의 초)
            transfer_penalty: 환승 시간 (초, 0 이상)

        Returns:
            확정된 PathState 리스트 (earliest_arrival 오름차순)
        """
        if transfer_penalty < 0:
            raise ValueError(f"환승 시간은 0 이상이어야 합니다: {transfer_penalty}")

        # 요청마다 새로 만든다 => 요청 간 공유 상태 없음
        states: Dict[Tuple[str, str], PathState] = {
            node.key: PathState(node) for node in self.graph
        }
        frontier: List[Tuple[float, int, Tuple[str, str]]] = []
        sequence = itertools.count()

        for node in self.graph.nodes_at(origin_station):
            first_departure = min_value_at_least(node.departure_times, origin_time)
            if first_departure == INFINITY:
                continue
            state = states[node.key]
            state.earliest_arrival = first_departure
            state.path = [PathEntry(node.station, node.line, first_departure)]
            heapq.heappush(frontier, (first_departure, next(sequence), node.key))

        settled: List[PathState] = []

        while frontier:
            arrival, _, key = heapq.heappop(frontier)
            p = states[key]
            if p.settled or arrival > p.earliest_arrival:
                continue  # 이미 확정되었거나 오래된 항목

            p.settled = True
            p.settle_order = len(settled)
            settled.append(p)

            for edge in self.graph.edges_from(p.node, transfer_penalty):
                q = states[edge.target]
                if q.settled:
                    continue

                candidate = self._candidate_time(p, q, edge)
                if candidate is None:
                    continue

                # 동일 시각이면 환승보다 같은 노선 승차를 우선
                improved = candidate < q.earliest_arrival or (
                    candidate == q.earliest_arrival
                    and edge.kind is EdgeKind.CONTINUE
                    and q.arrived_by is EdgeKind.TRANSFER
                )
                if improved:
                    q.earliest_arrival = candidate
                    q.path = [PathEntry(q.station, q.line, candidate), *p.path]
                    q.arrived_by = edge.kind
                    heapq.heappush(frontier, (candidate, next(sequence), q.node.key))

        logger.debug(
            f"탐색 완료: 출발={origin_station}, 시각={origin_time}, "
            f"확정 노드 {len(settled)}/{len(states)}"
        )
        return settled

    def route_to(
        self,
        origin_station: str,
        origin_time: int,
        destination_station: str,
        transfer_penalty: int,
    ) -> Optional[PathState]:
        """목적지 역에서 가장 먼저 확정된 노드, 도달 불가면 None"""
        settled = self.route(origin_station, origin_time, transfer_penalty)
        return find_destination(destination_station, settled)

    @staticmethod
    def _candidate_time(p: PathState, q: PathState, edge: Edge) -> Optional[float]:
        ready_at = p.earliest_arrival + edge.cost

        if q.node.departure_times:
            departure = min_value_greater_than(q.node.departure_times, ready_at)
            return None if departure == INFINITY else departure

        # q가 종점 (출발 시각 없음): 승차해서 도착하는 경우에만
        # p의 대표 소요시간으로 도착 시각을 추정한다
        if edge.kind is EdgeKind.CONTINUE and p.typical_run_time is not None:
            return ready_at + p.typical_run_time
        return None


def find_destination(
    destination_station: str, settled: Sequence[PathState]
) -> Optional[PathState]:
    """목적지 역 노드 중 earliest_arrival 최소 (동률이면 먼저 확정된 것)"""
    candidates = [s for s in settled if s.station == destination_station and s.is_reached]
    if not candidates:
        return None
    return min(candidates, key=lambda s: (s.earliest_arrival, s.settle_order))


def _as_graph(nodes: Union[ScheduleGraph, Sequence[ScheduleNode]]) -> ScheduleGraph:
    return nodes if isinstance(nodes, ScheduleGraph) else ScheduleGraph(nodes)


def route(
    origin_station: str,
    origin_time: int,
    transfer_penalty: int,
    nodes: Union[ScheduleGraph, Sequence[ScheduleNode]],
) -> List[PathState]:
    return TimeDependentDijkstra(_as_graph(nodes)).route(
        origin_station, origin_time, transfer_penalty
    )


def route_to(
    origin_station: str,
    origin_time: int,
    destination_station: str,
    transfer_penalty: int,
    nodes: Union[ScheduleGraph, Sequence[ScheduleNode]],
) -> Optional[PathState]:
    return TimeDependentDijkstra(_as_graph(nodes)).route_to(
        origin_station, origin_time, destination_station, transfer_penalty
    )
