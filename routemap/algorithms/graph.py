from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from routemap.algorithms.timetable import ScheduleNode


class EdgeKind(str, Enum):
    CONTINUE = "continue"  # 같은 노선으로 다음 역까지 승차
    TRANSFER = "transfer"  # 같은 역에서 다른 노선으로 환승


@dataclass(frozen=True, slots=True)
class Edge:
    kind: EdgeKind
    target: Tuple[str, str]  # (station, line)
    cost: int = 0


class ScheduleGraph:
    """
    ScheduleNode 리스트에 대한 읽기 전용 인덱스

    여러 조회 요청이 동시에 공유해도 안전하다 (생성 후 변경 없음)
    """

    def __init__(self, nodes: Sequence[ScheduleNode]):
        self.nodes: Tuple[ScheduleNode, ...] = tuple(nodes)
        self._by_key: Dict[Tuple[str, str], ScheduleNode] = {}
        self._by_station: Dict[str, List[ScheduleNode]] = defaultdict(list)

        for node in self.nodes:
            # 같은 (역, 노선)이 중복되면 먼저 나온 것을 사용
            if node.key in self._by_key:
                continue
            self._by_key[node.key] = node
            self._by_station[node.station].append(node)

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, station: str) -> bool:
        return station in self._by_station

    def __iter__(self) -> Iterator[ScheduleNode]:
        return iter(self._by_key.values())

    def get(self, station: str, line: str) -> Optional[ScheduleNode]:
        return self._by_key.get((station, line))

    def nodes_at(self, station: str) -> List[ScheduleNode]:
        return list(self._by_station.get(station, []))

    def line_names(self, station: str) -> List[str]:
        return [node.line for node in self._by_station.get(station, [])]

    def station_names(self) -> List[str]:
        return list(self._by_station.keys())

    def line_nodes(self, line: str) -> List[ScheduleNode]:
        """노선-방향 하나의 노드 (시간표 나열 순서)"""
        return [node for node in self._by_key.values() if node.line == line]

    def edges_from(self, node: ScheduleNode, transfer_penalty: int) -> Iterator[Edge]:
        """node에서 나가는 간선: 다음 역 승차 1개 + 같은 역 환승 N개"""
        if node.next_station is not None:
            target = (node.next_station, node.line)
            if target in self._by_key:
                yield Edge(EdgeKind.CONTINUE, target, 0)

        for other in self._by_station.get(node.station, []):
            if other.line != node.line:
                yield Edge(EdgeKind.TRANSFER, other.key, transfer_penalty)
