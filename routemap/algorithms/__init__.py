"""
시간표 정규화, 시간 의존 다익스트라, 경로 변환
"""

from routemap.algorithms.timetable import ScheduleNode, normalize
from routemap.algorithms.graph import EdgeKind, ScheduleGraph
from routemap.algorithms.dijkstra import (
    PathEntry,
    PathState,
    TimeDependentDijkstra,
    route,
    route_to,
)
from routemap.algorithms.projection import (
    Leg,
    RoutingResult,
    Unreachable,
    find_route,
    project,
)

__all__ = [
    "ScheduleNode",
    "normalize",
    "EdgeKind",
    "ScheduleGraph",
    "PathEntry",
    "PathState",
    "TimeDependentDijkstra",
    "route",
    "route_to",
    "Leg",
    "RoutingResult",
    "Unreachable",
    "project",
    "find_route",
]
