"""
pydantic models for 요청, 응답
"""


from routemap.models.requests import RouteCalculateRequest
from routemap.models.responses import (
    LegInfo,
    RouteCalculatedResponse,
    StationListResponse,
    StationSearchResponse,
    LineTimetable,
    StationTimetableResponse,
    RunningTrainInfo,
    RunningTrainsResponse,
    TrainScheduleResponse,
    ErrorResponse,
)

__all__ = [
    "RouteCalculateRequest",
    "LegInfo",
    "RouteCalculatedResponse",
    "StationListResponse",
    "StationSearchResponse",
    "LineTimetable",
    "StationTimetableResponse",
    "RunningTrainInfo",
    "RunningTrainsResponse",
    "TrainScheduleResponse",
    "ErrorResponse",
]
