from typing import Dict, List, Optional
from pydantic import BaseModel, Field

# service 별 응답 구조 정의


# 경로 중 한 노선 승차 구간
class LegInfo(BaseModel):
    line: str = Field(..., description="노선-방향")
    from_station: str = Field(..., description="승차역")
    departure: str = Field(..., description="승차 시각 'H:MM'")
    to_station: str = Field(..., description="하차역")
    arrival: str = Field(..., description="하차 시각 'H:MM'")
    duration_seconds: int = Field(..., description="소요시간 (초)")
    stops: List[str] = Field(default_factory=list, description="경유역 (승차역, 하차역 포함)")


# 경로 탐색 응답. 도달 불가도 정상 응답 (found=False)
class RouteCalculatedResponse(BaseModel):
    found: bool = Field(..., description="경로 존재 여부")
    origin: str = Field(..., description="출발역")
    destination: str = Field(..., description="도착역")
    day_type: str = Field(..., description="적용된 운행일 유형 ('平日' / '土日休')")
    requested_time: str = Field(..., description="요청 출발 시각 'H:MM'")
    departure_time: Optional[str] = Field(None, description="실제 첫 승차 시각")
    arrival_time: Optional[str] = Field(None, description="도착 시각")
    total_seconds: Optional[int] = Field(None, description="요청 시각부터 도착까지 (초)")
    transfers: int = Field(default=0, description="환승 횟수")
    transfer_stations: List[str] = Field(default_factory=list, description="환승역")
    stations: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="역 이름 -> 시각 리스트 (경로 순, 각 리스트는 도착역에 가까운 것부터)",
    )
    labels: Dict[str, str] = Field(default_factory=dict, description="역별 표시 시각")
    legs: List[LegInfo] = Field(default_factory=list, description="승차 구간")
    reason: Optional[str] = Field(None, description="경로가 없을 때 사유")


# 역 목록 응답
class StationListResponse(BaseModel):
    count: int = Field(..., description="역 수")
    stations: List[str] = Field(default_factory=list, description="역 이름 리스트")


# 역 검색 응답 (자동완성)
class StationSearchResponse(BaseModel):
    keyword: str = Field(..., description="검색 키워드")
    count: int = Field(..., description="검색 결과 수")
    results: List[str] = Field(default_factory=list, description="역 이름 리스트")


# 역 시간표의 한 노선-방향
class LineTimetable(BaseModel):
    line: str = Field(..., description="노선-방향")
    next_station: Optional[str] = Field(None, description="다음 역 (종점이면 없음)")
    typical_run_time: Optional[int] = Field(None, description="다음 역까지 대표 소요시간 (초)")
    departures: List[str] = Field(default_factory=list, description="출발 시각 'H:MM'")


# 역 시간표 응답
class StationTimetableResponse(BaseModel):
    station: str = Field(..., description="역 이름")
    day_type: str = Field(..., description="운행일 유형")
    lines: List[LineTimetable] = Field(default_factory=list, description="노선별 시간표")


# 운행 중 열차 한 대
class RunningTrainInfo(BaseModel):
    line: str = Field(..., description="노선-방향")
    from_station: str = Field(..., description="직전 출발역")
    to_station: str = Field(..., description="다음 도착역")
    departed_at: str = Field(..., description="출발 시각")
    arrives_at: str = Field(..., description="도착 예정 시각")
    progress: float = Field(..., ge=0, le=1, description="구간 진행률 (0.0 ~ 1.0)")


# 운행 중 열차 응답
class RunningTrainsResponse(BaseModel):
    at: str = Field(..., description="기준 시각")
    day_type: str = Field(..., description="운행일 유형")
    count: int = Field(..., description="열차 수")
    trains: List[RunningTrainInfo] = Field(default_factory=list, description="열차 리스트")


# 열차 하류 시각 응답
class TrainScheduleResponse(BaseModel):
    line: str = Field(..., description="노선-방향")
    from_station: str = Field(..., description="기준 역")
    day_type: str = Field(..., description="운행일 유형")
    times: Dict[str, str] = Field(default_factory=dict, description="역 이름 -> 시각")


# 에러 응답
class ErrorResponse(BaseModel):
    error: str = Field(..., description="에러 메시지")
    code: Optional[str] = Field(None, description="에러 코드")
