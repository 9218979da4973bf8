"""
시간표 기반 열차 위치 REST API 엔드포인트
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional
import logging

from routemap.api.deps import get_timetable_service, to_http_exception
from routemap.core.exceptions import RoutemapException
from routemap.models.responses import RunningTrainsResponse, TrainScheduleResponse
from routemap.services.timetable_service import TimetableService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/running", response_model=RunningTrainsResponse)
async def get_running_trains(
    at: Optional[str] = Query(None, description="기준 시각 'H:MM' (생략 시 현재)"),
    day_type: Optional[str] = Query(
        None, pattern="^(weekday|holiday)$", description="운행일 유형"
    ),
    service: TimetableService = Depends(get_timetable_service),
):
    """
    시각 at에 역 사이를 달리고 있는 열차 (시간표 기준)

    Example:
        GET /v1/trains/running?at=8:05&day_type=weekday
    """
    try:
        return service.get_running_trains(at=at, day_type=day_type)
    except RoutemapException as e:
        logger.error(f"운행 열차 조회 실패: {e.message}")
        raise to_http_exception(e)


@router.get("/schedule", response_model=TrainScheduleResponse)
async def get_train_schedule(
    line: str = Query(..., min_length=1, description="노선-방향"),
    station: str = Query(..., min_length=1, description="기준 역"),
    at: Optional[str] = Query(None, description="기준 시각 'H:MM' (생략 시 현재)"),
    day_type: Optional[str] = Query(
        None, pattern="^(weekday|holiday)$", description="운행일 유형"
    ),
    service: TimetableService = Depends(get_timetable_service),
):
    """기준 역에서 at 이후 첫 열차를 따라간 역별 시각"""
    try:
        return service.get_train_schedule(line, station, at=at, day_type=day_type)
    except RoutemapException as e:
        logger.error(f"열차 시각 조회 실패: {e.message}")
        raise to_http_exception(e)
