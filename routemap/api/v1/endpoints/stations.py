"""
역 목록 / 검색 / 시간표 REST API 엔드포인트
"""

from fastapi import APIRouter, Depends, Query, HTTPException
from typing import Optional
import logging

from routemap.api.deps import get_timetable_service, to_http_exception
from routemap.core.exceptions import RoutemapException
from routemap.models.responses import (
    StationListResponse,
    StationSearchResponse,
    StationTimetableResponse,
)
from routemap.services.timetable_service import TimetableService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=StationListResponse)
async def list_stations(service: TimetableService = Depends(get_timetable_service)):
    """전체 역 목록 (시간표 등장 순)"""
    try:
        stations = service.list_stations()
        return {"count": len(stations), "stations": stations}
    except RoutemapException as e:
        logger.error(f"역 목록 조회 실패: {e.message}")
        raise to_http_exception(e)


@router.get("/search", response_model=StationSearchResponse)
async def search_stations(
    q: str = Query(..., description="검색 키워드", min_length=1, max_length=50),
    limit: int = Query(10, ge=1, le=50, description="최대 결과 수"),
    service: TimetableService = Depends(get_timetable_service),
):
    """
    역 검색 (자동완성용)

    - **q**: 검색 키워드 (1-50자)
    - **limit**: 최대 결과 수 (1-50, 기본값 10)

    Example:
        GET /v1/stations/search?q=栄&limit=5
    """
    try:
        logger.info(f"역 검색: keyword={q}, limit={limit}")
        results = service.search_stations(q, limit)

        return {"keyword": q, "count": len(results), "results": results}
    except RoutemapException as e:
        logger.error(f"역 검색 실패: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"역 검색 오류: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"검색 중 오류 발생: {str(e)}")


@router.get("/{station_name}/timetable", response_model=StationTimetableResponse)
async def get_station_timetable(
    station_name: str,
    day_type: Optional[str] = Query(
        None, pattern="^(weekday|holiday)$", description="운행일 유형"
    ),
    service: TimetableService = Depends(get_timetable_service),
):
    """
    역 시간표 (노선-방향별 출발 시각)

    Example:
        GET /v1/stations/栄/timetable?day_type=weekday
    """
    try:
        return service.get_station_timetable(station_name, day_type=day_type)
    except RoutemapException as e:
        logger.error(f"역 시간표 조회 실패: {e.message}")
        raise to_http_exception(e)
