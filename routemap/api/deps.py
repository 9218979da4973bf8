from functools import lru_cache

from fastapi import HTTPException, status

from routemap.core.exceptions import (
    RoutemapException,
    InvalidTimeError,
    StationNotFoundException,
)
from routemap.services.routing_service import RoutingService
from routemap.services.timetable_service import TimetableService


# lru_cache 사용하여 싱글톤 패턴과 유사한 효과, 의존성 주입
@lru_cache()
def get_routing_service() -> RoutingService:
    return RoutingService()


@lru_cache()
def get_timetable_service() -> TimetableService:
    return TimetableService()


def to_http_exception(e: RoutemapException) -> HTTPException:
    """역 없음 404, 시각 형식 오류 422, 그 외 400"""
    if isinstance(e, StationNotFoundException):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(e, InvalidTimeError):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    return HTTPException(
        status_code=status_code, detail={"message": e.message, "code": e.code}
    )
