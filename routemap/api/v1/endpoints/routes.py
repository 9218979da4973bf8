"""
REST API 경로 계산 엔드포인트
"""

from fastapi import APIRouter, HTTPException, Depends
import logging

from routemap.api.deps import get_routing_service, to_http_exception
from routemap.models.requests import RouteCalculateRequest
from routemap.models.responses import RouteCalculatedResponse
from routemap.services.routing_service import RoutingService
from routemap.core.exceptions import RoutemapException


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/calculate", response_model=RouteCalculatedResponse)
async def calculate_route(
    request: RouteCalculateRequest,
    service: RoutingService = Depends(get_routing_service),
):
    """
    최소 도착 시각 경로 계산

    - **origin**: 출발역 이름
    - **destination**: 도착역 이름
    - **departure_time**: 출발 시각 'H:MM' (생략 시 현재 시각)
    - **day_type**: weekday / holiday (생략 시 오늘 날짜로 판단)
    - **transfer_penalty_seconds**: 환승 시간 (초)

    경로가 없으면(막차 종료 등) 200 + found=false

    Example:
        POST /v1/routes/calculate
        {
            "origin": "名古屋",
            "destination": "栄",
            "departure_time": "8:00"
        }
    """
    try:
        logger.info(
            f"REST 경로 계산: {request.origin} → {request.destination}, "
            f"time={request.departure_time}, day_type={request.day_type}"
        )

        return service.calculate_route(
            origin_name=request.origin,
            destination_name=request.destination,
            departure_time=request.departure_time,
            day_type=request.day_type,
            transfer_penalty=request.transfer_penalty_seconds,
        )

    except RoutemapException as e:
        logger.error(f"경로 계산 실패: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"예상치 못한 오류: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"경로 계산 중 오류 발생: {str(e)}")
