from typing import Optional
from pydantic import BaseModel, Field

# service별 requests 구조 정의


# 경로 탐색 요청
class RouteCalculateRequest(BaseModel):
    origin: str = Field(..., min_length=1, description="출발역 이름")
    destination: str = Field(..., min_length=1, description="도착역 이름")
    departure_time: Optional[str] = Field(
        default=None,
        description="출발 시각 'H:MM' (생략 시 현재 시각, 25:10 처럼 24시 이후 표기 가능)",
    )
    day_type: Optional[str] = Field(
        default=None,
        pattern="^(weekday|holiday)$",
        description="운행일 유형 (생략 시 오늘 날짜와 공휴일로 판단)",
    )
    transfer_penalty_seconds: Optional[int] = Field(
        default=None, ge=0, description="환승 시간 (초, 생략 시 서버 기본값)"
    )
