# 요청 성능 모니터링 미들웨어

import time
import logging
import json
from threading import Lock
from typing import Callable, Dict
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match
from starlette.types import ASGIApp

from routemap.core.config import settings

logger = logging.getLogger(__name__)


class MetricsCollector:
    """
    프로세스 메모리 내 요청 통계

    경로(method + path)별 요청 수, 평균 응답시간, 느린 요청 / 에러 수
    """

    def __init__(self):
        self._lock = Lock()
        self.request_count = 0
        self.total_elapsed_time_ms = 0.0
        self.slow_request_count = 0
        self.error_count = 0
        self.path_stats: Dict[str, Dict] = {}

    def record_request(
        self,
        path: str,
        method: str,
        status_code: int,
        elapsed_time_ms: float,
        is_slow: bool = False,
    ):
        with self._lock:
            self.request_count += 1
            self.total_elapsed_time_ms += elapsed_time_ms
            self.slow_request_count += int(is_slow)
            self.error_count += int(status_code >= 400)

            stats = self.path_stats.setdefault(
                f"{method} {path}",
                {"count": 0, "total_time_ms": 0.0, "slow_count": 0, "error_count": 0},
            )
            stats["count"] += 1
            stats["total_time_ms"] += elapsed_time_ms
            stats["slow_count"] += int(is_slow)
            stats["error_count"] += int(status_code >= 400)

    def get_summary(self) -> dict:
        if self.request_count == 0:
            return {
                "total_requests": 0,
                "average_elapsed_time_ms": 0,
                "slow_requests": 0,
                "error_requests": 0,
                "success_rate": 0,
            }

        return {
            "total_requests": self.request_count,
            "average_elapsed_time_ms": round(
                self.total_elapsed_time_ms / self.request_count, 2
            ),
            "slow_requests": self.slow_request_count,
            "error_requests": self.error_count,
            "success_rate": round(
                (self.request_count - self.error_count) / self.request_count * 100, 2
            ),
        }

    def get_path_stats(self, top_n: int = 10) -> list:
        """요청 수 상위 N개 경로"""
        sorted_paths = sorted(
            self.path_stats.items(), key=lambda x: x[1]["count"], reverse=True
        )
        return [
            {
                "path": path,
                "count": stats["count"],
                "avg_time_ms": round(stats["total_time_ms"] / stats["count"], 2),
                "slow_count": stats["slow_count"],
                "error_count": stats["error_count"],
            }
            for path, stats in sorted_paths[:top_n]
        ]

    def reset(self):
        with self._lock:
            self.request_count = 0
            self.total_elapsed_time_ms = 0.0
            self.slow_request_count = 0
            self.error_count = 0
            self.path_stats.clear()


# 전역 메트릭 수집기 인스턴스
_metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    return _metrics_collector


def route_template(request: Request) -> str:
    """'/v1/stations/栄/timetable' => '/v1/stations/{station_name}/timetable'"""
    app = request.scope.get("app")
    for route in getattr(app, "routes", []):
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", request.url.path)
    return request.url.path


class PerformanceMonitoringMiddleware(BaseHTTPMiddleware):
    """
    요청별 응답 시간 측정

    X-Process-Time-Ms 헤더, PERFORMANCE 로그 한 줄, 라우트 템플릿 단위 통계 기록
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.slow_threshold_ms = settings.SLOW_REQUEST_THRESHOLD_MS

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed_time_ms = (time.perf_counter() - start_time) * 1000

        response.headers["X-Process-Time-Ms"] = f"{elapsed_time_ms:.2f}"
        path = route_template(request)
        is_slow = elapsed_time_ms > self.slow_threshold_ms

        record = {
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "elapsed_time_ms": round(elapsed_time_ms, 2),
        }
        # 경로 탐색 / 열차 조회는 운행일 유형·기준 시각이 응답 시간에 영향
        for key in ("day_type", "at"):
            if key in request.query_params:
                record[key] = request.query_params[key]

        if is_slow:
            logger.warning(
                f"느린 요청: {request.method} {path} {elapsed_time_ms:.2f}ms "
                f"(기준 {self.slow_threshold_ms}ms)"
            )
        logger.info(f"PERFORMANCE: {json.dumps(record, ensure_ascii=False)}")

        get_metrics_collector().record_request(
            path=path,
            method=request.method,
            status_code=response.status_code,
            elapsed_time_ms=elapsed_time_ms,
            is_slow=is_slow,
        )
        return response
