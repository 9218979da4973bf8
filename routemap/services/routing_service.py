# 경로 탐색 서비스

import logging
import time
import json
from datetime import datetime
from typing import Optional, Dict, Any, Union

from routemap.algorithms.dijkstra import TimeDependentDijkstra
from routemap.algorithms.projection import RoutingResult, Unreachable, project
from routemap.algorithms.time_utils import seconds_to_time_string
from routemap.db.cache import get_graph
from routemap.core.exceptions import RoutemapException, StationNotFoundException
from routemap.core.config import settings
from routemap.services.service_day import (
    resolve_request_day_type,
    resolve_request_time,
)

logger = logging.getLogger(__name__)


class RoutingService:

    def __init__(self):
        logger.info("RoutingService 초기화 완료")

    def calculate_route(
        self,
        origin_name: str,
        destination_name: str,
        departure_time: Optional[str] = None,
        day_type: Optional[str] = None,
        transfer_penalty: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        최소 도착 시각 경로 계산

        Args:
            origin_name: 출발역 이름
            destination_name: 도착역 이름
            departure_time: 'H:MM', 생략 시 현재 시각
            day_type: 'weekday' / 'holiday', 생략 시 오늘 날짜로 판단
            transfer_penalty: 환승 시간(초), 생략 시 TRANSFER_PENALTY_SECONDS
            now: 기준 현재 시각 (테스트용, 기본 datetime.now())

        Returns:
            경로 데이터 딕셔너리. 도달 불가면 found=False (예외 아님)

        Raises:
            StationNotFoundException: 역을 찾을 수 없을 때
            InvalidTimeError: 출발 시각 형식이 잘못되었을 때
        """
        start_time = time.time()
        now = now or datetime.now()

        if transfer_penalty is None:
            transfer_penalty = settings.TRANSFER_PENALTY_SECONDS

        try:
            resolved_day_type = resolve_request_day_type(day_type, now)
            origin_time = resolve_request_time(departure_time, now)

            graph = get_graph(resolved_day_type)

            if origin_name not in graph:
                raise StationNotFoundException(
                    f"출발역을 찾을 수 없습니다: {origin_name}"
                )

            if destination_name not in graph:
                raise StationNotFoundException(
                    f"도착역을 찾을 수 없습니다: {destination_name}"
                )

            logger.info(
                f"경로 계산 요청: {origin_name} → {destination_name}, "
                f"시각={seconds_to_time_string(origin_time)}, 유형={resolved_day_type}"
            )

            calculation_start = time.time()
            settled = TimeDependentDijkstra(graph).route(
                origin_name, origin_time, transfer_penalty
            )
            result = project(destination_name, settled)
            calculation_time = time.time() - calculation_start

            if not result:
                logger.info(
                    f"경로 없음: {origin_name} → {destination_name} "
                    f"({seconds_to_time_string(origin_time)} 이후 운행 없음)"
                )

            response = self._to_response(
                result, origin_name, destination_name, resolved_day_type, origin_time
            )

            elapsed_time = time.time() - start_time
            self._log_route_metrics(
                found=bool(result),
                response_time_ms=elapsed_time * 1000,
                calculation_time_ms=calculation_time * 1000,
                origin=origin_name,
                destination=destination_name,
                day_type=resolved_day_type,
                settled_nodes=len(settled),
            )
            return response

        except RoutemapException as e:
            logger.error(f"경로 계산 실패: {e.message}")
            raise
        except Exception as e:
            logger.error(f"경로 계산 오류: {e}", exc_info=True)
            raise

    @staticmethod
    def _to_response(
        result: Union[RoutingResult, Unreachable],
        origin_name: str,
        destination_name: str,
        day_type: str,
        origin_time: int,
    ) -> Dict[str, Any]:
        response: Dict[str, Any] = {
            "found": bool(result),
            "origin": origin_name,
            "destination": destination_name,
            "day_type": day_type,
            "requested_time": seconds_to_time_string(origin_time),
        }

        if not result:
            response["reason"] = result.reason
            return response

        response.update(
            {
                "departure_time": seconds_to_time_string(result.departure_time),
                "arrival_time": seconds_to_time_string(result.arrival_time),
                "total_seconds": result.arrival_time - origin_time,
                "transfers": len(result.transfer_stations),
                "transfer_stations": result.transfer_stations,
                "stations": {
                    station: [seconds_to_time_string(t) for t in times]
                    for station, times in result.stations.items()
                },
                "labels": result.labels(),
                "legs": [
                    {
                        "line": leg.line,
                        "from_station": leg.from_station,
                        "departure": seconds_to_time_string(leg.departure),
                        "to_station": leg.to_station,
                        "arrival": seconds_to_time_string(leg.arrival),
                        "duration_seconds": leg.duration,
                        "stops": leg.stops,
                    }
                    for leg in result.legs
                ],
            }
        )
        return response

    def _log_route_metrics(
        self,
        found: bool,
        response_time_ms: float,
        origin: str,
        destination: str,
        day_type: str,
        calculation_time_ms: Optional[float] = None,
        settled_nodes: Optional[int] = None,
    ) -> None:
        """
        경로 탐색 메트릭 로깅 => 로그 수집기에서 분석하기
        """
        if not settings.ENABLE_ROUTE_METRICS:
            return

        metrics = {
            "event": "route_calculation",
            "found": found,
            "response_time_ms": round(response_time_ms, 2),
            "origin": origin,
            "destination": destination,
            "day_type": day_type,
        }

        if calculation_time_ms is not None:
            metrics["calculation_time_ms"] = round(calculation_time_ms, 2)

        if settled_nodes is not None:
            metrics["settled_nodes"] = settled_nodes

        logger.info(f"METRICS: {json.dumps(metrics, ensure_ascii=False)}")
