# 역 시간표 / 운행 중 열차 조회 서비스

import logging
from datetime import datetime
from typing import Optional, Dict, Any, List

from routemap.algorithms.time_utils import seconds_to_time_string
from routemap.algorithms.train_position import (
    downstream_times,
    extract_schedules,
    running_trains,
)
from routemap.db.cache import get_graph, get_station_names, search_stations_by_name
from routemap.core.exceptions import StationNotFoundException
from routemap.core.config import settings
from routemap.services.service_day import (
    resolve_request_day_type,
    resolve_request_time,
)

logger = logging.getLogger(__name__)


class TimetableService:

    def __init__(self):
        logger.info("TimetableService 초기화 완료")

    def list_stations(self) -> List[str]:
        return get_station_names()

    def search_stations(self, keyword: str, limit: int = 10) -> List[str]:
        results = search_stations_by_name(keyword, limit=limit)
        logger.debug(f"역 검색: '{keyword}' => {len(results)}개")
        return results

    def get_station_timetable(
        self,
        station_name: str,
        day_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        역의 노선-방향별 출발 시각

        Raises:
            StationNotFoundException: 해당 운행일 시간표에 역이 없을 때
        """
        resolved_day_type = resolve_request_day_type(day_type, now or datetime.now())
        graph = get_graph(resolved_day_type)

        nodes = graph.nodes_at(station_name)
        if not nodes:
            raise StationNotFoundException(f"역을 찾을 수 없습니다: {station_name}")

        return {
            "station": station_name,
            "day_type": resolved_day_type,
            "lines": [
                {
                    "line": node.line,
                    "next_station": node.next_station,
                    "typical_run_time": node.typical_run_time,
                    "departures": [
                        seconds_to_time_string(t) for t in node.departure_times
                    ],
                }
                for node in nodes
            ],
        }

    def get_running_trains(
        self,
        at: Optional[str] = None,
        day_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """시각 at('H:MM', 생략 시 현재)에 역 사이를 달리는 열차"""
        now = now or datetime.now()
        resolved_day_type = resolve_request_day_type(day_type, now)
        t = resolve_request_time(at, now)

        trains = running_trains(
            get_graph(resolved_day_type), t, settings.SERVICE_GAP_TOLERANCE_SECONDS
        )
        logger.debug(
            f"운행 중 열차: {seconds_to_time_string(t)} {resolved_day_type} => {len(trains)}대"
        )

        return {
            "at": seconds_to_time_string(t),
            "day_type": resolved_day_type,
            "count": len(trains),
            "trains": [
                {
                    "line": train.line,
                    "from_station": train.from_station,
                    "to_station": train.to_station,
                    "departed_at": seconds_to_time_string(train.departed_at),
                    "arrives_at": seconds_to_time_string(train.arrives_at),
                    "progress": round(train.progress, 3),
                }
                for train in trains
            ],
        }

    def get_train_schedule(
        self,
        line: str,
        from_station: str,
        at: Optional[str] = None,
        day_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        from_station에서 at 이후 첫 열차를 따라간 역별 시각

        Raises:
            StationNotFoundException: 노선에 해당 역이 없을 때
        """
        now = now or datetime.now()
        resolved_day_type = resolve_request_day_type(day_type, now)
        t = resolve_request_time(at, now)

        graph = get_graph(resolved_day_type)
        if graph.get(from_station, line) is None:
            raise StationNotFoundException(
                f"노선에서 역을 찾을 수 없습니다: {from_station} ({line})"
            )

        schedules = extract_schedules(graph.line_nodes(line), from_station)
        times = downstream_times(schedules, t, settings.SERVICE_GAP_TOLERANCE_SECONDS)

        return {
            "line": line,
            "from_station": from_station,
            "day_type": resolved_day_type,
            "times": {
                station: seconds_to_time_string(sec) for station, sec in times.items()
            },
        }
