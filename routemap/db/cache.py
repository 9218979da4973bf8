"""
시간표 singleton 캐시

Thread Lock으로 최초 조회(또는 서버 시작) 시 한 번만 로드하여 메모리에 유지
평일 / 토일휴일 각각 정규화된 ScheduleGraph를 보관하고, 모든 서비스가 같은 인스턴스를 참조한다
=> 생성 후 변경하지 않는 읽기 전용 데이터이므로 요청 간 공유해도 안전
"""

import logging
from datetime import date
from threading import Lock
from typing import Dict, List, Set

from routemap.algorithms.day_type import holiday_set
from routemap.algorithms.graph import ScheduleGraph
from routemap.algorithms.timetable import normalize
from routemap.core.config import DAY_TYPES, HOLIDAY, WEEKDAY
from routemap.core.exceptions import TimetableLoadException

logger = logging.getLogger(__name__)

_cache_lock = Lock()
_cache_init = False

# cache data
_graphs_cache: Dict[str, ScheduleGraph] = {}  # {'平日' | '土日休': graph}
_holidays_cache: Set[date] = set()  # 파싱된 공휴일 날짜
_station_names_cache: List[str] = []  # 두 운행일 유형의 역 이름 합집합 (등장 순)


def initialize_cache():
    """
    시간표 / 공휴일 로드 후 운행일 유형별로 정규화
    Thread-safe singleton pattern
    """
    global _cache_init, _holidays_cache, _station_names_cache

    with _cache_lock:
        if _cache_init:
            logger.info("캐시가 이미 초기화되었습니다.")
            return

        from routemap.db.loader import load_holidays, load_timetable

        logger.info("시간표 캐시 초기화 시작")

        # 1. 공휴일 (날짜 형식 오류는 시작 시점에 실패)
        raw_holidays = load_holidays()
        try:
            holidays = holiday_set(raw_holidays)
        except ValueError as e:
            raise TimetableLoadException(f"공휴일 날짜 형식 오류 (YYYY/M/D): {e}")

        # 2. 원본 시간표 로드 및 정규화
        raw_timetable = load_timetable()
        for day_type in (WEEKDAY, HOLIDAY):
            graph = ScheduleGraph(normalize(raw_timetable, day_type))
            _graphs_cache[day_type] = graph
            logger.info(f"✓ {day_type} 그래프 생성 완료: {len(graph)}개 노드")

        # 3. 역 이름 목록
        names: Dict[str, None] = {}
        for graph in _graphs_cache.values():
            for name in graph.station_names():
                names.setdefault(name, None)
        _station_names_cache = list(names)
        logger.info(f"✓ 역 데이터 로드 완료: {len(_station_names_cache)}개")

        _holidays_cache = holidays
        logger.info(f"✓ 공휴일 데이터 로드 완료: {len(_holidays_cache)}일")

        _cache_init = True
        logger.info("시간표 캐시 초기화 완료")


def is_initialized() -> bool:
    return _cache_init


def get_graph(day_type: str) -> ScheduleGraph:
    """'平日' / '土日休' 또는 API 별칭 'weekday' / 'holiday'"""
    if not _cache_init:
        initialize_cache()
    day_type = DAY_TYPES.get(day_type, day_type)
    if day_type not in _graphs_cache:
        raise KeyError(f"알 수 없는 운행일 유형: {day_type}")
    return _graphs_cache[day_type]


def get_holidays() -> Set[date]:
    if not _cache_init:
        initialize_cache()
    return _holidays_cache


def get_station_names() -> List[str]:
    if not _cache_init:
        initialize_cache()
    return _station_names_cache


def search_stations_by_name(keyword: str, limit: int = 10) -> List[str]:
    """정확 일치 > 앞부분 일치 > 부분 일치 순, 같은 순위는 짧은 이름 먼저"""
    if not _cache_init:
        initialize_cache()

    keyword = keyword.strip().lower()
    if not keyword:
        return []

    results = []
    for name in _station_names_cache:
        name_lower = name.lower()
        if keyword in name_lower:
            if name_lower == keyword:
                priority = 1
            elif name_lower.startswith(keyword):
                priority = 2
            else:
                priority = 3
            results.append((priority, len(name), name))

    results.sort()
    return [name for _, _, name in results[:limit]]


def clear_cache():
    global _cache_init, _holidays_cache, _station_names_cache

    with _cache_lock:
        _graphs_cache.clear()
        _holidays_cache = set()
        _station_names_cache = []

        _cache_init = False
        logger.info("캐시 초기화됨")


def reload_cache():
    clear_cache()
    initialize_cache()
