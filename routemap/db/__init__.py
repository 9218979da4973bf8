"""
시간표 파일 로드 및 캐시 세팅
"""

from routemap.db.loader import load_timetable, load_holidays
from routemap.db.cache import (
    initialize_cache,
    clear_cache,
    reload_cache,
    get_graph,
    get_holidays,
    get_station_names,
    search_stations_by_name,
)

__all__ = [
    "load_timetable",
    "load_holidays",
    "initialize_cache",
    "clear_cache",
    "reload_cache",
    "get_graph",
    "get_holidays",
    "get_station_names",
    "search_stations_by_name",
]
