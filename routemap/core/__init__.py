"""
Core 설정 및 utilities, 커스텀 예외
"""

from routemap.core.config import settings

from routemap.core.exceptions import (
    RoutemapException,
    InvalidTimeError,
    StationNotFoundException,
    TimetableLoadException,
)

__all__ = [
    "settings",
    "RoutemapException",
    "InvalidTimeError",
    "StationNotFoundException",
    "TimetableLoadException",
]
