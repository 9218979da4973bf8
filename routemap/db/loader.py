import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from routemap.core.config import settings
from routemap.core.exceptions import TimetableLoadException

logger = logging.getLogger(__name__)


def _read_json(path: str, label: str):
    file_path = Path(path)
    try:
        with file_path.open(encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        logger.error(f"{label} 파일 없음: {file_path}")
        raise TimetableLoadException(f"{label} 파일을 찾을 수 없습니다: {file_path}") from e
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"{label} 파일 읽기 실패: {file_path} ({e})")
        raise TimetableLoadException(f"{label} 파일을 읽을 수 없습니다: {file_path}") from e


def load_timetable(path: Optional[str] = None) -> List[Dict]:
    """
    원본 시간표 JSON 로드

    [{type, lineName, loop?, stations: [{name, time: [...], ID?}]}]
    """
    path = path or settings.TIMETABLE_PATH
    data = _read_json(path, "시간표")

    if not isinstance(data, list):
        raise TimetableLoadException(f"시간표는 리스트여야 합니다: {path}")

    for entry in data:
        if not isinstance(entry, dict) or "lineName" not in entry or "type" not in entry:
            raise TimetableLoadException(f"시간표 항목 형식 오류: {str(entry)[:80]}")

    logger.info(f"시간표 로드: {path} ({len(data)}개 노선-방향)")
    return data


def load_holidays(path: Optional[str] = None) -> List[str]:
    """공휴일 JSON 로드 ('YYYY/M/D' 문자열 리스트)"""
    path = path or settings.HOLIDAY_PATH
    data = _read_json(path, "공휴일")

    if not isinstance(data, list) or not all(isinstance(d, str) for d in data):
        raise TimetableLoadException(f"공휴일 목록 형식 오류: {path}")

    logger.info(f"공휴일 로드: {path} ({len(data)}일)")
    return data
