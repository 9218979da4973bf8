"""
Pytest 설정 및 공통 Fixture
"""

import os
import sys
from pathlib import Path

import pytest

# 테스트 모드 환경 변수 설정 (모듈 임포트 전에 설정해야 함)
os.environ["TESTING"] = "true"

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(project_root))

from routemap.algorithms.graph import ScheduleGraph  # noqa: E402
from routemap.algorithms.timetable import ScheduleNode  # noqa: E402
from routemap.db import cache as cache_module  # noqa: E402


@pytest.fixture
def chain_nodes():
    """A -> B -> C 단일 노선 (C는 마지막 역)"""
    return [
        ScheduleNode("A", "L", "B", (0, 300, 600), 180),
        ScheduleNode("B", "L", "C", (180, 480, 780), 600),
        ScheduleNode("C", "L", None, (780, 1080, 1380)),
    ]


@pytest.fixture
def loop_nodes():
    """X -> Y -> Z -> X 순환선"""
    return [
        ScheduleNode("X", "Loop", "Y", (0, 600), 100),
        ScheduleNode("Y", "Loop", "Z", (100, 700), 100),
        ScheduleNode("Z", "Loop", "X", (200, 800), 400),
    ]


@pytest.fixture
def terminus_nodes():
    """C -> D, D는 출발 시각이 없는 종점"""
    return [
        ScheduleNode("C", "L", "D", (780, 1080), 120),
        ScheduleNode("D", "L", None, ()),
    ]


@pytest.fixture
def transfer_nodes():
    """
    Fushimi -(Higashiyama)-> Sakae, Sakae -(Meijo)-> Yaba

    Sakae에서 Higashiyama 1100 도착, Meijo 출발은 1250 / 1400 / 1500
    """
    return [
        ScheduleNode("Fushimi", "Higashiyama", "Sakae", (1000, 2000), 100),
        ScheduleNode("Sakae", "Higashiyama", None, (1100, 2100)),
        ScheduleNode("Sakae", "Meijo", "Yaba", (1250, 1400, 1500), 100),
        ScheduleNode("Yaba", "Meijo", None, (1350, 1500, 1600)),
    ]


@pytest.fixture
def transfer_graph(transfer_nodes):
    return ScheduleGraph(transfer_nodes)


@pytest.fixture
def sample_raw_timetable():
    """원본 형식 시간표 (평일 1개 노선)"""
    return [
        {
            "type": "平日",
            "lineName": "桜通線（徳重行）",
            "stations": [
                {"ID": "S01", "name": "中村区役所", "time": ["5:30", "5:40", "5:50"]},
                {"ID": "S02", "name": "名古屋", "time": ["5:31", "5:42", "5:52"]},
                {"ID": "S03", "name": "国際センター", "time": ["5:33", "5:43", "5:53"]},
            ],
        }
    ]


@pytest.fixture
def bidirectional_raw_timetable():
    """P -> Q -> R (R 종점) 과 역방향 R -> Q -> P (P 종점)"""
    return [
        {
            "type": "平日",
            "lineName": "X線（R行）",
            "stations": [
                {"name": "P", "time": ["6:00", "6:10", "6:20"]},
                {"name": "Q", "time": ["6:02", "6:12", "6:22"]},
                {"name": "R", "time": []},
            ],
        },
        {
            "type": "平日",
            "lineName": "X線（P行）",
            "stations": [
                {"name": "R", "time": ["6:05", "6:15", "6:25"]},
                {"name": "Q", "time": ["6:08", "6:18", "6:28"]},
                {"name": "P", "time": []},
            ],
        },
    ]


@pytest.fixture
def fresh_cache():
    """번들 샘플 시간표로 캐시를 새로 로드, 테스트 후 비운다"""
    cache_module.clear_cache()
    cache_module.initialize_cache()
    yield cache_module
    cache_module.clear_cache()


@pytest.fixture
def empty_cache():
    """로드되지 않은 캐시 상태로 시작"""
    cache_module.clear_cache()
    yield cache_module
    cache_module.clear_cache()
