"""
Routemap - 시간표 기반 지하철 최소 도착 시각 경로 탐색
"""

__version__ = "1.2.0"
