import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()  # 환경변수 읽어오기

# 패키지에 포함된 샘플 시간표 (名古屋市営地下鉄 일부 구간)
_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings:
    PROJECT_NAME: str = "Routemap Backend"
    VERSION: str = "1.2.0"

    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    PORT: int = int(os.getenv("PORT", 8001))

    # 시간표 / 공휴일 JSON 경로
    TIMETABLE_PATH: str = os.getenv("TIMETABLE_PATH", str(_DATA_DIR / "timetable.json"))
    HOLIDAY_PATH: str = os.getenv("HOLIDAY_PATH", str(_DATA_DIR / "holiday.json"))

    # 환승 시간(초), 원본 앱 기본값 200초
    TRANSFER_PENALTY_SECONDS: int = int(os.getenv("TRANSFER_PENALTY_SECONDS", 200))

    # 순환선 운행 단절 판단 허용 오차(초)
    SERVICE_GAP_TOLERANCE_SECONDS: int = int(
        os.getenv("SERVICE_GAP_TOLERANCE_SECONDS", 120)
    )

    # 0:00 ~ 4:59 => 전날 24:00 ~ 28:59 로 취급
    NIGHT_SERVICE_END_HOUR: int = int(os.getenv("NIGHT_SERVICE_END_HOUR", 5))

    # 경로 탐색 메트릭 로깅
    ENABLE_ROUTE_METRICS: bool = (
        os.getenv("ENABLE_ROUTE_METRICS", "true").lower() == "true"
    )

    # 성능 모니터링 미들웨어
    ENABLE_PERFORMANCE_MONITORING: bool = (
        os.getenv("ENABLE_PERFORMANCE_MONITORING", "true").lower() == "true"
    )
    SLOW_REQUEST_THRESHOLD_MS: int = int(os.getenv("SLOW_REQUEST_THRESHOLD_MS", 500))

    # CORS 설정
    ALLOWED_ORIGINS: list[str] = os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000",
    ).split(",")


settings = Settings()  # 모듈화


# 시간표 JSON의 type 태그
WEEKDAY = "平日"
HOLIDAY = "土日休"

# API에서 받는 day_type 별칭 => 시간표 태그
DAY_TYPES = {
    "weekday": WEEKDAY,
    "holiday": HOLIDAY,
}
