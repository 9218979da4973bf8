"""
Routemap Backend - FastAPI Application

시간표 기반 지하철 최소 도착 시각 경로 탐색
"""

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routemap.core.config import settings, HOLIDAY, WEEKDAY
from routemap.db.cache import initialize_cache, is_initialized, get_graph
from routemap.api.v1.router import api_router
from routemap.middleware.performance_monitoring import (
    PerformanceMonitoringMiddleware,
    get_metrics_collector,
)

# 로깅 설정
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션 생명주기 관리

    서버 시작 시 시간표 / 공휴일을 로드하고 평일·토일휴일 그래프를 만든다
    """
    logger.info("=" * 60)
    logger.info("Routemap Backend 시작 중...")
    logger.info("=" * 60)

    try:
        initialize_cache()
        logger.info("Routemap Backend 시작 완료!")
    except Exception as e:
        logger.error(f"❌ 초기화 실패: {e}", exc_info=True)
        raise

    yield

    logger.info("✓ Routemap Backend 종료 완료")


# FastAPI 애플리케이션 생성
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    ## 시간표 기반 지하철 경로 탐색

    ### 주요 기능
    - 🚇 최소 도착 시각 경로 (환승 시간 반영)
    - 🕐 역별 도착 시각 / 환승역 안내
    - 📅 평일 / 토일휴일 시간표 자동 선택
    - 🚉 역 시간표, 시간표 기준 운행 중 열차
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 성능 모니터링 미들웨어 추가
if settings.ENABLE_PERFORMANCE_MONITORING:
    app.add_middleware(PerformanceMonitoringMiddleware)
    logger.info("✓ 성능 모니터링 미들웨어 활성화")

# API 라우터 등록
app.include_router(api_router, prefix="/v1")


# ========== Health Check Endpoints ==========


@app.get("/")
async def root():
    """서비스 기본 정보"""
    return {
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "running",
        "features": [
            "최소 도착 시각 경로 탐색",
            "환승역 안내",
            "역 시간표",
            "운행 중 열차",
        ],
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """
    헬스 체크 엔드포인트

    시간표 캐시 상태와 운행일 유형별 노드 수
    """
    timetable_status = "unhealthy"
    nodes = {}

    try:
        if is_initialized():
            nodes = {
                day_type: len(get_graph(day_type)) for day_type in (WEEKDAY, HOLIDAY)
            }
            timetable_status = "healthy" if all(nodes.values()) else "unhealthy"
    except Exception as e:
        logger.error(f"시간표 헬스 체크 실패: {e}")

    response_content = {
        "status": timetable_status,
        "version": settings.VERSION,
        "timestamp": time.time(),
        "components": {"timetable": timetable_status},
        "nodes": nodes,
    }

    if settings.ENABLE_PERFORMANCE_MONITORING:
        response_content["performance"] = get_metrics_collector().get_summary()

    status_code = 200 if timetable_status == "healthy" else 503
    return JSONResponse(status_code=status_code, content=response_content)


@app.get("/v1/metrics")
async def get_metrics():
    """성능 메트릭 (요청 통계)"""
    if not settings.ENABLE_PERFORMANCE_MONITORING:
        return {"message": "성능 모니터링이 비활성화되어 있습니다"}

    metrics = get_metrics_collector()
    return {
        "summary": metrics.get_summary(),
        "top_paths": metrics.get_path_stats(top_n=10),
        "configuration": {
            "slow_request_threshold_ms": settings.SLOW_REQUEST_THRESHOLD_MS,
            "monitoring_enabled": settings.ENABLE_PERFORMANCE_MONITORING,
        },
    }


# ========== Exception Handlers ==========


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """예상치 못한 오류 처리"""
    logger.error(f"예상치 못한 오류: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "message": "서버 내부 오류가 발생했습니다",
            "detail": str(exc) if settings.DEBUG else "Internal Server Error",
        },
    )


# ========== Development Server ==========

if __name__ == "__main__":
    import uvicorn

    logger.info("개발 서버 시작...")

    uvicorn.run(
        "routemap.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True,
    )
