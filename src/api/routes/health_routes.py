"""헬스 체크 엔드포인트"""
from typing import Optional

from fastapi import APIRouter, Depends

from src.schemas.catalog_schema import HealthResponse, utcnow
from src.services.impl.cache_service import HtmlCacheService
from src.core.database import engine
from src.core.logging import logger
from src import __version__

from .dependencies import get_cache_service

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(cache_service: Optional[HtmlCacheService] = Depends(get_cache_service)):
    """
    헬스 체크 엔드포인트
    
    - 서버 상태
    - Redis 연결 상태
    - DB 연결 상태
    """
    redis_ok = cache_service is not None and cache_service.health_check()
    if not redis_ok:
        logger.warning("Health check: fragment cache unavailable")

    db_ok = False
    try:
        with engine.connect() as connection:
            # 간단한 쿼리로 연결 확인
            connection.exec_driver_sql("SELECT 1")
            db_ok = True
    except Exception as e:
        logger.error(f"Database connection error: {e}")
        db_ok = False
    
    status = "ok" if redis_ok and db_ok else ("degraded" if redis_ok or db_ok else "error")
    
    return HealthResponse(
        status=status,
        timestamp=utcnow(),
        version=__version__
    )


@router.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": "카탈로그 상품 목록 서비스",
        "version": __version__,
        "docs": "/docs"
    }
