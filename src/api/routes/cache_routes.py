"""캐시 관리 엔드포인트 - 태그 기반 무효화"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from src.core.exceptions import CacheException
from src.core.logging import logger
from src.schemas.catalog_schema import CacheInvalidateRequest, CacheInvalidateResponse
from src.services.impl.cache_service import HtmlCacheService

from .dependencies import get_cache_service

router = APIRouter(prefix="/api/v1/cache", tags=["cache"])


@router.post("/invalidate", response_model=CacheInvalidateResponse)
def invalidate_cache(
    request: CacheInvalidateRequest,
    cache: Optional[HtmlCacheService] = Depends(get_cache_service),
):
    """태그 중 하나라도 가진 프래그먼트 삭제

    예: {"tags": ["product-12"]} -> 상품 12를 포함한 모든 목록 무효화
    """
    if cache is None:
        raise HTTPException(status_code=503, detail="캐시 서버에 연결할 수 없습니다")

    try:
        count = cache.invalidate_tags(request.tags)
    except CacheException as e:
        logger.error(f"[API] Cache invalidation failed: {e.error_code}")
        raise HTTPException(status_code=503, detail="캐시 무효화에 실패했습니다")

    logger.info(f"[API] Invalidated {count} fragments for {len(request.tags)} tags")
    return CacheInvalidateResponse(status="success", invalidated=count)
