"""공용 의존성 - 서비스 싱글톤"""

import time
from typing import Optional

from src.core.config_source import ConfigSource
from src.core.exceptions import CacheConnectionException
from src.core.logging import logger
from src.services.impl.cache_service import HtmlCacheService
from src.services.impl.template_service import TemplateService

# Redis 연결 실패 후 재시도까지 대기 (초)
CACHE_RETRY_COOLDOWN = 30.0

# 싱글톤 서비스
_cache_service: Optional[HtmlCacheService] = None
_cache_retry_at: float = 0.0
_template_service: Optional[TemplateService] = None
_widget_config: Optional[ConfigSource] = None


def get_cache_service() -> Optional[HtmlCacheService]:
    """HtmlCacheService 싱글톤

    Redis 에 연결할 수 없으면 None (캐시 없이 렌더링) 을 반환하고
    일정 시간 동안 재연결을 시도하지 않습니다.
    """
    global _cache_service, _cache_retry_at
    if _cache_service is None:
        if time.monotonic() < _cache_retry_at:
            return None
        try:
            _cache_service = HtmlCacheService()
        except CacheConnectionException as e:
            logger.warning(f"Fragment cache unavailable, rendering without cache: {e.error_code}")
            _cache_retry_at = time.monotonic() + CACHE_RETRY_COOLDOWN
            return None
    return _cache_service


def get_template_service() -> TemplateService:
    """TemplateService 싱글톤"""
    global _template_service
    if _template_service is None:
        _template_service = TemplateService()
    return _template_service


def get_widget_config() -> ConfigSource:
    """위젯 설정 싱글톤 (resources/config/catalog.yaml)"""
    global _widget_config
    if _widget_config is None:
        _widget_config = ConfigSource.from_resource()
    return _widget_config
