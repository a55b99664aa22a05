"""API 엔드포인트 패키지 - export only."""

from .routes import (
    cache_router,
    catalog_router,
    get_cache_service,
    get_template_service,
    get_widget_config,
    health_router,
)

__all__ = [
    "health_router",
    "catalog_router",
    "cache_router",
    "get_cache_service",
    "get_template_service",
    "get_widget_config",
]
