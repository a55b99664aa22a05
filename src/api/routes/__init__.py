"""API routes package."""

from .health_routes import router as health_router
from .catalog_routes import router as catalog_router
from .cache_routes import router as cache_router
from .dependencies import get_cache_service, get_template_service, get_widget_config

__all__ = [
    "health_router",
    "catalog_router",
    "cache_router",
    "get_cache_service",
    "get_template_service",
    "get_widget_config",
]
