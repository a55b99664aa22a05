"""Services implementation package."""

from .cache_service import HtmlCacheService
from .product_controller import ProductController
from .template_service import TemplateService

__all__ = ["HtmlCacheService", "ProductController", "TemplateService"]
