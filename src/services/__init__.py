"""비즈니스 로직 서비스 - export only."""

from .impl import HtmlCacheService, ProductController, TemplateService

__all__ = ["HtmlCacheService", "ProductController", "TemplateService"]
