"""카탈로그 HTML 클라이언트 - import 시 레지스트리에 등록."""

from .product import CatalogProductClient
from .product_items import CatalogProductItemsClient

__all__ = ["CatalogProductClient", "CatalogProductItemsClient"]
