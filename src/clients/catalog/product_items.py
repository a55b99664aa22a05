"""카탈로그 상품 목록 - 아이템 하위 클라이언트"""
from typing import Optional

from markupsafe import Markup

from ..base import BaseHtmlClient
from ..factory import register_client


@register_client("catalog/product/items")
class CatalogProductItemsClient(BaseHtmlClient):
    """상품 아이템 목록 출력 (부모 뷰의 listProductItems 사용)"""

    sub_part_path = "client/html/catalog/product/items/standard/subparts"
    sub_part_names: list[str] = []

    def get_body(self, uid: str = "") -> str:
        html = super().get_body(uid)
        self.view.set("itemsBody", Markup(html))
        template = self.config.get_str(
            "client/html/catalog/product/items/standard/template-body",
            "catalog/product/items-body-standard",
        )
        return self.context.renderer.render(template, self.view.variables())

    def get_header(self, uid: str = "") -> str:
        html = super().get_header(uid)
        self.view.set("itemsHeader", Markup(html))
        template = self.config.get_str(
            "client/html/catalog/product/items/standard/template-header",
            "catalog/product/items-header-standard",
        )
        return self.context.renderer.render(template, self.view.variables())

    def get_sub_client(self, type: str, name: Optional[str] = None) -> BaseHtmlClient:
        return self.create_sub_client(f"catalog/product/items/{type}", name)
