"""카탈로그 상품 목록 HTML 클라이언트

설정된 상품 코드 목록을 검색하여 설정 순서대로 출력합니다.

주요 설정 (client/html/catalog/product/...):
- product-codes: 출력할 상품 코드 목록 (순서 유지)
- domains: 함께 불러올 도메인 (기본: client/html/catalog/domains)
- basket-add: 선택 상품의 변형 상품까지 불러올지 여부
- stock/enable: 재고 URL 출력 여부
- cache: 이 위젯의 캐시 사용 여부
- standard/subparts: 하위 클라이언트 목록
- standard/template-body, standard/template-header: 템플릿 경로
"""
from datetime import datetime
from typing import Optional

from markupsafe import Markup

from src.core.config import settings
from src.core.security import csrf_form_field
from src.engine.cache_gate import CacheGate, RenderRequest
from src.engine.composer import compose_codes
from src.engine.result import ComposeResult
from src.engine.tags import TagInvalidationAnnotator
from src.engine.view import ViewState
from src.utils.hash_utils import fingerprint_config

from ..base import BaseHtmlClient
from ..factory import register_client

CONFKEY = "client/html/catalog/product"
CSRF_MARKER = "catalog.lists.items.csrf"

# 출력에 영향을 주는 설정 (캐시 키에 포함)
KEYED_CONFIG_PATHS = (
    CONFKEY,
    "client/html/catalog/domains",
    "client/html/catalog/stock",
    "client/html/common/cache",
)


@register_client("catalog/product")
class CatalogProductClient(BaseHtmlClient):
    """설정 가능한 상품 목록 위젯"""

    sub_part_path = "client/html/catalog/product/standard/subparts"
    sub_part_names: list[str] = []

    def __init__(self, context):
        super().__init__(context)
        self._tags: list[str] = []
        self._expire: Optional[datetime] = None
        self._data_added = False

    def get_body(self, uid: str = "") -> str:
        """본문 HTML

        Args:
            uid: 같은 페이지에 여러 번 배치될 때의 고유 식별자
        """
        template = self.config.get_str(
            "client/html/catalog/product/standard/template-body",
            "catalog/product/body-standard",
        )
        return self._render_section("body", uid, template, self.modify_body)

    def get_header(self, uid: str = "") -> str:
        """헤더 HTML"""
        template = self.config.get_str(
            "client/html/catalog/product/standard/template-header",
            "catalog/product/header-standard",
        )
        return self._render_section("header", uid, template, self.modify_header)

    def get_sub_client(self, type: str, name: Optional[str] = None) -> BaseHtmlClient:
        return self.create_sub_client(f"catalog/product/{type}", name)

    def process(self) -> None:
        """입력 처리 - 어떤 오류도 오류 목록으로만 남김"""
        with self.accumulator.guard(self.view):
            super().process()

    def modify_body(self, content: str, uid: str) -> str:
        """캐시된 본문의 CSRF 필드를 현재 요청 토큰으로 교체"""
        content = super().modify_body(content, uid)
        return self.replace_section(content, csrf_form_field(self.view.csrf_token), CSRF_MARKER)

    def add_data(
        self,
        view: ViewState,
        tags: list[str],
        expire: Optional[datetime],
    ) -> tuple[list[str], Optional[datetime]]:
        """상품 목록 뷰 변수 설정

        Sets:
            listProductItems, listProductTotal, itemsProductItems,
            itemsStockUrl (재고 표시 + 결과가 있을 때만)
        """
        composition = compose_codes(self.context.controller_factory, self.config)

        stock_enabled = self.config.get_bool("client/html/catalog/product/stock/enable", True)
        if composition.items and stock_enabled:
            view.set("itemsStockUrl", self.get_stock_url(composition.all_items))

        # 상품 추가/삭제 시에도 캐시가 지워지도록 "product" 태그는 항상 포함
        annotator = TagInvalidationAnnotator(
            tag_all=self.config.get_bool("client/html/common/cache/tag-all", True),
        )
        tags, expire = annotator.annotate(composition.all_items, ["product"], tags, expire)

        view.set("listProductItems", composition.items)
        view.set("listProductTotal", composition.total)
        view.set("itemsProductItems", composition.ref_items)
        view.set("csrfField", csrf_form_field(view.csrf_token))

        return super().add_data(view, tags, expire)

    def config_fingerprint(self) -> str:
        """위젯 설정과 하위 클라이언트 구성의 해시

        상품 코드, 도메인, 하위 클라이언트 등이 바뀌면 다른 캐시 키가 됩니다.
        """
        return fingerprint_config({
            "config": {path: self.config.get(path, {}) for path in KEYED_CONFIG_PATHS},
            "subparts": self.get_sub_client_names(),
        })

    def _cache_enabled(self) -> bool:
        return settings.html_cache_enabled and self.config.get_bool(f"{CONFKEY}/cache", True)

    def _compose(self, view: ViewState, section: str, uid: str) -> ComposeResult:
        # 본문/헤더가 같은 요청에서 구성 결과를 공유
        if not self._data_added:
            self._tags, self._expire = self.add_data(view, [], None)
            self._data_added = True

        if section == "body":
            html = "".join(sub.set_view(view).get_body(uid) for sub in self.get_sub_clients())
            view.set("listBody", Markup(html))
        else:
            html = "".join(sub.set_view(view).get_header(uid) for sub in self.get_sub_clients())
            view.set("listHeader", Markup(html))

        return ComposeResult.ok(view, self._tags, self._expire)

    def _render_section(self, section: str, uid: str, template: str, post_process) -> str:
        gate = CacheGate(
            self.context.cache,
            self.context.renderer,
            self.accumulator,
            enabled=self._cache_enabled(),
        )
        request = RenderRequest(
            section=section,
            uid=uid,
            params={"config": self.config_fingerprint()},
            confkey=CONFKEY,
        )
        return gate.render(
            request,
            lambda view: self._compose(view, section, uid),
            template,
            self.view,
            post_process,
        )
