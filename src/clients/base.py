"""HTML 클라이언트 공통 베이스

- 하위 클라이언트(서브 위젯) 구성 및 순서 보장
- 캐시 히트 내용의 섹션 치환 (modify_body/modify_header)
- 재고 URL 생성
"""
from datetime import datetime
from typing import Iterable, Optional

from src.core.config_source import ConfigSource
from src.engine.errors import ErrorAccumulator
from src.engine.view import ViewState
from src.schemas.catalog_schema import ProductItem
from src.utils.url_utils import build_url, collect_ids

from .context import ClientContext
from .factory import create_client


class BaseHtmlClient:
    """HTML 클라이언트 베이스

    하위 클래스는 sub_part_path(설정 경로)와 sub_part_names(기본값)를 지정하고
    get_sub_client() 를 구현합니다.
    """

    sub_part_path: str = ""
    sub_part_names: list[str] = []

    def __init__(self, context: ClientContext):
        if context is None:
            raise ValueError("context must not be None")
        self.context = context
        self._view: Optional[ViewState] = None
        self._sub_clients: Optional[list["BaseHtmlClient"]] = None
        self.accumulator = ErrorAccumulator(context.translator)

    @property
    def config(self) -> ConfigSource:
        return self.context.config

    @property
    def view(self) -> ViewState:
        if self._view is None:
            self._view = self.context.new_view()
        return self._view

    def set_view(self, view: ViewState) -> "BaseHtmlClient":
        """뷰 상태 지정 (부모 클라이언트와 공유)"""
        self._view = view
        return self

    # ------------------------------------------------------------------
    # 하위 클라이언트
    # ------------------------------------------------------------------

    def get_sub_client_names(self) -> list[str]:
        return self.config.get_list(self.sub_part_path, self.sub_part_names) if self.sub_part_path else []

    def get_sub_client(self, type: str, name: Optional[str] = None) -> "BaseHtmlClient":
        raise NotImplementedError

    def create_sub_client(self, path: str, name: Optional[str] = None) -> "BaseHtmlClient":
        name = name or self.config.get_str(f"client/html/{path}/name", "") or None
        return create_client(self.context, path, name)

    def get_sub_clients(self) -> list["BaseHtmlClient"]:
        """설정된 순서대로 하위 클라이언트 목록"""
        if self._sub_clients is None:
            self._sub_clients = [self.get_sub_client(name) for name in self.get_sub_client_names()]
        return self._sub_clients

    # ------------------------------------------------------------------
    # 출력
    # ------------------------------------------------------------------

    def get_body(self, uid: str = "") -> str:
        return "".join(sub.set_view(self.view).get_body(uid) for sub in self.get_sub_clients())

    def get_header(self, uid: str = "") -> str:
        return "".join(sub.set_view(self.view).get_header(uid) for sub in self.get_sub_clients())

    def add_data(
        self,
        view: ViewState,
        tags: list[str],
        expire: Optional[datetime],
    ) -> tuple[list[str], Optional[datetime]]:
        """뷰 변수 설정 후 (태그, 만료) 반환 - 하위 클라이언트까지 순서대로"""
        for sub in self.get_sub_clients():
            tags, expire = sub.set_view(view).add_data(view, tags, expire)
        return tags, expire

    def process(self) -> None:
        """입력 처리 (출력 없이 뷰 변수만 설정)"""
        for sub in self.get_sub_clients():
            sub.set_view(self.view).process()

    def modify_body(self, content: str, uid: str) -> str:
        """캐시된 본문 중 세션/쿠키 의존 부분 치환"""
        for sub in self.get_sub_clients():
            content = sub.set_view(self.view).modify_body(content, uid)
        return content

    def modify_header(self, content: str, uid: str) -> str:
        """캐시된 헤더 중 세션/쿠키 의존 부분 치환"""
        for sub in self.get_sub_clients():
            content = sub.set_view(self.view).modify_header(content, uid)
        return content

    # ------------------------------------------------------------------
    # 헬퍼
    # ------------------------------------------------------------------

    @staticmethod
    def replace_section(content: str, section: str, marker: str) -> str:
        """`<!-- marker -->...<!-- marker -->` 사이를 section 으로 치환

        마커가 두 개 미만이면 content 를 그대로 반환합니다.
        """
        tag = f"<!-- {marker} -->"
        start = content.find(tag)
        if start == -1:
            return content
        end = content.find(tag, start + len(tag))
        if end == -1:
            return content
        return content[: start + len(tag)] + str(section) + content[end:]

    def get_stock_url(self, items: Iterable[ProductItem]) -> str:
        """재고 조회 URL (AJAX 로 재고를 채우므로 캐시 대상에서 제외)"""
        target = self.config.get_str("client/html/catalog/stock/url/target", "catalog/stock")
        controller = self.config.get_str("client/html/catalog/stock/url/controller", "")
        action = self.config.get_str("client/html/catalog/stock/url/action", "")
        base_url = self.config.get_str("client/html/catalog/stock/url/base", "")
        return build_url(target, controller, action, {"st_pid": collect_ids(items)}, base_url)
