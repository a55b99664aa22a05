"""Ports - capability interfaces used by the engine

The engine (composition, ordering, tagging, cache gate) depends only on these
protocols; Redis, Jinja2 and SQLAlchemy implementations live in src/services.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional, Protocol, Sequence

from src.schemas.catalog_schema import CachedFragment, ProductItem


class CacheStore(Protocol):
    """태그 기반 무효화를 지원하는 프래그먼트 캐시"""

    def get(self, key: str) -> Optional[CachedFragment]:
        """유효한 엔트리 또는 None (만료 엔트리는 미스)"""
        ...

    def set(self, entry: CachedFragment) -> bool:
        """엔트리 저장 (태그 역인덱스 포함)"""
        ...

    def invalidate_tags(self, tags: Iterable[str]) -> int:
        """태그 중 하나라도 가진 엔트리 삭제, 삭제 수 반환"""
        ...

    def clear(self) -> int:
        ...


class ProductController(Protocol):
    """프론트엔드 상품 검색 컨트롤러 (fluent)"""

    def compare(self, operator: str, key: str, value: Any) -> "ProductController":
        ...

    def slice(self, start: int, limit: int) -> "ProductController":
        ...

    def uses(self, domains: Sequence[str]) -> "ProductController":
        ...

    def search(self) -> list[ProductItem]:
        ...


ControllerFactory = Callable[[], ProductController]


class TemplateRenderer(Protocol):
    """템플릿 ID + 변수 → 문자열"""

    def render(self, template_id: str, variables: Mapping[str, Any]) -> str:
        ...


class Translator(Protocol):
    """카탈로그(domain) 내 메시지 번역"""

    def dt(self, domain: str, message: str) -> str:
        ...


# (cached content, uid) -> content, 캐시 히트 시 요청별 내용 치환
PostProcessor = Callable[[str, str], str]
