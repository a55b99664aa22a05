"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Fake 주입 (캐시 / 렌더러 / 번역기 / 상품 컨트롤러)

금지:
- 실제 Redis / DB 연결
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.clients import ClientContext  # noqa: E402
from src.core.config_source import ConfigSource  # noqa: E402
from src.engine.view import ViewState  # noqa: E402
from src.schemas.catalog_schema import CachedFragment, ProductItem, ProductRef  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


# ============================================================================
# Fakes
# ============================================================================

@dataclass
class FakeCacheStore:
    """메모리 캐시 (태그 역인덱스 + 만료)"""

    entries: dict[str, CachedFragment] = field(default_factory=dict)
    set_calls: int = 0
    fail_on_set: bool = False

    def get(self, key: str) -> Optional[CachedFragment]:
        entry = self.entries.get(key)
        if entry is None or entry.is_expired():
            return None
        return entry

    def set(self, entry: CachedFragment) -> bool:
        self.set_calls += 1
        if self.fail_on_set:
            raise ConnectionError("cache down")
        self.entries[entry.key] = entry
        return True

    def invalidate_tags(self, tags: Iterable[str]) -> int:
        tags = set(tags)
        doomed = [key for key, entry in self.entries.items() if tags & set(entry.tags)]
        for key in doomed:
            del self.entries[key]
        return len(doomed)

    def clear(self) -> int:
        count = len(self.entries)
        self.entries.clear()
        return count


@dataclass
class FakeRenderer:
    """템플릿 ID 별 렌더 함수 (기본: 변수 요약 문자열)"""

    templates: dict[str, Callable[[Mapping[str, Any]], str]] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    def render(self, template_id: str, variables: Mapping[str, Any]) -> str:
        self.calls.append(template_id)
        fn = self.templates.get(template_id)
        if fn is not None:
            return fn(variables)
        items = variables.get("listProductItems") or []
        errors = variables.get("productErrorList") or []
        return f"[{template_id}] items={[item.code for item in items]} errors={errors}"


class FakeTranslator:
    """카탈로그 기반 번역기 (호출 기록)"""

    def __init__(self, catalogs: Optional[dict[str, dict[str, str]]] = None):
        self.catalogs = catalogs or {}
        self.calls: list[tuple[str, str]] = []

    def dt(self, domain: str, message: str) -> str:
        self.calls.append((domain, message))
        return self.catalogs.get(domain, {}).get(message, message)


class FakeController:
    """조건을 기록하고 미리 정한 아이템을 반환하는 컨트롤러"""

    def __init__(self, backend: "FakeProductBackend"):
        self.backend = backend
        self.conditions: list[tuple[str, str, Any]] = []
        self.start = 0
        self.limit = 100
        self.domains: list[str] = []

    def compare(self, operator: str, key: str, value: Any) -> "FakeController":
        self.conditions.append((operator, key, value))
        return self

    def slice(self, start: int, limit: int) -> "FakeController":
        self.start, self.limit = start, limit
        return self

    def uses(self, domains) -> "FakeController":
        self.domains = list(domains)
        return self

    def search(self) -> list[ProductItem]:
        self.backend.search_calls += 1
        self.backend.last = self
        if self.backend.error is not None:
            raise self.backend.error
        codes: set[str] = set()
        for operator, key, value in self.conditions:
            if operator == "==" and key == "product.code":
                codes.update(value)
        found = [item for item in self.backend.items if item.code in codes]
        return found[self.start:self.start + self.limit]


@dataclass
class FakeProductBackend:
    """FakeController 팩토리 (검색 횟수 기록)"""

    items: list[ProductItem] = field(default_factory=list)
    error: Optional[BaseException] = None
    search_calls: int = 0
    last: Optional[FakeController] = None

    def __call__(self) -> FakeController:
        return FakeController(self)


def make_product(
    id: str,
    code: Optional[str] = None,
    type: str = "default",
    refs: Optional[list[ProductItem]] = None,
    **kwargs: Any,
) -> ProductItem:
    """테스트용 ProductItem 생성"""
    return ProductItem(
        id=id,
        code=code or f"code-{id}",
        type=type,
        refs=[ProductRef(item=ref, position=pos) for pos, ref in enumerate(refs or [])],
        **kwargs,
    )


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def cache_store() -> FakeCacheStore:
    return FakeCacheStore()


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def translator() -> FakeTranslator:
    return FakeTranslator()


@pytest.fixture
def product_backend() -> FakeProductBackend:
    return FakeProductBackend(items=[
        make_product("1", "a"),
        make_product("2", "b"),
        make_product("3", "c"),
    ])


@pytest.fixture
def widget_config() -> ConfigSource:
    """기본 위젯 설정 (하위 클라이언트 없음)"""
    return ConfigSource({
        "client": {"html": {"catalog": {"product": {
            "product-codes": ["b", "a", "c"],
            "standard": {"subparts": []},
        }}}}
    })


@pytest.fixture
def client_context(widget_config, renderer, translator, product_backend, cache_store) -> ClientContext:
    return ClientContext(
        config=widget_config,
        renderer=renderer,
        translator=translator,
        controller_factory=product_backend,
        cache=cache_store,
        locale="ko",
        csrf_token="token-1",
    )


@pytest.fixture
def view() -> ViewState:
    return ViewState(locale="ko")


@pytest.fixture
def product_factory() -> Callable[..., ProductItem]:
    """make_product 를 테스트에 제공"""
    return make_product


@pytest.fixture
def fakes():
    """Fake 클래스 묶음 (테스트에서 직접 생성할 때)"""
    return {
        "cache": FakeCacheStore,
        "renderer": FakeRenderer,
        "translator": FakeTranslator,
        "backend": FakeProductBackend,
    }
