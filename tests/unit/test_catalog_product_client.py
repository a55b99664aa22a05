"""CatalogProductClient 유닛 테스트 (Fake 협력 객체 사용)"""
from dataclasses import replace

import pytest

from src.clients import (
    BaseHtmlClient,
    CatalogProductClient,
    CatalogProductItemsClient,
    create_client,
    register_client,
    registered_clients,
)
from src.core.config_source import ConfigSource
from src.core.exceptions import DatabaseQueryException, SubClientNotFoundException
from src.engine.errors import GENERIC_ERROR_MESSAGE

BODY = "catalog/product/body-standard"
HEADER = "catalog/product/header-standard"
MARKER = "<!-- catalog.lists.items.csrf -->"


@register_client("catalog/product/test-first")
class FirstPart(BaseHtmlClient):
    def get_body(self, uid: str = "") -> str:
        return "A"

    def get_header(self, uid: str = "") -> str:
        return "a"


@register_client("catalog/product/test-second")
class SecondPart(BaseHtmlClient):
    def get_body(self, uid: str = "") -> str:
        return "B"

    def get_header(self, uid: str = "") -> str:
        return "b"


@register_client("catalog/product/test-failing")
class FailingPart(BaseHtmlClient):
    def process(self) -> None:
        raise RuntimeError("process failed")


@register_client("catalog/product/test-broken-modify")
class BrokenModifyPart(BaseHtmlClient):
    def get_body(self, uid: str = "") -> str:
        return "X"

    def modify_body(self, content: str, uid: str) -> str:
        raise RuntimeError("modify failed")


def _with(context, **overrides):
    return replace(context, config=context.config.with_overrides(overrides))


class TestRegistry:
    def test_catalog_clients_registered(self):
        registered = registered_clients()
        assert ("catalog/product", "standard") in registered
        assert ("catalog/product/items", "standard") in registered

    def test_create_client(self, client_context):
        assert isinstance(create_client(client_context, "catalog/product"), CatalogProductClient)

    def test_unknown_client(self, client_context):
        with pytest.raises(SubClientNotFoundException):
            create_client(client_context, "catalog/unknown")


class TestBodyAndHeader:
    """본문/헤더 출력"""

    def test_body_lists_configured_order(self, client_context):
        html = CatalogProductClient(client_context).get_body()

        assert "items=['b', 'a', 'c']" in html

    def test_view_variables(self, client_context):
        client = CatalogProductClient(client_context)
        client.get_body()

        view = client.view
        assert [item.code for item in view.get("listProductItems")] == ["b", "a", "c"]
        assert view.get("listProductTotal") == 3
        assert view.get("itemsProductItems") == []

    def test_body_and_header_compose_once(self, client_context, product_backend):
        client = CatalogProductClient(client_context)

        client.get_header()
        client.get_body()

        assert product_backend.search_calls == 1

    def test_second_request_served_from_cache(self, client_context, product_backend, cache_store):
        CatalogProductClient(client_context).get_body()
        CatalogProductClient(client_context).get_body()

        assert product_backend.search_calls == 1
        assert cache_store.set_calls == 1

    def test_cache_disabled_by_config(self, client_context, product_backend, cache_store):
        context = _with(client_context, **{"client/html/catalog/product/cache": False})

        CatalogProductClient(context).get_body()
        CatalogProductClient(context).get_body()

        assert product_backend.search_calls == 2
        assert cache_store.set_calls == 0

    def test_changed_product_codes_miss_cache(self, client_context, product_backend, cache_store):
        """상품 코드 설정이 바뀌면 이전 캐시 항목을 재사용하지 않음"""
        CatalogProductClient(client_context).get_body()
        context = _with(client_context, **{"client/html/catalog/product/product-codes": ["c"]})

        html = CatalogProductClient(context).get_body()

        assert "items=['c']" in html
        assert product_backend.search_calls == 2
        assert len(cache_store.entries) == 2

    def test_config_fingerprint_tracks_subparts(self, client_context):
        context = _with(client_context, **{"client/html/catalog/product/standard/subparts": ["items"]})

        assert CatalogProductClient(client_context).config_fingerprint() != (
            CatalogProductClient(context).config_fingerprint()
        )
        assert CatalogProductClient(client_context).config_fingerprint() == (
            CatalogProductClient(client_context).config_fingerprint()
        )

    def test_stored_tags(self, client_context, cache_store):
        CatalogProductClient(client_context).get_body()

        entry = next(iter(cache_store.entries.values()))
        assert entry.tags == ["product", "product-1", "product-2", "product-3"]

    def test_tag_all_disabled(self, client_context, cache_store):
        context = _with(client_context, **{"client/html/common/cache/tag-all": False})

        CatalogProductClient(context).get_body()

        entry = next(iter(cache_store.entries.values()))
        assert entry.tags == ["product"]

    def test_custom_template(self, client_context, renderer):
        context = _with(client_context, **{"client/html/catalog/product/standard/template-body": "custom/body"})

        CatalogProductClient(context).get_body()

        assert renderer.calls == ["custom/body"]


class TestStockUrl:
    """재고 URL (stock/enable + 결과 존재 시에만)"""

    def test_stock_url_present(self, client_context):
        client = CatalogProductClient(client_context)
        client.get_body()

        assert client.view.get("itemsStockUrl") == (
            "/catalog/stock?st_pid%5B%5D=1&st_pid%5B%5D=2&st_pid%5B%5D=3"
        )

    def test_stock_url_disabled(self, client_context):
        context = _with(client_context, **{"client/html/catalog/product/stock/enable": False})
        client = CatalogProductClient(context)
        client.get_body()

        assert "itemsStockUrl" not in client.view

    def test_stock_url_absent_for_empty_result(self, client_context):
        context = _with(client_context, **{"client/html/catalog/product/product-codes": ["zzz"]})
        client = CatalogProductClient(context)
        client.get_body()

        assert "itemsStockUrl" not in client.view
        assert client.view.get("listProductTotal") == 0

    def test_stock_url_includes_expanded_articles(self, client_context, product_backend, product_factory):
        product_backend.items.append(
            product_factory("10", "sel", type="select", refs=[product_factory("11"), product_factory("12")])
        )
        context = _with(client_context, **{
            "client/html/catalog/product/product-codes": ["sel"],
            "client/html/catalog/product/basket-add": True,
        })
        client = CatalogProductClient(context)
        client.get_body()

        assert client.view.get("itemsStockUrl") == (
            "/catalog/stock?st_pid%5B%5D=10&st_pid%5B%5D=11&st_pid%5B%5D=12"
        )


class TestCsrf:
    """캐시 히트 시 CSRF 섹션 치환"""

    def test_cache_hit_gets_current_token(self, client_context, renderer):
        renderer.templates[BODY] = lambda v: f"<form>{MARKER}{v['csrfField']}{MARKER}</form>"

        first = CatalogProductClient(client_context).get_body()
        second = CatalogProductClient(replace(client_context, csrf_token="token-2")).get_body()

        assert 'value="token-1"' in first
        assert 'value="token-2"' in second
        assert "token-1" not in second

    def test_replace_section_without_markers(self):
        assert BaseHtmlClient.replace_section("<p>x</p>", "new", "catalog.lists.items.csrf") == "<p>x</p>"

    def test_replace_section(self):
        content = f"a{MARKER}old{MARKER}b"

        assert BaseHtmlClient.replace_section(content, "new", "catalog.lists.items.csrf") == (
            f"a{MARKER}new{MARKER}b"
        )


class TestSubClients:
    """하위 클라이언트 순서 / 오류"""

    def test_sub_clients_in_configured_order(self, client_context, renderer):
        renderer.templates[BODY] = lambda v: v["listBody"]
        renderer.templates[HEADER] = lambda v: v["listHeader"]
        context = _with(client_context, **{
            "client/html/catalog/product/standard/subparts": ["test-second", "test-first"],
        })
        client = CatalogProductClient(context)

        assert client.get_body() == "BA"
        assert client.get_header() == "ba"

    def test_unknown_sub_client_degrades(self, client_context, cache_store):
        context = _with(client_context, **{"client/html/catalog/product/standard/subparts": ["nope"]})
        client = CatalogProductClient(context)

        html = client.get_body()

        assert html
        assert len(client.view.errors) == 1
        assert cache_store.set_calls == 0

    def test_items_sub_client(self, client_context, renderer):
        context = _with(client_context, **{"client/html/catalog/product/standard/subparts": ["items"]})
        client = CatalogProductClient(context)

        client.get_body()

        assert isinstance(client.get_sub_clients()[0], CatalogProductItemsClient)
        assert renderer.calls == ["catalog/product/items-body-standard", BODY]

    def test_process_errors_recorded(self, client_context):
        context = _with(client_context, **{"client/html/catalog/product/standard/subparts": ["test-failing"]})
        client = CatalogProductClient(context)

        client.process()

        assert client.view.errors == [GENERIC_ERROR_MESSAGE]


class TestFaults:
    """구성 실패 시 저하 렌더링"""

    def test_controller_failure(self, client_context, product_backend, cache_store, translator):
        product_backend.error = DatabaseQueryException("product.search", "locked")
        client = CatalogProductClient(client_context)

        body = client.get_body()
        header = client.get_header()

        assert body and header
        assert client.view.errors == ["Database query failed: locked"]
        assert ("mshop", "Database query failed: locked") in translator.calls
        assert cache_store.set_calls == 0

    def test_fault_not_cached_then_recovers(self, client_context, product_backend, cache_store):
        product_backend.error = RuntimeError("transient")
        CatalogProductClient(client_context).get_body()

        product_backend.error = None
        client = CatalogProductClient(client_context)
        client.get_body()

        assert client.view.errors == []
        assert cache_store.set_calls == 1

    def test_cache_hit_modify_failure_degrades(self, client_context, product_backend, cache_store):
        """캐시 히트 후 치환 실패 → 예외 없이 오류 목록 출력"""
        context = _with(client_context, **{"client/html/catalog/product/standard/subparts": ["test-broken-modify"]})
        CatalogProductClient(context).get_body()
        client = CatalogProductClient(context)

        html = client.get_body()

        assert html
        assert client.view.errors == [GENERIC_ERROR_MESSAGE]
        assert product_backend.search_calls == 1
        assert cache_store.set_calls == 1


class TestConfigHelpers:
    def test_sub_client_names_default_empty(self, renderer, translator, product_backend):
        from src.clients import ClientContext

        context = ClientContext(
            config=ConfigSource({}),
            renderer=renderer,
            translator=translator,
            controller_factory=product_backend,
        )

        assert CatalogProductClient(context).get_sub_client_names() == []

    def test_none_context_rejected(self):
        with pytest.raises(ValueError):
            CatalogProductClient(None)
