"""스키마 검증 테스트"""
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from src.schemas.catalog_schema import (
    CacheInvalidateRequest,
    CachedFragment,
    ProductItem,
    ProductRef,
    utcnow,
)


class TestProductItem:
    def test_naive_dates_treated_as_utc(self):
        item = ProductItem(id="1", code="a", date_end=datetime(2030, 1, 1))

        assert item.date_end == datetime(2030, 1, 1, tzinfo=timezone.utc)

    def test_empty_code_rejected(self):
        with pytest.raises(ValidationError):
            ProductItem(id="1", code="")

    def test_get_ref_items_filters_and_sorts(self, product_factory):
        variant_b = product_factory("12", "b")
        variant_a = product_factory("11", "a")
        bundle = product_factory("13", "c", type="bundle")
        item = ProductItem(id="1", code="sel", type="select", refs=[
            ProductRef(item=variant_b, position=2),
            ProductRef(item=variant_a, position=1),
            ProductRef(item=bundle, position=0),
            ProductRef(item=product_factory("14"), list_type="suggestion", position=0),
        ])

        refs = item.get_ref_items("product", "default", "default")

        assert [ref.id for ref in refs] == ["11", "12"]


class TestCachedFragment:
    def test_is_expired(self):
        assert CachedFragment(key="k", content="", expire=utcnow() - timedelta(seconds=1)).is_expired()
        assert not CachedFragment(key="k", content="", expire=utcnow() + timedelta(hours=1)).is_expired()
        assert not CachedFragment(key="k", content="").is_expired()

    def test_json_round_trip_keeps_tags(self):
        entry = CachedFragment(key="k", content="<p/>", tags=["product"])

        assert CachedFragment.model_validate_json(entry.model_dump_json()).tags == ["product"]


class TestCacheInvalidateRequest:
    def test_blank_tags_stripped(self):
        assert CacheInvalidateRequest(tags=[" product-1 ", ""]).tags == ["product-1"]

    @pytest.mark.parametrize("tags", [[], ["  "]])
    def test_invalid(self, tags):
        with pytest.raises(ValidationError):
            CacheInvalidateRequest(tags=tags)
