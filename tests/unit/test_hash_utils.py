"""해시 유틸리티 테스트"""
from src.utils.hash_utils import (
    fingerprint_config,
    fingerprint_params,
    generate_fragment_key,
    generate_tag_key,
    hash_string,
)


class TestHashUtils:
    """해시 유틸리티 테스트"""
    
    def test_hash_string(self):
        """문자열 해싱"""
        result = hash_string("테스트")
        assert len(result) == 32  # MD5 해시 길이
        assert isinstance(result, str)
    
    def test_hash_consistency(self):
        """같은 입력은 같은 해시"""
        assert hash_string("테스트") == hash_string("테스트")
    
    def test_fingerprint_params_sorted(self):
        assert fingerprint_params({"b": "2", "a": "1"}) == "a=1&b=2"
        assert fingerprint_params({}) == ""

    def test_fragment_key_stable(self):
        first = generate_fragment_key("body", "w1", {"a": "1"}, "client/html/catalog/product")
        second = generate_fragment_key("body", "w1", {"a": "1"}, "client/html/catalog/product")

        assert first == second
        assert first.startswith("html:")

    def test_fragment_key_variants_differ(self):
        base = generate_fragment_key("body", "", {}, "conf")

        assert base != generate_fragment_key("header", "", {}, "conf")
        assert base != generate_fragment_key("body", "x", {}, "conf")
        assert base != generate_fragment_key("body", "", {"p": "1"}, "conf")
        assert base != generate_fragment_key("body", "", {}, "other")
        assert base != generate_fragment_key("body", "", {}, "conf", variant="en:")

    def test_tag_key(self):
        assert generate_tag_key("product-1") == "html:tag:product-1"

    def test_fingerprint_config_ignores_key_order(self):
        """중첩 설정의 키 순서는 해시에 영향 없음"""
        first = fingerprint_config({"a": {"x": 1, "y": [1, 2]}, "b": True})
        second = fingerprint_config({"b": True, "a": {"y": [1, 2], "x": 1}})

        assert first == second

    def test_fingerprint_config_value_change(self):
        """값(리스트 순서 포함)이 바뀌면 다른 해시"""
        base = fingerprint_config({"product-codes": ["a", "b"]})

        assert base != fingerprint_config({"product-codes": ["b", "a"]})
        assert base != fingerprint_config({"product-codes": ["a"]})
