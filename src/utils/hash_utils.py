"""해싱 유틸리티"""
import hashlib
import json
from typing import Any, Mapping


def hash_string(text: str) -> str:
    """
    문자열을 MD5 해시로 변환
    
    Args:
        text: 해시할 문자열
        
    Returns:
        MD5 해시 문자열
    """
    return hashlib.md5(text.encode()).hexdigest()


def fingerprint_params(params: Mapping[str, str]) -> str:
    """파라미터 매핑을 순서 무관한 안정 문자열로 변환

    Examples:
        >>> fingerprint_params({"b": "2", "a": "1"})
        'a=1&b=2'
    """
    return "&".join(f"{key}={params[key]}" for key in sorted(params))


def generate_fragment_key(
    section: str,
    uid: str,
    params: Mapping[str, str],
    confkey: str,
    variant: str = "",
) -> str:
    """
    렌더링 단위(section, uid, params, confkey)로 캐시 키 생성
    
    Args:
        section: "body" 또는 "header"
        uid: 같은 페이지에 여러 번 배치될 때의 고유 식별자
        params: 출력에 영향을 주는 요청 파라미터
        confkey: 위젯 설정 키 (예: client/html/catalog/product)
        variant: 로케일/통화 등 추가 구분자
        
    Returns:
        Redis 캐시 키
    """
    raw = "|".join([section, uid, fingerprint_params(params), confkey, variant])
    return f"html:{hash_string(raw)}"


def generate_tag_key(tag: str) -> str:
    """태그 역인덱스(Set) 키 생성"""
    return f"html:tag:{tag}"


def fingerprint_config(value: Any) -> str:
    """설정 값(중첩 dict/list)을 키 순서와 무관한 해시로 변환

    Examples:
        >>> fingerprint_config({"b": [1], "a": "x"}) == fingerprint_config({"a": "x", "b": [1]})
        True
    """
    return hash_string(json.dumps(value, sort_keys=True, ensure_ascii=False, default=str))
