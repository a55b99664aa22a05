"""URL 생성 유틸리티"""
from typing import Iterable, Mapping, Optional
from urllib.parse import urlencode


def build_url(
    target: str,
    controller: str = "",
    action: str = "",
    params: Optional[Mapping[str, object]] = None,
    base_url: str = "",
) -> str:
    """
    target/controller/action 조합과 쿼리 파라미터로 URL 생성

    리스트 값은 `key[]=v1&key[]=v2` 형태로 반복됩니다.
    
    Examples:
        >>> build_url("catalog/stock", params={"st_pid": ["1", "2"]})
        '/catalog/stock?st_pid%5B%5D=1&st_pid%5B%5D=2'
        >>> build_url("shop", "catalog", "stock")
        '/shop/catalog/stock'
    
    Args:
        target: 대상 페이지 경로
        controller: 컨트롤러 이름 (선택)
        action: 액션 이름 (선택)
        params: 쿼리 파라미터
        base_url: 절대 URL 접두사 (선택)
        
    Returns:
        생성된 URL
    """
    segments = [seg.strip("/") for seg in (target, controller, action) if seg and seg.strip("/")]
    path = "/" + "/".join(segments)

    query: list[tuple[str, str]] = []
    for key, value in (params or {}).items():
        if isinstance(value, (list, tuple, set)):
            query.extend((f"{key}[]", str(v)) for v in value)
        elif value is not None:
            query.append((key, str(value)))

    url = f"{base_url.rstrip('/')}{path}"
    if query:
        url = f"{url}?{urlencode(query)}"
    return url


def collect_ids(items: Iterable[object]) -> list[str]:
    """아이템 목록에서 중복 없는 정렬된 id 목록 추출"""
    ids = {str(getattr(item, "id")) for item in items if getattr(item, "id", None) is not None}
    return sorted(ids)
