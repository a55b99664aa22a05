"""HTML 클라이언트 레지스트리 / 팩토리

경로("catalog/product", "catalog/product/items")와 구현 이름("standard")으로
클라이언트 클래스를 등록하고 생성합니다.
"""
from typing import Callable, Optional, TypeVar

from src.core.exceptions import SubClientNotFoundException

from .context import ClientContext

T = TypeVar("T")

DEFAULT_NAME = "standard"

_registry: dict[tuple[str, str], type] = {}


def register_client(path: str, name: str = DEFAULT_NAME) -> Callable[[T], T]:
    """클라이언트 클래스 등록 데코레이터"""
    def decorator(cls: T) -> T:
        _registry[(path.strip("/"), name)] = cls
        return cls
    return decorator


def registered_clients() -> list[tuple[str, str]]:
    """등록된 (경로, 이름) 목록"""
    return sorted(_registry)


def create_client(context: ClientContext, path: str, name: Optional[str] = None):
    """등록된 클라이언트 생성

    Raises:
        SubClientNotFoundException: 등록되지 않은 경로/이름
    """
    key = (path.strip("/"), name or DEFAULT_NAME)
    cls = _registry.get(key)
    if cls is None:
        raise SubClientNotFoundException(f"{key[0]}:{key[1]}")
    return cls(context)
