"""위젯 설정 소스 - 계층형 문자열 키 조회

설정 트리는 YAML 의 중첩 dict 이며 `client/html/catalog/product/cache` 처럼
슬래시로 구분된 경로로 조회합니다. 조회 실패 시 항상 기본값을 반환합니다.
"""
from __future__ import annotations

import copy
from typing import Any, Mapping, Optional

from src.core.config import settings
from src.utils.resource_loader import load_widget_config

_MISSING = object()


class ConfigSource:
    """계층형 설정 조회기 (typed accessors + defaults)"""

    def __init__(self, tree: Optional[Mapping[str, Any]] = None):
        self._tree: dict[str, Any] = copy.deepcopy(dict(tree or {}))

    @classmethod
    def from_resource(cls, relative_path: Optional[str] = None) -> "ConfigSource":
        """resources/ 아래 YAML 설정 파일로 생성"""
        return cls(load_widget_config(relative_path or settings.config_path))

    def _lookup(self, path: str) -> Any:
        node: Any = self._tree
        for part in path.strip("/").split("/"):
            if not isinstance(node, Mapping) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def get(self, path: str, default: Any = None) -> Any:
        """경로 값 조회 (없으면 default)"""
        value = self._lookup(path)
        if value is _MISSING or value is None:
            return default
        return copy.deepcopy(value)

    def get_bool(self, path: str, default: bool = False) -> bool:
        """불리언 조회 - "1"/"true"/"yes"/"on" 문자열도 허용"""
        value = self._lookup(path)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)

    def get_list(self, path: str, default: Optional[list[Any]] = None) -> list[Any]:
        """리스트 조회 - 콤마 구분 문자열과 단일 값은 리스트로 변환"""
        value = self._lookup(path)
        if value is _MISSING or value is None:
            return list(default or [])
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    def get_str(self, path: str, default: str = "") -> str:
        """문자열 조회"""
        value = self._lookup(path)
        if value is _MISSING or value is None:
            return default
        return str(value)

    def set(self, path: str, value: Any) -> None:
        """경로에 값 설정 (중간 노드는 자동 생성)"""
        parts = path.strip("/").split("/")
        node = self._tree
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def with_overrides(self, overrides: Mapping[str, Any]) -> "ConfigSource":
        """경로 → 값 오버라이드를 적용한 사본 반환"""
        clone = ConfigSource(self._tree)
        for path, value in overrides.items():
            clone.set(path, value)
        return clone
