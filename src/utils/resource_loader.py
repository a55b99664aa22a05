"""리소스 파일(YAML) 로더 유틸리티"""
import os
import yaml
from typing import Any, Dict
from functools import lru_cache

from src.core.logging import logger


def get_resource_path(relative_path: str) -> str:
    """프로젝트 루트 기준 리소스 절대 경로 반환"""
    if os.path.isabs(relative_path):
        return relative_path
    # src/utils/resource_loader.py -> src/utils -> src -> root
    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    return os.path.join(base_dir, "resources", relative_path)


@lru_cache(maxsize=32)
def load_yaml_resource(relative_path: str) -> Dict[str, Any]:
    """YAML 리소스 로드 및 캐싱

    반환된 dict 는 캐시와 공유되므로 호출자가 수정하면 안 됩니다.
    """
    path = get_resource_path(relative_path)
    if not os.path.exists(path):
        logger.warning(f"Resource not found: {path}")
        return {}
    
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except Exception as e:
        logger.error(f"Failed to load YAML resource {path}: {e}")
        return {}


def load_widget_config(relative_path: str) -> Dict[str, Any]:
    """위젯 설정 트리 로드 (client/html/... 계층)"""
    return load_yaml_resource(relative_path)


def load_translation_catalogs(i18n_dir: str, locale: str) -> Dict[str, Dict[str, str]]:
    """로케일별 번역 카탈로그 로드

    Returns:
        {catalog_name: {message: translation}}
    """
    data = load_yaml_resource(os.path.join(i18n_dir, f"{locale}.yaml"))
    catalogs = data.get("catalogs", {})
    return catalogs if isinstance(catalogs, dict) else {}
