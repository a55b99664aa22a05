"""번역(i18n) 서비스

resources/i18n/<locale>.yaml 의 카탈로그에서 메시지를 조회합니다.

    catalogs:
      client:
        "A non-recoverable error occured": "복구할 수 없는 오류가 발생했습니다"
      mshop:
        ...
"""
from typing import Dict, Optional

from src.core.config import settings
from src.utils.resource_loader import load_translation_catalogs


class Translator:
    """카탈로그 기반 번역기

    번역이 없으면 원문 메시지를 그대로 반환합니다.
    """

    def __init__(self, locale: Optional[str] = None, catalogs: Optional[Dict[str, Dict[str, str]]] = None):
        self.locale = (locale or settings.default_locale).lower()
        if catalogs is None:
            catalogs = load_translation_catalogs(settings.i18n_dir, self.locale)
            if not catalogs and "_" in self.locale:
                # de_ch -> de
                catalogs = load_translation_catalogs(settings.i18n_dir, self.locale.split("_")[0])
        self._catalogs = catalogs

    def dt(self, domain: str, message: str) -> str:
        """domain 카탈로그에서 message 번역"""
        catalog = self._catalogs.get(domain) or {}
        translated = catalog.get(message)
        return translated if isinstance(translated, str) and translated else message


def get_translator(locale: Optional[str] = None) -> Translator:
    """로케일별 번역기 생성 (카탈로그 파일은 로더에서 캐싱)"""
    return Translator(locale)
