"""HTML 클라이언트 컨텍스트 - 요청 단위 협력 객체 묶음"""
from dataclasses import dataclass, field
from typing import Optional

from src.core.config import settings
from src.core.config_source import ConfigSource
from src.engine.ports import CacheStore, ControllerFactory, TemplateRenderer, Translator
from src.engine.view import ViewState


@dataclass
class ClientContext:
    """HTML 클라이언트가 사용하는 외부 협력 객체

    Attributes:
        config: 위젯 설정 소스
        renderer: 템플릿 렌더러
        translator: 번역기
        controller_factory: 상품 검색 컨트롤러 생성 함수
        cache: 프래그먼트 캐시 (None 이면 캐시 미사용)
        locale: 요청 로케일
        currency: 요청 통화
        csrf_token: 요청 CSRF 토큰
    """

    config: ConfigSource
    renderer: TemplateRenderer
    translator: Translator
    controller_factory: ControllerFactory
    cache: Optional[CacheStore] = None
    locale: str = field(default_factory=lambda: settings.default_locale)
    currency: str = ""
    csrf_token: str = ""

    def new_view(self) -> ViewState:
        """요청 컨텍스트로 새 뷰 상태 생성"""
        return ViewState(locale=self.locale, currency=self.currency, csrf_token=self.csrf_token)
