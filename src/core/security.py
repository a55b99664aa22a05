"""
보안 유틸리티
입력 검증 및 CSRF 토큰 처리
"""

import re
import secrets
from typing import Optional

from markupsafe import Markup, escape

from src.core.logging import logger, sanitize_for_log


CSRF_FIELD_NAME = "_csrf_token"
CSRF_COOKIE_NAME = "csrf_token"


class SecurityValidator:
    """입력 보안 검증"""
    
    MAX_UID_LENGTH = 64
    UID_PATTERN = re.compile(r"^[A-Za-z0-9_\-]*$")
    LOCALE_PATTERN = re.compile(r"^[a-z]{2}(_[A-Z]{2})?$")
    
    @staticmethod
    def validate_uid(uid: str) -> bool:
        """출력 고유 식별자 검증
        
        Args:
            uid: 같은 페이지에 여러 번 배치될 때의 식별자 (빈 문자열 허용)
            
        Returns:
            유효성 여부
            
        Raises:
            ValueError: 유효하지 않은 입력
        """
        if uid is None:
            raise ValueError("uid는 None일 수 없습니다")
        
        if len(uid) > SecurityValidator.MAX_UID_LENGTH:
            raise ValueError(f"uid는 {SecurityValidator.MAX_UID_LENGTH}자 이하여야 합니다")
        
        if not SecurityValidator.UID_PATTERN.match(uid):
            logger.warning(f"uid에 허용되지 않는 문자 감지: {sanitize_for_log(uid)}")
            raise ValueError("uid에는 영문, 숫자, '-', '_'만 사용할 수 있습니다")
        
        return True
    
    @staticmethod
    def validate_locale(locale: str) -> bool:
        """로케일 검증 (예: ko, en, de_CH)
        
        Raises:
            ValueError: 유효하지 않은 로케일
        """
        if not locale or not SecurityValidator.LOCALE_PATTERN.match(locale):
            raise ValueError("로케일 형식이 올바르지 않습니다")
        return True


def generate_csrf_token() -> str:
    """새 CSRF 토큰 생성"""
    return secrets.token_urlsafe(32)


def is_valid_csrf_token(token: Optional[str]) -> bool:
    """쿠키에서 읽은 토큰 형식 확인 (재사용 가능 여부)"""
    return bool(token) and len(token) <= 128 and re.fullmatch(r"[A-Za-z0-9_\-]+", token) is not None


def csrf_form_field(token: str) -> Markup:
    """폼에 삽입할 hidden input HTML"""
    return Markup(
        f'<input class="csrf-token" type="hidden" name="{CSRF_FIELD_NAME}" value="{escape(token)}" />'
    )
