"""로깅 설정 (Security Enhanced)

요청 쿼리(uid, locale)와 쿠키 값이 로그 메시지에 섞이므로
모든 레코드에서 제어 문자를 제거하고, 직접 남기는 값은 sanitize_for_log 로 마스킹합니다.
"""
import logging
import re
import sys
import os
from src.core.config import settings


# Production 환경에서는 DEBUG 로그 비활성화
IS_PRODUCTION = os.getenv("ENVIRONMENT", "development") == "production"

# SQL 문 / Redis 명령 로그는 WARNING 이상만
NOISY_LOGGERS = ("sqlalchemy.engine", "redis")

# 마스킹 대상 키 (CSRF 토큰, 쿠키, 세션)
_SENSITIVE_PAIRS = re.compile(
    r"\b((?:_?csrf[\w-]*|[\w-]*token|cookie|session[\w-]*|password|secret))\s*[=:]\s*[^;&\s]+",
    re.IGNORECASE,
)
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class ControlCharFilter(logging.Filter):
    """메시지의 줄바꿈/제어 문자를 공백으로 치환 (한 레코드 = 한 줄)"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if _CONTROL_CHARS.search(message):
            record.msg = _CONTROL_CHARS.sub(" ", message)
            record.args = None
        return True


def setup_logging(name: str = "catalog_fragment") -> logging.Logger:
    """로거 초기화 및 설정"""
    
    logger = logging.getLogger(name)
    
    # Production에서는 최소 INFO 레벨
    log_level = settings.log_level.upper()
    if IS_PRODUCTION and log_level == "DEBUG":
        log_level = "INFO"
    
    logger.setLevel(getattr(logging, log_level))
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level))
    console_handler.addFilter(ControlCharFilter())
    
    if IS_PRODUCTION:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s",
            datefmt="%H:%M:%S"
        )
    
    console_handler.setFormatter(formatter)
    
    if not logger.handlers:
        logger.addHandler(console_handler)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
    
    return logger


logger = setup_logging()


def sanitize_for_log(value: str, max_length: int = 100) -> str:
    """요청 입력(uid, locale, 쿠키 헤더 등)을 로그에 남기기 전 정리

    - 제어 문자 제거 (로그 줄 위조 방지)
    - CSRF 토큰 / 쿠키 / 세션 값 마스킹
    - 최대 길이로 절단

    Examples:
        >>> sanitize_for_log("csrf_token=abc; theme=dark")
        'csrf_token=***; theme=dark'

    Args:
        value: 로깅할 문자열
        max_length: 최대 길이

    Returns:
        정리된 문자열
    """
    if not value:
        return "[empty]"

    result = _CONTROL_CHARS.sub("", str(value))
    result = _SENSITIVE_PAIRS.sub(lambda m: f"{m.group(1)}=***", result)

    # 길이 초과 시 절단
    if len(result) > max_length:
        result = result[:max_length] + "..."

    return result
