"""커스텀 예외 정의 (Structured Exception Hierarchy)

위젯 경계(ErrorAccumulator)는 예외 계열별 `i18n_domain` 으로
번역 카탈로그를 선택합니다.
- ClientException      -> "client"
- ControllerException  -> "controller/frontend"
- DomainException      -> "mshop"
"""
from typing import Any, Optional


# 기본 예외 클래스
class StorefrontException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""

    i18n_domain: Optional[str] = None

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)
    
    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# HTML 클라이언트(위젯) 예외
class ClientException(StorefrontException):
    """HTML 클라이언트 계층 예외 (사용자/요청 수준)"""

    i18n_domain = "client"

    def __init__(self, message: str, error_code: str = "CLIENT_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CLIENT_ERROR", details)


class TemplateNotFoundException(ClientException):
    """템플릿 파일을 찾을 수 없을 때"""
    def __init__(self, template_id: str, details: Optional[dict[str, Any]] = None):
        message = f"Template \"{template_id}\" not available"
        super().__init__(message, "TEMPLATE_NOT_FOUND", details or {"template_id": template_id})


class SubClientNotFoundException(ClientException):
    """등록되지 않은 하위 클라이언트"""
    def __init__(self, path: str, details: Optional[dict[str, Any]] = None):
        message = f"Sub-client \"{path}\" not available"
        super().__init__(message, "SUBCLIENT_NOT_FOUND", details or {"path": path})


class ValidationException(ClientException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR", 
                        details or {"field": field, "reason": reason})


# 프론트엔드 컨트롤러 예외
class ControllerException(StorefrontException):
    """프론트엔드 컨트롤러 계층 예외"""

    i18n_domain = "controller/frontend"

    def __init__(self, message: str, error_code: str = "CONTROLLER_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CONTROLLER_ERROR", details)


class InvalidFilterException(ControllerException):
    """지원하지 않는 검색 조건"""
    def __init__(self, operator: str, key: str, details: Optional[dict[str, Any]] = None):
        message = f"Invalid search condition \"{key} {operator}\""
        super().__init__(message, "INVALID_FILTER", 
                        details or {"operator": operator, "key": key})


# 저장소/도메인 예외
class DomainException(StorefrontException):
    """저장소/도메인 계층 예외"""

    i18n_domain = "mshop"

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "DOMAIN_ERROR", details)


# 캐시 관련 예외
class CacheException(DomainException):
    """캐시 관련 예외"""
    def __init__(self, message: str, error_code: str = "CACHE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CACHE_ERROR", details)


class CacheConnectionException(CacheException):
    """캐시 연결 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Failed to connect to cache: {reason}"
        super().__init__(message, "CACHE_CONNECTION_ERROR", details or {"reason": reason})


class CacheSerializationException(CacheException):
    """캐시 직렬화/역직렬화 오류"""
    def __init__(self, operation: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache {operation} failed: {reason}"
        super().__init__(message, "CACHE_SERIALIZATION_ERROR", 
                        details or {"operation": operation, "reason": reason})


# 데이터베이스 관련 예외
class DatabaseException(DomainException):
    """데이터베이스 관련 예외"""
    def __init__(self, message: str, error_code: str = "DB_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "DB_ERROR", details)


class DatabaseConnectionException(DatabaseException):
    """DB 연결 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Database connection failed: {reason}"
        super().__init__(message, "DB_CONNECTION_ERROR", details)


class DatabaseQueryException(DatabaseException):
    """DB 쿼리 실행 오류"""
    def __init__(self, query: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Database query failed: {reason}"
        super().__init__(message, "DB_QUERY_ERROR", 
                        details or {"query": query, "reason": reason})
