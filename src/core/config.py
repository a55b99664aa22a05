"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""
    
    # 데이터베이스
    database_url: str = "sqlite:///./catalog.db"
    
    # Redis (HTML 프래그먼트 캐시)
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = 86400  # 24시간 (만료 힌트가 없는 엔트리)
    html_cache_enabled: bool = True

    # 위젯 설정 / 템플릿 / 번역 리소스
    # 상대 경로는 프로젝트 루트의 resources/ 기준
    config_path: str = "config/catalog.yaml"
    templates_dir: str = "templates"
    i18n_dir: str = "i18n"
    default_locale: str = "ko"
    
    # API
    api_title: str = "카탈로그 상품 목록 서비스"
    api_version: str = "1.0.0"
    api_description: str = "태그 기반 무효화를 지원하는 캐시 우선 HTML 프래그먼트 렌더링"
    
    # 로깅
    log_level: str = "INFO"
    
    @field_validator("cache_ttl")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache_ttl must be positive")
        return v

    @field_validator("database_url", "redis_url")
    @classmethod
    def validate_required_urls(cls, v: str) -> str:
        if not v:
            raise ValueError("database_url and redis_url must not be empty")
        return v

    @field_validator("default_locale")
    @classmethod
    def validate_default_locale(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("default_locale must not be empty")
        return v.strip().lower()
    
    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
