"""Pydantic 스키마 정의 (카탈로그 상품 / 캐시 엔트리 / API)"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime:
    """timezone-aware 현재 UTC 시각"""
    return datetime.now(timezone.utc)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # DB(SQLite 등)에서 읽은 naive datetime 은 UTC 로 간주
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ProductRef(BaseModel):
    """상품 → 참조 아이템 연결 (리스트 항목)"""
    domain: str = Field("product", description="참조 도메인")
    list_type: str = Field("default", description="리스트 타입")
    position: int = Field(0, ge=0, description="정렬 위치")
    item: "ProductItem" = Field(..., description="참조된 아이템")


class ProductItem(BaseModel):
    """프론트엔드 컨트롤러가 반환하는 상품 레코드

    코어 로직은 id/code/type/기간/참조만 사용합니다.
    """
    id: str = Field(..., description="상품 ID")
    code: str = Field(..., min_length=1, description="상품 코드 (SKU)")
    type: str = Field("default", description="상품 타입 (default, select, bundle ...)")
    label: str = Field("", description="표시 이름")
    status: int = Field(1, description="1=활성, 0=비활성")
    date_start: Optional[datetime] = Field(None, description="노출 시작 시각")
    date_end: Optional[datetime] = Field(None, description="노출 종료 시각")
    domains: dict[str, list[dict[str, Any]]] = Field(default_factory=dict, description="도메인별 부가 데이터")
    refs: list[ProductRef] = Field(default_factory=list, description="상품 참조 목록")

    @field_validator("date_start", "date_end")
    @classmethod
    def _normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    def get_ref_items(
        self,
        domain: str = "product",
        type: Optional[str] = None,
        list_type: Optional[str] = None,
    ) -> list["ProductItem"]:
        """참조 아이템 조회 (position 순)

        Args:
            domain: 참조 도메인
            type: 참조된 아이템의 타입 (None 이면 전체)
            list_type: 리스트 타입 (None 이면 전체)
        """
        refs = [
            ref for ref in self.refs
            if ref.domain == domain
            and (type is None or ref.item.type == type)
            and (list_type is None or ref.list_type == list_type)
        ]
        refs.sort(key=lambda ref: ref.position)
        return [ref.item for ref in refs]

    def get_domain_items(self, domain: str) -> list[dict[str, Any]]:
        """도메인 부가 데이터 조회 (price/media/text ...)"""
        return list(self.domains.get(domain, []))


ProductRef.model_rebuild()


class CachedFragment(BaseModel):
    """캐시된 HTML 프래그먼트 (Redis 저장 포맷)"""
    key: str = Field(..., description="캐시 키")
    content: str = Field(..., description="렌더링된 HTML")
    tags: list[str] = Field(default_factory=list, description="무효화 태그")
    expire: Optional[datetime] = Field(None, description="만료 시각 (없으면 TTL)")
    created_at: datetime = Field(default_factory=utcnow, description="저장 시각")

    @field_validator("expire", "created_at")
    @classmethod
    def _normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """만료 시각 경과 여부"""
        if self.expire is None:
            return False
        return self.expire <= (now or utcnow())


class CatalogFragmentResponse(BaseModel):
    """카탈로그 상품 프래그먼트 응답 (JSON)"""
    header: str = Field(..., description="헤더 섹션 HTML")
    body: str = Field(..., description="본문 섹션 HTML")
    errors: list[str] = Field(default_factory=list, description="사용자 표시용 오류 목록")


class CacheInvalidateRequest(BaseModel):
    """태그 기반 캐시 무효화 요청"""
    tags: list[str] = Field(..., min_length=1, max_length=1000, description="무효화할 태그")

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        """빈 태그 제거 및 검증"""
        cleaned = [tag.strip() for tag in v if tag and tag.strip()]
        if not cleaned:
            raise ValueError("태그는 공백만으로 구성될 수 없습니다")
        return cleaned


class CacheInvalidateResponse(BaseModel):
    """태그 기반 캐시 무효화 응답"""
    status: str
    invalidated: int = Field(..., ge=0, description="삭제된 엔트리 수")


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    timestamp: datetime
    version: str
