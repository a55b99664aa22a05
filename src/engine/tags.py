"""Tag Invalidation Annotator - cache tags and expiry from composed entities

Derives one tag per entity (tag-all mode), one tag per coarse category and the
earliest future date hint, so a cached fragment is dropped whenever any
product it displayed is edited, removed or changes visibility.
"""

from datetime import datetime
from typing import Iterable, Iterator, Optional, Sequence

from src.schemas.catalog_schema import ProductItem, utcnow


def entity_tag(resource_type: str, item_id: str) -> str:
    """엔티티 단위 태그 (예: product-42)"""
    return f"{resource_type}-{item_id}"


class TagInvalidationAnnotator:
    """태그/만료 계산기

    Args:
        tag_all: True 면 엔티티별 태그 추가, False 면 카테고리 태그만
        resource_type: 엔티티 태그 접두사
    """

    def __init__(self, tag_all: bool = True, resource_type: str = "product"):
        self.tag_all = tag_all
        self.resource_type = resource_type

    def annotate(
        self,
        items: Iterable[ProductItem],
        categories: Sequence[str],
        tags: Optional[Iterable[str]] = None,
        expire: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> tuple[list[str], Optional[datetime]]:
        """태그와 만료 시각 계산

        Args:
            items: 구성 중 조회한 엔티티 (참조 아이템 포함)
            categories: 집계 무효화용 카테고리 (예: ["product"])
            tags: 기존 태그 (수정하지 않음)
            expire: 기존 만료 시각
            now: 기준 시각 (테스트용)

        Returns:
            (정렬된 중복 없는 태그 목록, 가장 이른 만료 시각 또는 None)
        """
        now = now or utcnow()
        result = set(tags or [])
        result.update(categories)

        for item in self._walk(items):
            if self.tag_all:
                result.add(entity_tag(self.resource_type, item.id))
            expire = _earliest(expire, self.expiry_hint(item, now))

        return sorted(result), expire

    @staticmethod
    def expiry_hint(item: ProductItem, now: datetime) -> Optional[datetime]:
        """아이템의 노출 상태가 바뀌는 가장 이른 미래 시각"""
        hint = None
        for date in (item.date_end, item.date_start):
            if date is not None and date > now:
                hint = _earliest(hint, date)
        return hint

    def _walk(self, items: Iterable[ProductItem]) -> Iterator[ProductItem]:
        # 참조 아이템까지 id 기준으로 한 번씩 순회
        seen: set[str] = set()
        stack = list(items)
        while stack:
            item = stack.pop(0)
            if item.id in seen:
                continue
            seen.add(item.id)
            yield item
            stack.extend(ref.item for ref in item.refs if ref.domain == self.resource_type)


def _earliest(first: Optional[datetime], second: Optional[datetime]) -> Optional[datetime]:
    if first is None:
        return second
    if second is None:
        return first
    return min(first, second)
