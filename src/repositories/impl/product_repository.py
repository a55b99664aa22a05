"""상품 Repository - 상품/참조 조회 및 등록"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Iterable, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from src.repositories.models import Product, ProductListItem
from src.schemas.catalog_schema import utcnow

# 컨트롤러 조건 키 -> 컬럼
COLUMNS = {
    "product.id": Product.id,
    "product.code": Product.code,
    "product.type": Product.type,
}


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def search(
        self,
        conditions: Sequence[tuple[str, str, Any]],
        start: int = 0,
        limit: int = 100,
        now: Optional[datetime] = None,
    ) -> list[Product]:
        """노출 가능한(활성 + 기간 내) 상품 검색

        Args:
            conditions: (operator, key, value) 목록, operator 는 "==" 또는 "!="
            start: 시작 오프셋
            limit: 최대 개수
            now: 기간 비교 기준 시각 (naive UTC)
        """
        now = now or utcnow().replace(tzinfo=None)
        query = (
            self.db.query(Product)
            .filter(Product.status == 1)
            .filter(or_(Product.date_start.is_(None), Product.date_start <= now))
            .filter(or_(Product.date_end.is_(None), Product.date_end >= now))
        )

        for operator, key, value in conditions:
            column = COLUMNS[key]
            values = list(value) if isinstance(value, (list, tuple, set)) else [value]
            if operator == "==":
                query = query.filter(column.in_(values))
            else:
                query = query.filter(column.notin_(values))

        return query.order_by(Product.id).offset(start).limit(limit).all()

    def find_refs(self, parent_ids: Iterable[int], domain: str = "product") -> list[tuple[ProductListItem, Product]]:
        """부모 상품들의 참조 목록 (노출 조건 미적용)"""
        ids = list(parent_ids)
        if not ids:
            return []
        return (
            self.db.query(ProductListItem, Product)
            .join(Product, Product.id == ProductListItem.ref_id)
            .filter(ProductListItem.parent_id.in_(ids))
            .filter(ProductListItem.domain == domain)
            .order_by(ProductListItem.parent_id, ProductListItem.position)
            .all()
        )

    def add_product(
        self,
        code: str,
        type: str = "default",
        label: str = "",
        status: int = 1,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
        data: Optional[dict[str, Any]] = None,
    ) -> Product:
        """상품 등록"""
        row = Product(
            code=code,
            type=type,
            label=label,
            status=status,
            date_start=date_start,
            date_end=date_end,
            data_json=json.dumps(data or {}, ensure_ascii=False),
        )
        self.db.add(row)
        self.db.flush()
        return row

    def link(self, parent: Product, ref: Product, list_type: str = "default", position: int = 0) -> ProductListItem:
        """상품 → 상품 참조 등록"""
        item = ProductListItem(
            parent_id=parent.id,
            domain="product",
            list_type=list_type,
            ref_id=ref.id,
            position=position,
        )
        self.db.add(item)
        self.db.flush()
        return item
