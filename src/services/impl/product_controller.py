"""프론트엔드 상품 컨트롤러 - SQLAlchemy 기반 fluent 검색

    controller.compare("==", "product.code", ["a", "b"]).slice(0, 2).uses(["price"]).search()
"""
import json
from typing import Any, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.logging import logger
from src.core.exceptions import (
    ControllerException,
    DatabaseQueryException,
    InvalidFilterException,
)
from src.repositories.impl.product_repository import COLUMNS, ProductRepository
from src.repositories.models import Product
from src.schemas.catalog_schema import ProductItem, ProductRef

OPERATORS = ("==", "!=")
MAX_LIMIT = 1000


class ProductController:
    """상품 검색 조건을 누적하고 search() 에서 실행"""

    def __init__(self, db: Session):
        self.repository = ProductRepository(db)
        self._conditions: list[tuple[str, str, Any]] = []
        self._start = 0
        self._limit = 100
        self._domains: list[str] = []

    def compare(self, operator: str, key: str, value: Any) -> "ProductController":
        if operator not in OPERATORS or key not in COLUMNS:
            raise InvalidFilterException(operator=operator, key=key)
        self._conditions.append((operator, key, value))
        return self

    def slice(self, start: int, limit: int) -> "ProductController":
        if start < 0 or limit < 0:
            raise ControllerException(
                f"Invalid slice \"{start}, {limit}\"",
                "INVALID_SLICE",
                {"start": start, "limit": limit},
            )
        if limit > MAX_LIMIT:
            logger.warning(f"Slice limit {limit} exceeds {MAX_LIMIT}, clamped")
            limit = MAX_LIMIT
        self._start = start
        self._limit = limit
        return self

    def uses(self, domains: Sequence[str]) -> "ProductController":
        self._domains = list(dict.fromkeys(domains))
        return self

    def search(self) -> list[ProductItem]:
        """조건 실행 후 ProductItem 목록 반환

        Raises:
            DatabaseQueryException: DB 조회 실패
        """
        if self._limit == 0:
            return []

        try:
            rows = self.repository.search(self._conditions, self._start, self._limit)
            refs = self.repository.find_refs([row.id for row in rows]) if "product" in self._domains else []
        except SQLAlchemyError as e:
            logger.error(f"Product search failed: {type(e).__name__}: {e}")
            raise DatabaseQueryException(query="product.search", reason=str(e))

        by_parent: dict[int, list[ProductRef]] = {}
        for link, ref in refs:
            by_parent.setdefault(link.parent_id, []).append(
                ProductRef(
                    domain=link.domain,
                    list_type=link.list_type,
                    position=link.position,
                    item=self._to_item(ref),
                )
            )

        items = [self._to_item(row, by_parent.get(row.id)) for row in rows]
        logger.debug(f"Product search: {len(items)} items, domains={self._domains}")
        return items

    def _to_item(self, row: Product, refs: Optional[list[ProductRef]] = None) -> ProductItem:
        try:
            data = json.loads(row.data_json or "{}")
        except json.JSONDecodeError:
            logger.warning(f"Invalid data_json for product {row.code}")
            data = {}

        return ProductItem(
            id=str(row.id),
            code=row.code,
            type=row.type,
            label=row.label or "",
            status=row.status,
            date_start=row.date_start,
            date_end=row.date_end,
            domains={name: list(data.get(name, [])) for name in self._domains if name in data},
            refs=refs or [],
        )
