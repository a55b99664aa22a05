"""Result Composer - ordered multi-source product composition

Runs a code-filtered, sliced search against the product controller, reorders
the results into the caller's code order and optionally expands selection
products into their variant articles.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from src.core.config_source import ConfigSource
from src.core.logging import logger
from src.schemas.catalog_schema import ProductItem

from .ports import ControllerFactory

DEFAULT_DOMAINS = ["media", "price", "text"]
SELECTION_TYPE = "select"


@dataclass
class Composition:
    """구성 결과

    Attributes:
        items: 코드 순서대로 정렬된 주 상품 목록
        ref_items: 선택 상품에서 펼쳐진 참조 아이템 (태그/재고 URL 전용)
    """

    items: list[ProductItem] = field(default_factory=list)
    ref_items: list[ProductItem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def all_items(self) -> list[ProductItem]:
        return self.items + self.ref_items


def order_by_codes(items: Iterable[ProductItem], codes: Sequence[str]) -> list[ProductItem]:
    """코드 목록의 위치 순서로 정렬

    목록에 없는 코드의 아이템은 반환된 순서를 유지한 채 맨 뒤로 갑니다.
    같은 코드가 여러 번 있으면 첫 위치를 사용합니다.
    """
    positions: dict[str, int] = {}
    for index, code in enumerate(codes):
        positions.setdefault(code, index)

    items = list(items)
    unknown = [item.code for item in items if item.code not in positions]
    if unknown:
        logger.warning(f"Product codes not in configured order, sorted last: {unknown}")

    trailing = len(positions)
    return sorted(items, key=lambda item: positions.get(item.code, trailing))


class ResultComposer:
    """상품 목록 구성기

    controller_factory 는 호출마다 새 검색 컨트롤러를 반환해야 합니다.
    """

    def __init__(self, controller_factory: ControllerFactory):
        if controller_factory is None:
            raise ValueError("controller_factory must not be None")
        self.controller_factory = controller_factory

    @staticmethod
    def resolve_domains(config: ConfigSource) -> list[str]:
        """상품 목록 전용 도메인 > 카탈로그 공통 도메인 > 기본값"""
        domains = config.get_list("client/html/catalog/domains", DEFAULT_DOMAINS)
        return config.get_list("client/html/catalog/product/domains", domains)

    def compose(
        self,
        codes: Sequence[str],
        domains: Sequence[str],
        expand_selections: bool = False,
    ) -> Composition:
        """코드 목록으로 상품 검색 후 정렬

        Args:
            codes: 상품 코드 (순서 유의미)
            domains: 함께 불러올 도메인 (도메인이 많을수록 느려짐)
            expand_selections: 선택 상품의 참조 아이템 펼침 여부

        Returns:
            Composition
        """
        codes = [str(code) for code in codes]
        if not codes:
            return Composition()

        hydrate = list(domains)
        if expand_selections and "product" not in hydrate:
            hydrate.append("product")

        items = (
            self.controller_factory()
            .compare("==", "product.code", codes)
            .slice(0, len(codes))
            .uses(hydrate)
            .search()
        )
        logger.debug(f"Product search returned {len(items)} of {len(codes)} requested codes")

        ordered = order_by_codes(items, codes)
        refs = self._expand_selections(ordered) if expand_selections else []
        return Composition(items=ordered, ref_items=refs)

    def _expand_selections(self, items: Iterable[ProductItem]) -> list[ProductItem]:
        """선택 상품 → 참조된 기본 상품 (id 기준 중복 제거, 먼저 나온 것 유지)"""
        expanded: dict[str, ProductItem] = {}
        for item in items:
            if item.type != SELECTION_TYPE:
                continue
            for ref in item.get_ref_items("product", "default", "default"):
                expanded.setdefault(ref.id, ref)
        return list(expanded.values())


def compose_codes(
    controller_factory: ControllerFactory,
    config: ConfigSource,
    codes: Optional[Sequence[str]] = None,
) -> Composition:
    """설정 기반 구성 단축 함수"""
    composer = ResultComposer(controller_factory)
    if codes is None:
        codes = config.get_list("client/html/catalog/product/product-codes", [])
    return composer.compose(
        codes,
        ResultComposer.resolve_domains(config),
        expand_selections=config.get_bool("client/html/catalog/product/basket-add", False),
    )
