"""Cache Gate - get-or-compose-and-store around a fragment render

START -> CHECK_CACHE -> HIT -> POSTPROCESS -> RETURN (POSTPROCESS fault -> RENDER_DEGRADED)
                     -> MISS -> COMPOSE -> OK -> RENDER -> STORE -> RETURN
                                        -> FAULT -> RENDER_DEGRADED -> RETURN

The store is not exclusive: concurrent misses compose independently and the
last write wins.
"""

from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from markupsafe import escape

from src.core.exceptions import ValidationException
from src.core.logging import logger
from src.schemas.catalog_schema import CachedFragment
from src.utils.hash_utils import generate_fragment_key

from .errors import ErrorAccumulator
from .ports import CacheStore, PostProcessor, TemplateRenderer
from .result import ComposeResult
from .view import ViewState

SECTIONS = ("body", "header")


@dataclass(frozen=True)
class RenderRequest:
    """캐시 가능한 렌더링 단위

    Attributes:
        section: "body" 또는 "header"
        uid: 같은 페이지에 여러 번 배치될 때의 고유 식별자
        params: 출력에 영향을 주는 추가 파라미터
        confkey: 위젯 설정 키
    """

    section: str
    uid: str = ""
    params: Mapping[str, str] = field(default_factory=dict)
    confkey: str = ""

    def __post_init__(self) -> None:
        if self.section not in SECTIONS:
            raise ValidationException("section", f"must be one of {SECTIONS}, got {self.section!r}")


Composer = Callable[[ViewState], ComposeResult]


class CacheGate:
    """캐시 게이트

    Args:
        cache: 캐시 저장소 (None 이면 캐시 미사용)
        renderer: 템플릿 렌더러
        accumulator: 오류 누적기
        enabled: 캐시 사용 여부
    """

    def __init__(
        self,
        cache: Optional[CacheStore],
        renderer: TemplateRenderer,
        accumulator: ErrorAccumulator,
        enabled: bool = True,
    ):
        if renderer is None:
            raise ValueError("renderer must not be None")
        if accumulator is None:
            raise ValueError("accumulator must not be None")
        self.cache = cache
        self.renderer = renderer
        self.accumulator = accumulator
        self.enabled = enabled and cache is not None

    @staticmethod
    def key_for(request: RenderRequest, view: ViewState) -> str:
        """캐시 키 (로케일/통화별 분리)"""
        return generate_fragment_key(
            request.section,
            request.uid,
            request.params,
            request.confkey,
            variant=f"{view.locale}:{view.currency}",
        )

    def render(
        self,
        request: RenderRequest,
        compose: Composer,
        template: str,
        view: ViewState,
        post_process: Optional[PostProcessor] = None,
    ) -> str:
        """캐시 히트면 후처리 결과, 미스면 구성-렌더링-저장 결과 반환

        Args:
            request: 렌더링 단위
            compose: 뷰를 채우고 태그/만료를 반환하는 콜백
            template: 템플릿 ID
            view: 요청 뷰 상태
            post_process: 캐시 히트 내용의 요청별 치환 훅

        Returns:
            HTML (실패 시에도 오류 목록이 포함된 저하 렌더링)
        """
        key = self.key_for(request, view)

        cached = self._lookup(key)
        if cached is not None:
            logger.debug(f"Fragment cache hit: section={request.section}, uid={request.uid!r}")
            if post_process is None:
                return cached
            try:
                return post_process(cached, request.uid)
            except Exception as e:
                # 요청별 치환 실패 시 캐시 내용은 내보내지 않음
                self.accumulator.record(self.accumulator.to_fault(e), view)
                return self._render_degraded(template, view)

        logger.debug(f"Fragment cache miss: section={request.section}, uid={request.uid!r}")
        result = self.accumulator.capture(compose, view)

        if result.is_ok:
            try:
                html = self.renderer.render(template, view.variables())
            except Exception as e:
                result = self.accumulator.to_fault(e)
            else:
                self._store(key, html, result)
                return html

        self.accumulator.record(result, view)
        return self._render_degraded(template, view)

    def _lookup(self, key: str) -> Optional[str]:
        if not self.enabled:
            return None
        try:
            entry = self.cache.get(key)
        except Exception as e:
            logger.warning(f"Fragment cache read failed: {type(e).__name__}: {e}")
            return None
        if entry is None or entry.is_expired():
            return None
        return entry.content

    def _store(self, key: str, html: str, result: ComposeResult) -> None:
        if not self.enabled:
            return
        entry = CachedFragment(key=key, content=html, tags=result.tags, expire=result.expire)
        try:
            self.cache.set(entry)
        except Exception as e:
            logger.warning(f"Fragment cache write failed: {type(e).__name__}: {e}")

    def _render_degraded(self, template: str, view: ViewState) -> str:
        try:
            html = self.renderer.render(template, view.variables())
        except Exception as e:
            logger.error(f"Degraded render failed for {template}: {type(e).__name__}: {e}")
            html = ""
        if html:
            return html

        # 템플릿까지 실패한 경우 최소한의 오류 목록 출력
        items = "".join(f"<li class=\"error-item\">{escape(message)}</li>" for message in view.errors)
        return f"<section class=\"catalog-product\"><ul class=\"error-list\">{items}</ul></section>"
