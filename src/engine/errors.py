"""Error Accumulator - fault boundary for composition and rendering

Converts the four fault classes into localized entries of the view's error
list. Only unclassified faults are logged for operators; nothing is re-raised.
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator

from src.core.exceptions import (
    ClientException,
    ControllerException,
    DomainException,
    StorefrontException,
)
from src.core.logging import logger

from .ports import Translator
from .result import ComposeResult, FaultKind
from .view import ViewState

GENERIC_ERROR_MESSAGE = "A non-recoverable error occured"
GENERIC_CATALOG = "client"


class ErrorAccumulator:
    """오류 누적기

    Args:
        translator: dt(domain, message) 를 제공하는 번역기
    """

    def __init__(self, translator: Translator):
        if translator is None:
            raise ValueError("translator must not be None")
        self.translator = translator

    @staticmethod
    def classify(error: BaseException) -> FaultKind:
        """예외 → 오류 분류"""
        if isinstance(error, ClientException):
            return FaultKind.CLIENT
        if isinstance(error, ControllerException):
            return FaultKind.CONTROLLER
        if isinstance(error, DomainException):
            return FaultKind.DOMAIN
        return FaultKind.UNCLASSIFIED

    def to_fault(self, error: BaseException) -> ComposeResult:
        """예외를 FAULT 결과로 변환 (미분류는 운영 로그 기록)"""
        kind = self.classify(error)

        if kind == FaultKind.UNCLASSIFIED:
            logger.error(
                f"Unclassified fault during rendering: {type(error).__name__}: {error}",
                exc_info=(type(error), error, error.__traceback__),
            )
            return ComposeResult.fault(kind, GENERIC_ERROR_MESSAGE, error, GENERIC_CATALOG)

        message = error.message if isinstance(error, StorefrontException) else str(error)
        catalog = getattr(error, "i18n_domain", None) or GENERIC_CATALOG
        logger.debug(f"Classified fault ({kind.value}, {catalog}): {error}")
        return ComposeResult.fault(kind, message, error, catalog)

    def capture(self, fn: Callable[..., ComposeResult], *args: Any, **kwargs: Any) -> ComposeResult:
        """fn 실행 결과 또는 예외를 ComposeResult 로 반환"""
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            return self.to_fault(e)

    def record(self, result: ComposeResult, view: ViewState) -> None:
        """FAULT 결과를 번역하여 뷰 오류 목록에 추가"""
        if not result.is_fault:
            return
        message = result.message or GENERIC_ERROR_MESSAGE
        view.add_error(self.translator.dt(result.catalog or GENERIC_CATALOG, message))

    @contextmanager
    def guard(self, view: ViewState) -> Iterator[ViewState]:
        """입력 처리 등 부수효과 단계용 경계 (예외를 오류 목록으로 전환)"""
        try:
            yield view
        except Exception as e:
            self.record(self.to_fault(e), view)
