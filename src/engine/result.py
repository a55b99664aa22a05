"""Compose Result - Tagged composition outcome

Composition steps return a ComposeResult instead of raising, so the cache gate
branches explicitly on Ok / Fault.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .view import ViewState


class FaultKind(str, Enum):
    """오류 분류

    번역 카탈로그는 예외의 i18n_domain 을 따릅니다.
    """

    CLIENT = "client"  # 사용자/요청 수준
    CONTROLLER = "controller"  # 프론트엔드 컨트롤러
    DOMAIN = "domain"  # 저장소/도메인
    UNCLASSIFIED = "unclassified"  # 그 외 (운영자 로그 대상)


class ComposeStatus(str, Enum):
    """구성 결과 상태"""

    OK = "ok"
    FAULT = "fault"


@dataclass
class ComposeResult:
    """구성 결과 표준 포맷

    Attributes:
        status: OK 또는 FAULT
        view: 채워진 뷰 상태 (OK)
        tags: 캐시 무효화 태그 (OK)
        expire: 만료 시각 (OK, 없으면 None)
        fault_kind: 오류 분류 (FAULT)
        catalog: 번역 카탈로그 이름 (FAULT)
        message: 번역 전 오류 메시지 (FAULT)
        error: 원본 예외 (FAULT, 로깅용)
    """

    status: ComposeStatus
    view: Optional["ViewState"] = None
    tags: list[str] = field(default_factory=list)
    expire: Optional[datetime] = None
    fault_kind: Optional[FaultKind] = None
    catalog: Optional[str] = None
    message: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def is_ok(self) -> bool:
        return self.status == ComposeStatus.OK

    @property
    def is_fault(self) -> bool:
        return self.status == ComposeStatus.FAULT

    @classmethod
    def ok(
        cls,
        view: "ViewState",
        tags: Optional[list[str]] = None,
        expire: Optional[datetime] = None,
    ) -> "ComposeResult":
        """성공 결과 생성"""
        return cls(
            status=ComposeStatus.OK,
            view=view,
            tags=list(tags or []),
            expire=expire,
        )

    @classmethod
    def fault(
        cls,
        kind: FaultKind,
        message: str,
        error: Optional[BaseException] = None,
        catalog: Optional[str] = None,
    ) -> "ComposeResult":
        """실패 결과 생성"""
        return cls(
            status=ComposeStatus.FAULT,
            fault_kind=kind,
            catalog=catalog,
            message=message,
            error=error,
        )
