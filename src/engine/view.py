"""View State - explicit accumulator for one render request

Replaces the framework's shared mutable view: composition, sub-widgets and the
template renderer all receive the same ViewState instance explicitly.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ViewState:
    """요청 단위 뷰 상태

    Attributes:
        locale: 번역/캐시 키 구분용 로케일
        currency: 통화 (캐시 키 구분)
        csrf_token: 현재 요청의 CSRF 토큰
        values: 템플릿 변수
        errors: 사용자 표시용 오류 목록 (append-only)
    """

    locale: str = "ko"
    currency: str = ""
    csrf_token: str = ""
    values: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.values[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self.values

    def add_error(self, message: str) -> None:
        """오류 메시지 추가 (같은 메시지는 한 번만)"""
        if message and message not in self.errors:
            self.errors.append(message)

    def variables(self) -> dict[str, Any]:
        """템플릿에 전달할 변수 묶음"""
        data = dict(self.values)
        data["productErrorList"] = list(self.errors)
        data["locale"] = self.locale
        data["currency"] = self.currency
        data["csrfToken"] = self.csrf_token
        return data
