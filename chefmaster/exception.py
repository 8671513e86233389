from enum import Enum
from typing import Any, Optional


class BusinessException(Exception):
    def __init__(self, code: Enum, *, status_code: int = 400, detail: Optional[Any] = None):
        super().__init__(getattr(code, "message", str(code)))
        self.code = code
        self.status_code = status_code
        self.detail = detail

    @property
    def error_code(self) -> str:
        return getattr(self.code, "code", getattr(self.code, "name", "UNKNOWN"))

    @property
    def error_message(self) -> str:
        return getattr(self.code, "message", str(self.code))

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class ChefMasterException(BusinessException):
    """기술 시트 서비스의 도메인 예외 기본 클래스"""


class ErrorCode(Enum):
    """(코드, 메시지) 튜플로 정의되는 에러 코드 기본 클래스"""

    def __init__(self, code: str, message: str):
        self._code = code
        self._message = message

    @property
    def code(self) -> str:
        return self._code

    @property
    def message(self) -> str:
        return self._message
