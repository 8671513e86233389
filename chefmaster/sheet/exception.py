from typing import Any, Optional

from chefmaster.exception import ChefMasterException, ErrorCode

# 인증 실패로 판단하는 메시지 패턴 (소문자 비교)
CREDENTIAL_MARKERS = (
    "401",
    "403",
    "api key",
    "api_key_invalid",
    "permission_denied",
    "unauthenticated",
    "requested entity was not found",
)


class SheetErrorCode(ErrorCode):
    EMPTY_RESPONSE = ("SHEET_001", "모델이 빈 응답을 반환했습니다.")
    INVALID_SCHEMA = ("SHEET_002", "모델 응답이 기술 시트 형식과 일치하지 않습니다.")
    UNAUTHORIZED = ("SHEET_003", "AI 제공자 인증에 실패했습니다.")
    PROVIDER_ERROR = ("SHEET_004", "AI 제공자 호출 중 오류가 발생했습니다.")


class SheetException(ChefMasterException):
    def __init__(self, code: SheetErrorCode, detail: Optional[Any] = None):
        status_code = 401 if code is SheetErrorCode.UNAUTHORIZED else 502
        super().__init__(code, status_code=status_code, detail=detail)
        self.code = code


def is_credential_failure(message: str) -> bool:
    text = (message or "").lower()
    return any(marker in text for marker in CREDENTIAL_MARKERS)
