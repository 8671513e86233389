from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

from chefmaster.render.view import SheetView
from chefmaster.sheet.schema import TechnicalSheet


class SheetState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    CONTENT = "content"
    ERROR = "error"


class SheetError(BaseModel):
    """화면에 표시되는 에러 패널"""
    kind: Literal["configuration", "generic"] = Field(..., description="에러 분류")
    message: str = Field(..., description="사용자 메시지")
    action: Literal["reconnect_credentials", "retry"] = Field(..., description="제공할 조치")
    error_code: Optional[str] = Field(None, description="내부 에러 코드")


class SheetRequest(BaseModel):
    """기술 시트 생성 요청"""
    dish_name: str = Field("", description="요리명 (공백이면 무시)")
    language: Optional[str] = Field(None, description="출력 언어 (es, en)")


class SessionResponse(BaseModel):
    """세션의 현재 상태"""
    session_id: str
    state: SheetState
    dish_name: str = ""
    sheet: Optional[TechnicalSheet] = None
    view: Optional[SheetView] = None
    error: Optional[SheetError] = None
