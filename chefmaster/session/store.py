from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from chefmaster.constants import SessionConfig
from chefmaster.enum import LanguageType
from chefmaster.session.exception import SessionErrorCode, SessionException
from chefmaster.session.schema import SheetError, SheetState
from chefmaster.sheet.schema import TechnicalSheet


@dataclass
class SheetSession:
    """
    클라이언트 하나의 생성 상태.

    idle -> loading -> (content | error), content/error 에서 새 요청 시 다시 loading.
    loading 중의 새 요청은 거부한다 (진행 중인 요청은 취소하지 않는다).
    """
    session_id: str
    state: SheetState = SheetState.IDLE
    dish_name: str = ""
    language: LanguageType = LanguageType.ES
    sheet: Optional[TechnicalSheet] = None
    error: Optional[SheetError] = None
    exporting: bool = False
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    def begin(self, dish_name: str, language: LanguageType) -> bool:
        """loading 상태로 전환한다. 공백 요리명이면 아무것도 하지 않고 False."""
        name = (dish_name or "").strip()
        if not name:
            return False
        if self.state is SheetState.LOADING:
            raise SessionException(SessionErrorCode.SESSION_BUSY)

        self.state = SheetState.LOADING
        self.dish_name = name
        self.language = language
        self.sheet = None
        self.error = None
        return True

    def succeed(self, sheet: TechnicalSheet) -> None:
        self.state = SheetState.CONTENT
        self.sheet = sheet
        self.error = None

    def fail(self, error: SheetError) -> None:
        self.state = SheetState.ERROR
        self.sheet = None
        self.error = error


class InMemorySessionStore:
    def __init__(self, ttl_seconds: int = SessionConfig.TTL_SECONDS) -> None:
        self.ttl_seconds = ttl_seconds
        self._data: Dict[str, SheetSession] = {}

    def get_or_create(self, session_id: Optional[str] = None) -> SheetSession:
        self._gc()
        session_id = (session_id or "").strip() or uuid.uuid4().hex
        st = self._data.get(session_id)
        if st is None:
            st = SheetSession(session_id=session_id)
            self._data[session_id] = st
        st.updated_at = time.time()
        return st

    def save(self, st: SheetSession) -> None:
        st.updated_at = time.time()
        self._data[st.session_id] = st

    def _gc(self) -> None:
        now = time.time()
        # 진행 중인 세션은 만료시키지 않는다
        expired = [
            k for k, v in self._data.items()
            if now - v.updated_at > self.ttl_seconds
            and v.state is not SheetState.LOADING
            and not v.exporting
        ]
        for k in expired:
            self._data.pop(k, None)
