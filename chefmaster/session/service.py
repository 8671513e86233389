import asyncio
import logging
from typing import Optional

from chefmaster.constants import ErrorMessages, ImageConfig, PricingConfig
from chefmaster.enum import LanguageType
from chefmaster.image.exception import ImageException
from chefmaster.image.generator import ImageGenerator
from chefmaster.render.view import SheetView
from chefmaster.session.schema import SessionResponse, SheetError, SheetState
from chefmaster.session.store import InMemorySessionStore, SheetSession
from chefmaster.sheet.audit import financial_discrepancies
from chefmaster.sheet.exception import SheetErrorCode, SheetException, is_credential_failure
from chefmaster.sheet.generator import SheetGenerator
from chefmaster.sheet.schema import TechnicalSheet


def classify_failure(error: Exception, language: LanguageType) -> SheetError:
    """생성 실패를 인증 문제(재연결 안내)와 일반 오류(재시도 안내)로 분류한다."""
    error_code = error.error_code if isinstance(error, SheetException) else None
    credential = (
        isinstance(error, SheetException) and error.code is SheetErrorCode.UNAUTHORIZED
    ) or is_credential_failure(str(error))

    if credential:
        return SheetError(
            kind="configuration",
            message=ErrorMessages.CONFIGURATION[language.value],
            action="reconnect_credentials",
            error_code=error_code,
        )
    return SheetError(
        kind="generic",
        message=ErrorMessages.GENERIC[language.value],
        action="retry",
        error_code=error_code,
    )


class SessionService:
    def __init__(
        self,
        store: InMemorySessionStore,
        sheet_generator: SheetGenerator,
        image_generator: ImageGenerator,
        fallback_image_url: str = ImageConfig.FALLBACK_URL,
        currency: str = PricingConfig.CURRENCY,
        markup: float = PricingConfig.MARKUP,
        price_rounding: float = PricingConfig.PRICE_ROUNDING,
    ):
        self.logger = logging.getLogger(__name__)
        self.store = store
        self.sheet_generator = sheet_generator
        self.image_generator = image_generator
        self.fallback_image_url = fallback_image_url
        self.currency = currency
        self.markup = markup
        self.price_rounding = price_rounding

    def open(self, session_id: Optional[str]) -> SheetSession:
        return self.store.get_or_create(session_id)

    async def submit(self, session: SheetSession, dish_name: str, language: LanguageType) -> SheetSession:
        if not session.begin(dish_name, language):
            self.logger.info(f"빈 요리명 요청은 무시합니다. session_id={session.session_id}")
            return session

        await self._run(session)
        return session

    async def retry(self, session: SheetSession) -> SheetSession:
        if session.state is not SheetState.ERROR or not session.dish_name:
            return session

        session.begin(session.dish_name, session.language)
        await self._run(session)
        return session

    async def _run(self, session: SheetSession) -> None:
        self.logger.info(f"[SessionService] ▶ 기술 시트 생성 시작 | dish_name={session.dish_name} | session_id={session.session_id}")

        # 1) 기술 시트 (텍스트)
        try:
            sheet = await asyncio.to_thread(
                self.sheet_generator.generate, session.dish_name, session.language
            )
        except SheetException as e:
            self.logger.error(f"[SessionService] ▶ 기술 시트 생성 실패 | error_code={e.error_code} | dish_name={session.dish_name}")
            session.fail(classify_failure(e, session.language))
            self.store.save(session)
            return
        except Exception as e:
            self.logger.exception(f"[SessionService] ▶ 기술 시트 생성 중 예상치 못한 오류 | dish_name={session.dish_name}")
            session.fail(classify_failure(e, session.language))
            self.store.save(session)
            return

        try:
            for issue in financial_discrepancies(sheet, self.markup, self.price_rounding):
                self.logger.warning(f"[SessionService] ▶ 원가 수치 불일치 | dish_name={sheet.dish_name} | {issue}")

            # 2) 이미지 (실패 시 대체 이미지)
            image_url = await self._illustrate(sheet)
            session.succeed(sheet.model_copy(update={"image_url": image_url}))
        except Exception as e:
            # 어떤 경우에도 loading 상태로 남지 않는다
            self.logger.exception(f"[SessionService] ▶ 기술 시트 마무리 중 예상치 못한 오류 | dish_name={sheet.dish_name}")
            session.fail(classify_failure(e, session.language))
            self.store.save(session)
            return

        self.store.save(session)
        self.logger.info(f"[SessionService] ▶ 기술 시트 생성 완료 | dish_name={sheet.dish_name} | ingredients={len(sheet.ingredients)}")

    async def _illustrate(self, sheet: TechnicalSheet) -> str:
        prompt = sheet.image_prompt.strip() or sheet.dish_name
        try:
            return await asyncio.to_thread(self.image_generator.generate, prompt)
        except ImageException as e:
            self.logger.warning(f"[SessionService] ▶ 이미지 생성 실패, 대체 이미지 사용 | error_code={e.error_code}")
            return self.fallback_image_url
        except Exception as e:
            self.logger.warning(f"[SessionService] ▶ 이미지 단계 예상치 못한 오류, 대체 이미지 사용 | error={e!r}")
            return self.fallback_image_url

    def to_response(self, session: SheetSession) -> SessionResponse:
        sheet = session.sheet if session.state is SheetState.CONTENT else None
        return SessionResponse(
            session_id=session.session_id,
            state=session.state,
            dish_name=session.dish_name,
            sheet=sheet,
            view=SheetView.from_sheet(sheet, self.currency) if sheet else None,
            error=session.error if session.state is SheetState.ERROR else None,
        )
