import json
import logging
from pathlib import Path
from typing import Optional

import jinja2
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from chefmaster.constants import AIConfig, PricingConfig
from chefmaster.enum import LanguageType
from chefmaster.sheet.exception import SheetErrorCode, SheetException, is_credential_failure
from chefmaster.sheet.schema import IngredientCategory, TechnicalSheet


class SheetGenerator:
    def __init__(
        self,
        *,
        client: Optional[genai.Client],
        model: str,
        system_prompt_path: Path,
        user_prompt_path: Path,
        response_schema_path: Path,
        market: str = PricingConfig.MARKET,
        currency: str = PricingConfig.CURRENCY,
        markup: float = PricingConfig.MARKUP,
        yield_portions: int = PricingConfig.YIELD_PORTIONS,
        price_rounding: int = PricingConfig.PRICE_ROUNDING,
    ):
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.model = model

        env = jinja2.Environment(autoescape=False, undefined=jinja2.StrictUndefined)
        self.system_template = env.from_string(system_prompt_path.read_text(encoding="utf-8"))
        self.user_template = env.from_string(user_prompt_path.read_text(encoding="utf-8"))
        self.response_schema = json.loads(response_schema_path.read_text(encoding="utf-8"))

        self.pricing = {
            "market": market,
            "currency": currency,
            "markup": markup,
            "food_cost_percentage": round(100 / markup),
            "yield_portions": yield_portions,
            "price_rounding": price_rounding,
        }

    def build_system_instruction(self, language: LanguageType) -> str:
        categories = ", ".join(f"'{c.value}'" for c in IngredientCategory)
        return self.system_template.render(
            categories=categories,
            language=language.prompt_name,
            **self.pricing,
        )

    def build_user_prompt(self, dish_name: str) -> str:
        return self.user_template.render(dish_name=dish_name.strip())

    def build_config(self, language: LanguageType) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=self.build_system_instruction(language),
            response_mime_type="application/json",
            response_schema=self.response_schema,
            thinking_config=types.ThinkingConfig(thinking_budget=AIConfig.THINKING_BUDGET),
        )

    def generate(self, dish_name: str, language: LanguageType = LanguageType.ES) -> TechnicalSheet:
        if self.client is None:
            self.logger.error("Gemini 클라이언트가 없습니다 (API 키 미설정).")
            raise SheetException(SheetErrorCode.UNAUTHORIZED)

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=self.build_user_prompt(dish_name),
                config=self.build_config(language),
            )
        except genai_errors.APIError as e:
            self.logger.exception(f"Gemini API 호출 중 오류가 발생했습니다. code={e.code}")
            if e.code in (401, 403) or is_credential_failure(str(e)):
                raise SheetException(SheetErrorCode.UNAUTHORIZED) from e
            raise SheetException(SheetErrorCode.PROVIDER_ERROR) from e
        except Exception as e:
            self.logger.exception("기술 시트 생성 중 예기치 못한 오류가 발생했습니다.")
            if is_credential_failure(str(e)):
                raise SheetException(SheetErrorCode.UNAUTHORIZED) from e
            raise SheetException(SheetErrorCode.PROVIDER_ERROR) from e

        text = getattr(response, "text", None)
        if not text or not text.strip():
            self.logger.error(f"Gemini API가 빈 응답을 반환했습니다. dish_name={dish_name}")
            raise SheetException(SheetErrorCode.EMPTY_RESPONSE)

        return self._parse_sheet(text)

    def _parse_sheet(self, text: str) -> TechnicalSheet:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            self.logger.error(f"Gemini 응답 JSON 파싱 실패: {e} | length={len(text)}")
            raise SheetException(SheetErrorCode.INVALID_SCHEMA, detail=str(e)) from e

        try:
            return TechnicalSheet.model_validate(payload)
        except ValidationError as e:
            self.logger.error(f"Gemini 응답 형식이 올바르지 않습니다: {e.error_count()}개 오류 | length={len(text)}")
            raise SheetException(SheetErrorCode.INVALID_SCHEMA, detail=e.errors()) from e
