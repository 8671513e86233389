from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IngredientCategory(str, Enum):
    MEAT = "carne"
    VEGETABLE = "vegetal"
    DAIRY = "lacteo"
    FRUIT = "fruta"
    GRAIN = "grano"
    SPICE = "especia"
    LIQUID = "liquido"
    FISH = "pescado"
    EGG = "huevo"
    OTHER = "otros"


class SheetModel(BaseModel):
    """모델 응답(camelCase)과 1:1로 대응하며, 정의되지 않은 필드는 거부한다."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class Ingredient(SheetModel):
    name: str = Field(..., description="재료명")
    amount: float = Field(..., ge=0, description="수량 (g 또는 ml)")
    unit: str = Field(..., description="단위")
    unit_cost: float = Field(..., ge=0, description="단위당 원가")
    subtotal: float = Field(..., ge=0, description="소계 (수량 x 단위당 원가)")
    category: IngredientCategory = Field(..., description="재료 분류")


class Financials(SheetModel):
    total_cost: float = Field(..., ge=0, description="총 원가 (소계 합)")
    margin_percentage: float = Field(..., description="마진율(%)")
    suggested_price: float = Field(..., ge=0, description="권장 판매가")
    yield_portions: float = Field(..., gt=0, description="생산 인분 수")
    cost_per_portion: float = Field(..., ge=0, description="1인분 원가")


class PreparationStep(SheetModel):
    step: int = Field(..., ge=1, description="단계 번호")
    description: str = Field(..., description="단계 설명")
    temp: Optional[str] = Field(None, description="온도")
    time: Optional[str] = Field(None, description="소요 시간")


class Conservation(SheetModel):
    refrigeration: str = Field("", description="냉장 보관 정보")
    freezing: str = Field("", description="냉동 보관 정보")


class TechnicalSheet(SheetModel):
    dish_name: str
    category: str
    prep_time: str
    description: str
    ingredients: List[Ingredient] = Field(..., min_length=1)
    financials: Financials
    mise_en_place: List[str]
    preparation_steps: List[PreparationStep]
    plating: str
    variants: str
    allergens: List[str]
    conservation: Conservation
    qc_checklist: List[str]
    image_prompt: str
    image_url: Optional[str] = Field(None, description="이미지 생성 후 첨부되는 URL (data URI 또는 대체 이미지)")
