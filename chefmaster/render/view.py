from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from chefmaster.constants import PricingConfig
from chefmaster.render.formatting import (
    format_currency,
    format_number,
    format_percentage,
    format_quantity,
)
from chefmaster.sheet.schema import TechnicalSheet


class IngredientRow(BaseModel):
    name: str
    category: str
    quantity: str = Field(..., description="'<수량> <단위>'")
    unit_cost: str
    subtotal: str


class StepRow(BaseModel):
    step: int
    description: str
    temp: Optional[str] = None
    time: Optional[str] = None


class SheetView(BaseModel):
    """화면/PDF 출력용으로 포맷이 끝난 기술 시트"""
    dish_name: str
    category: str
    prep_time: str
    description: str
    image_url: Optional[str] = None
    currency: str

    suggested_price: str
    total_cost: str
    cost_per_portion: str
    yield_portions: str
    margin: str

    ingredients: List[IngredientRow]
    steps: List[StepRow]
    mise_en_place: List[str]
    plating: str
    variants: str
    allergens: List[str]
    refrigeration: str
    freezing: str
    qc_checklist: List[str]

    @classmethod
    def from_sheet(cls, sheet: TechnicalSheet, currency: str = PricingConfig.CURRENCY) -> SheetView:
        fin = sheet.financials
        return cls(
            dish_name=sheet.dish_name,
            category=sheet.category,
            prep_time=sheet.prep_time,
            description=sheet.description,
            image_url=sheet.image_url,
            currency=currency,
            suggested_price=format_currency(fin.suggested_price),
            total_cost=format_currency(fin.total_cost),
            cost_per_portion=format_currency(fin.cost_per_portion),
            yield_portions=format_number(fin.yield_portions),
            margin=format_percentage(fin.margin_percentage),
            ingredients=[
                IngredientRow(
                    name=ing.name,
                    category=ing.category.value,
                    quantity=format_quantity(ing.amount, ing.unit),
                    unit_cost=format_currency(ing.unit_cost),
                    subtotal=format_currency(ing.subtotal),
                )
                for ing in sheet.ingredients
            ],
            steps=[
                StepRow(step=s.step, description=s.description, temp=s.temp or None, time=s.time or None)
                for s in sheet.preparation_steps
            ],
            mise_en_place=list(sheet.mise_en_place),
            plating=sheet.plating,
            variants=sheet.variants,
            allergens=list(sheet.allergens),
            refrigeration=sheet.conservation.refrigeration,
            freezing=sheet.conservation.freezing,
            qc_checklist=list(sheet.qc_checklist),
        )
