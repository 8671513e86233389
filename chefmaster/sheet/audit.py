import math
from typing import List

from chefmaster.constants import PricingConfig
from chefmaster.sheet.schema import TechnicalSheet


def financial_discrepancies(
    sheet: TechnicalSheet,
    markup: float = PricingConfig.MARKUP,
    price_rounding: float = PricingConfig.PRICE_ROUNDING,
) -> List[str]:
    """
    모델이 계산한 원가 수치의 불일치 항목을 반환한다.

    시트를 거부하거나 수정하지 않는다. 값은 모델이 준 그대로 표시되고,
    여기서 찾은 항목은 로그로만 남긴다.
    """
    issues: List[str] = []

    for ing in sheet.ingredients:
        expected = ing.amount * ing.unit_cost
        if not math.isclose(ing.subtotal, expected, rel_tol=0.01, abs_tol=1.0):
            issues.append(f"subtotal({ing.name})={ing.subtotal} != amount*unitCost={expected:g}")

    fin = sheet.financials
    total = sum(ing.subtotal for ing in sheet.ingredients)
    if not math.isclose(fin.total_cost, total, rel_tol=0.01, abs_tol=1.0):
        issues.append(f"totalCost={fin.total_cost} != sum(subtotal)={total:g}")

    per_portion = fin.total_cost / fin.yield_portions
    if not math.isclose(fin.cost_per_portion, per_portion, rel_tol=0.01, abs_tol=1.0):
        issues.append(f"costPerPortion={fin.cost_per_portion} != totalCost/yieldPortions={per_portion:g}")

    price = fin.cost_per_portion * markup
    if not math.isclose(fin.suggested_price, price, rel_tol=0.02, abs_tol=price_rounding):
        issues.append(f"suggestedPrice={fin.suggested_price} != costPerPortion*{markup}={price:g}")

    return issues
