"""
es-CO 로케일 숫자/통화 포맷 (천 단위 '.', 소수점 ',')
"""
from decimal import ROUND_HALF_UP, Decimal


def format_number(value: float, max_fraction_digits: int = 3) -> str:
    """
    숫자를 es-CO 로케일 형식으로 변환 (소수점 이하 최대 3자리, 반올림은 0에서 먼 쪽)

    Examples:
        20000 -> '20.000'
        1234.5 -> '1.234,5'
        0.125 -> '0,125'
        1.0005 -> '1,001'
    """
    quantum = Decimal(1).scaleb(-max_fraction_digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    integer, _, fraction = f"{rounded:,f}".partition(".")
    integer = integer.replace(",", ".")
    fraction = fraction.rstrip("0")
    if integer == "-0" and not fraction:
        integer = "0"
    return f"{integer},{fraction}" if fraction else integer


def format_currency(value: float) -> str:
    return f"${format_number(value)}"


def format_quantity(amount: float, unit: str) -> str:
    return f"{format_number(amount)} {unit}".strip()


def format_percentage(value: float) -> str:
    return f"{format_number(value)}%"
