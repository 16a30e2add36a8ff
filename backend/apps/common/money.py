from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
# Largest drift tolerated between a stored total and its recomputed value
MONEY_TOLERANCE = CENT

Number = Union[Decimal, int, float, str]


def to_money(value: Number) -> Decimal:
    """Quantize to two fractional digits, rounding half up."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def money_str(value: Number) -> str:
    return str(to_money(value))


def within_tolerance(left: Number, right: Number) -> bool:
    return abs(to_money(left) - to_money(right)) <= MONEY_TOLERANCE
