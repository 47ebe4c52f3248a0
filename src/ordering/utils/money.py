"""Money helpers. All amounts are ``Decimal`` quantized to cents."""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
_HUNDRED = Decimal(100)


def to_money(value) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def line_total(price: Decimal, quantity: int, discount_percent: Decimal = Decimal(0)) -> Decimal:
    """Extended price of a line after its percentage discount."""
    gross = Decimal(price) * quantity
    return to_money(gross * (_HUNDRED - Decimal(discount_percent)) / _HUNDRED)
