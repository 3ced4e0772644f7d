"""
Price breakdown shared by the cart view, checkout, payment intents and the
guest checkout quote. Everything that shows or stores a total goes through
calculate_totals so the numbers cannot drift apart.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, NamedTuple, Tuple, Union

FREE_SHIPPING_THRESHOLD = Decimal("2999")  # strictly greater than
SHIPPING_FEE = Decimal("99")
TAX_RATE = Decimal("0.18")  # flat GST, applied to the subtotal only

CENT = Decimal("0.01")

Number = Union[Decimal, int, str]


class PriceBreakdown(NamedTuple):
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


def to_money(value: Number) -> Decimal:
    """Coerce to a Decimal with two places. Floats are rejected."""
    if isinstance(value, float):
        raise TypeError("money must not be a float")
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price: Number, quantity: int) -> Decimal:
    return to_money(to_money(unit_price) * quantity)


def calculate_totals(lines: Iterable[Tuple[Number, int]]) -> PriceBreakdown:
    """
    lines: iterable of (unit_price, quantity).

    >>> calculate_totals([(Decimal("1000"), 2)])
    PriceBreakdown(subtotal=Decimal('2000.00'), shipping=Decimal('99.00'), tax=Decimal('360.00'), total=Decimal('2459.00'))
    """
    subtotal = to_money(sum((line_total(price, qty) for price, qty in lines), Decimal("0")))
    shipping = to_money(0 if subtotal > FREE_SHIPPING_THRESHOLD else SHIPPING_FEE)
    tax = to_money(subtotal * TAX_RATE)
    total = to_money(subtotal + shipping + tax)
    return PriceBreakdown(subtotal=subtotal, shipping=shipping, tax=tax, total=total)
