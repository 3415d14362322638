from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal

POINTS_ID = "PUNKTY"

ZERO = Decimal("0.00")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")

# Mixed payment: at least 10% of the order from points, 10% off the whole order.
MIN_POINTS_SHARE = Decimal("0.10")
MIXED_PAYMENT_RATE = Decimal("0.90")


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def discount_rate(discount_pct: int) -> Decimal:
    return Decimal(discount_pct) / HUNDRED


def discount_amount(value: Decimal, discount_pct: int) -> Decimal:
    return to_cents(value * discount_rate(discount_pct))


def after_discount(value: Decimal, discount_pct: int) -> Decimal:
    return to_cents(value * (1 - discount_rate(discount_pct)))


def min_points(value: Decimal) -> Decimal:
    """Smallest points contribution that still qualifies for the mixed discount."""
    return (value * MIN_POINTS_SHARE).quantize(CENT, rounding=ROUND_CEILING)


def mixed_total(value: Decimal) -> Decimal:
    return to_cents(value * MIXED_PAYMENT_RATE)
