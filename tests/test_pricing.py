"""Rounding checks on values whose third decimal is exactly 5."""
from decimal import Decimal

import pytest

from payment_optimizer.pricing import after_discount, discount_amount, discount_rate, min_points, mixed_total, to_cents


def test_to_cents_rounds_half_up():
    assert to_cents(Decimal("0.125")) == Decimal("0.13")
    assert to_cents(Decimal("2.675")) == Decimal("2.68")
    assert to_cents(Decimal("2.674")) == Decimal("2.67")


def test_discount_rate_is_exact():
    assert discount_rate(15) == Decimal("0.15")
    assert discount_rate(0) == Decimal("0")


@pytest.mark.parametrize(
    "value, pct, expected",
    [
        ("10.10", 15, "8.59"),  # 8.585
        ("100.00", 10, "90.00"),
        ("19.99", 0, "19.99"),
        ("19.99", 100, "0.00"),
    ],
)
def test_after_discount(value, pct, expected):
    assert after_discount(Decimal(value), pct) == Decimal(expected)


def test_discount_amount_rounds_half_up():
    assert discount_amount(Decimal("10.10"), 15) == Decimal("1.52")  # 1.515
    assert discount_amount(Decimal("150.00"), 10) == Decimal("15.00")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("50.00", "5.00"),
        ("10.01", "1.01"),  # 1.001
        ("100.05", "10.01"),  # 10.005
        ("0.05", "0.01"),  # 0.005
    ],
)
def test_min_points_rounds_up(value, expected):
    assert min_points(Decimal(value)) == Decimal(expected)


def test_mixed_total_rounds_half_up():
    assert mixed_total(Decimal("0.05")) == Decimal("0.05")  # 0.045
    assert mixed_total(Decimal("10.05")) == Decimal("9.05")  # 9.045
    assert mixed_total(Decimal("50.00")) == Decimal("45.00")
