"""Pytest fixtures for payment optimizer tests."""

from decimal import Decimal
from typing import List

import pytest

from payment_optimizer.models import Order, PaymentMethod
from payment_optimizer.store import Store


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def orders() -> List[Order]:
    return [
        Order("ORDER1", Decimal("100.00"), ["mZysk"]),
        Order("ORDER2", Decimal("200.00"), ["BosBankrut"]),
        Order("ORDER3", Decimal("150.00"), ["mZysk", "BosBankrut"]),
        Order("ORDER4", Decimal("50.00"), []),
    ]


@pytest.fixture
def methods() -> List[PaymentMethod]:
    return [
        PaymentMethod("PUNKTY", discount=15, limit=Decimal("100.00")),
        PaymentMethod("mZysk", discount=10, limit=Decimal("180.00")),
        PaymentMethod("BosBankrut", discount=5, limit=Decimal("200.00")),
    ]
