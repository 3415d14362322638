from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List


class InsufficientFundsError(ValueError):
    pass


@dataclass(slots=True)
class Order:
    id: str
    value: Decimal
    promotions: List[str] = field(default_factory=list)


@dataclass(slots=True)
class PaymentMethod:
    """
    Payment method with a spending limit.

    `used` only grows, through `use()`; the points account is an ordinary
    method whose id is treated specially by the optimizer.
    """

    id: str
    discount: int
    limit: Decimal
    used: Decimal = Decimal("0.00")

    @property
    def available(self) -> Decimal:
        return self.limit - self.used

    def use(self, amount: Decimal) -> None:
        if amount > self.available:
            raise InsufficientFundsError(
                f"Insufficient funds for payment method {self.id}: available={self.available}, need={amount}"
            )
        self.used += amount


class PaymentKind(str, Enum):
    PROMOTION = "PROMOTION"
    POINTS = "POINTS"
    MIXED = "MIXED"
    FALLBACK = "FALLBACK"


@dataclass(slots=True)
class Charge:
    method_id: str
    amount: Decimal


@dataclass(slots=True)
class Payment:
    """How a single order was settled."""

    order_id: str
    kind: PaymentKind
    charges: List[Charge] = field(default_factory=list)
    # Part of a mixed payment no card could take.
    uncharged: Decimal = Decimal("0.00")

    @property
    def total(self) -> Decimal:
        return sum((c.amount for c in self.charges), Decimal("0.00"))
