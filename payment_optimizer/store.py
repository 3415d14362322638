from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List

from payment_optimizer.models import Order, Payment

logger = logging.getLogger(__name__)


class Store:
    """
    In-memory ledger of one optimization run.

    Holds only what the run produced:
    - one `Payment` per settled order
    - the log trail (for diagnostics and tests)

    Orders and payment methods stay with the caller; their `used` amounts
    are the real output.
    """

    def __init__(self) -> None:
        self.payments: Dict[str, Payment] = {}

        self.logs: List[str] = []

    def log(self, message: str, level: int = logging.INFO) -> None:
        self.logs.append(message)
        logger.log(level, message)

    def record(self, payment: Payment) -> None:
        self.payments[payment.order_id] = payment
        charges = ", ".join(f"{c.method_id}={c.amount}" for c in payment.charges)
        self.log(f"[order={payment.order_id}] paid {payment.kind.value}: {charges or '-'}")

    def unpaid(self, orders: Iterable[Order]) -> List[Order]:
        return [order for order in orders if order.id not in self.payments]

    def total_charged(self) -> Decimal:
        return sum((p.total for p in self.payments.values()), Decimal("0.00"))
