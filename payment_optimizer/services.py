from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterator, Optional

from payment_optimizer.models import Charge, PaymentMethod
from payment_optimizer.store import Store


def can_afford(method: Optional[PaymentMethod], amount: Decimal) -> bool:
    return method is not None and method.available >= amount


class MethodsService:
    def __init__(self, methods: Dict[str, PaymentMethod], points_id: str):
        self.methods = methods
        self.points_id = points_id

    def get(self, method_id: str) -> Optional[PaymentMethod]:
        return self.methods.get(method_id)

    @property
    def points(self) -> Optional[PaymentMethod]:
        return self.methods.get(self.points_id)

    def cards(self) -> Iterator[PaymentMethod]:
        return (m for m in self.methods.values() if m.id != self.points_id)

    def best_card(self, amount: Decimal) -> Optional[PaymentMethod]:
        """Highest-discount card that covers `amount`; the first one wins a tie."""
        best: Optional[PaymentMethod] = None
        for card in self.cards():
            if not can_afford(card, amount):
                continue
            if best is None or card.discount > best.discount:
                best = card
        return best


class BillingService:
    def __init__(self, store: Store):
        self.store = store

    def charge(self, order_id: str, method: PaymentMethod, amount: Decimal) -> Charge:
        method.use(amount)
        self.store.log(
            f"[order={order_id}] charged method={method.id} amount={amount} (used={method.used}, available={method.available})"
        )
        return Charge(method_id=method.id, amount=amount)
