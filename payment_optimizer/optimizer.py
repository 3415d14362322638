from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence, Set, Union

from payment_optimizer.models import Order, Payment, PaymentKind, PaymentMethod
from payment_optimizer.pricing import POINTS_ID, ZERO, after_discount, discount_amount, min_points, mixed_total
from payment_optimizer.services import BillingService, MethodsService, can_afford
from payment_optimizer.store import Store

Methods = Union[Mapping[str, PaymentMethod], Sequence[PaymentMethod]]


class InputError(ValueError):
    pass


class Phase(ABC):
    def __init__(self, store: Store, methods: MethodsService):
        self.store = store
        self.methods = methods
        self.billing = BillingService(store)

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def execute(self, unassigned: List[Order]) -> None:
        """Settle what it can and remove settled orders from `unassigned` in place."""

    def run(self, unassigned: List[Order]) -> None:
        self.store.log(f"PHASE {self.name()} (unassigned={len(unassigned)})")
        self.execute(unassigned)
        self.store.log(f"PHASE {self.name()} OK (unassigned={len(unassigned)})")


@dataclass(slots=True)
class PromoCandidate:
    order: Order
    method: PaymentMethod
    discount: Decimal


class PromotionalPhase(Phase):
    """
    Greedy promo matching: each round pays the single order/card pair with the
    largest discount, then retires that card for the rest of the phase.

    A card must cover the undiscounted order value to be eligible.
    """

    def name(self) -> str:
        return "Promotions"

    def execute(self, unassigned: List[Order]) -> None:
        consumed: Set[str] = set()
        while True:
            best = self._find_best(unassigned, consumed)
            if best is None:
                break
            consumed.add(best.method.id)
            unassigned[:] = [o for o in unassigned if o is not best.order]
            self._apply(best)

    def _find_best(self, unassigned: List[Order], consumed: Set[str]) -> Optional[PromoCandidate]:
        best: Optional[PromoCandidate] = None
        best_discount = ZERO
        for order in unassigned:
            for promo_id in order.promotions:
                if promo_id in consumed or promo_id == self.methods.points_id:
                    continue
                method = self.methods.get(promo_id)
                if not can_afford(method, order.value):
                    continue
                discount = discount_amount(order.value, method.discount)
                if discount > best_discount:
                    best_discount = discount
                    best = PromoCandidate(order=order, method=method, discount=discount)
        return best

    def _apply(self, candidate: PromoCandidate) -> None:
        order, method = candidate.order, candidate.method
        self.store.log(f"[order={order.id}] promotion {method.id} wins (discount={candidate.discount})")
        charge = self.billing.charge(order.id, method, after_discount(order.value, method.discount))
        self.store.record(Payment(order_id=order.id, kind=PaymentKind.PROMOTION, charges=[charge]))


class PointsPhase(Phase):
    def name(self) -> str:
        return "Points"

    def execute(self, unassigned: List[Order]) -> None:
        points = self.methods.points
        if points is None:
            return

        remaining: List[Order] = []
        for order in unassigned:
            if not can_afford(points, order.value):
                remaining.append(order)
                continue
            charge = self.billing.charge(order.id, points, after_discount(order.value, points.discount))
            self.store.record(Payment(order_id=order.id, kind=PaymentKind.POINTS, charges=[charge]))
        unassigned[:] = remaining


class RemainderPhase(Phase):
    """Mixed points+card payment where possible, otherwise full price on the best card."""

    def name(self) -> str:
        return "Remainder"

    def execute(self, unassigned: List[Order]) -> None:
        remaining: List[Order] = []
        for order in unassigned:
            if self._try_mixed(order) or self._try_fallback(order):
                continue
            remaining.append(order)
        unassigned[:] = remaining

    def _try_mixed(self, order: Order) -> bool:
        points = self.methods.points
        if points is None or points.available <= ZERO:
            return False

        minimum = min_points(order.value)
        points_to_use = min(points.available, order.value)
        if points_to_use < minimum:
            self.store.log(f"[order={order.id}] mixed payment skipped: points available={points.available} < minimum={minimum}")
            return False

        total = mixed_total(order.value)
        charges = [self.billing.charge(order.id, points, points_to_use)]
        remaining = total - points_to_use
        uncharged = ZERO
        if remaining > ZERO:
            card = self.methods.best_card(remaining)
            if card is None:
                uncharged = remaining
                self.store.log(f"[order={order.id}] no card covers remaining={remaining}; left uncharged", level=logging.WARNING)
            else:
                charges.append(self.billing.charge(order.id, card, remaining))

        self.store.record(Payment(order_id=order.id, kind=PaymentKind.MIXED, charges=charges, uncharged=uncharged))
        return True

    def _try_fallback(self, order: Order) -> bool:
        card = self.methods.best_card(order.value)
        if card is None:
            return False
        charge = self.billing.charge(order.id, card, order.value)
        self.store.record(Payment(order_id=order.id, kind=PaymentKind.FALLBACK, charges=[charge]))
        return True


class PaymentOptimizer:
    """
    Runs the promotion, points and remainder phases over one batch of orders.

    Exactly one method id names the points account: `points_id`, "PUNKTY" by
    default. Any other id, "POINTS" included, is an ordinary card unless passed
    as `points_id`.
    """

    def __init__(self, store: Optional[Store] = None, points_id: str = POINTS_ID):
        self.store = store if store is not None else Store()
        self.points_id = points_id

    def _index_methods(self, methods: Methods) -> Dict[str, PaymentMethod]:
        if isinstance(methods, Mapping):
            for key, method in methods.items():
                if key != method.id:
                    raise InputError(f"Payment method keyed as {key} has id {method.id}")
            return dict(methods)
        index: Dict[str, PaymentMethod] = {}
        for method in methods:
            if method.id in index:
                raise InputError(f"Duplicate payment method id: {method.id}")
            index[method.id] = method
        return index

    def _validate_orders(self, orders: Sequence[Order]) -> None:
        seen: Set[str] = set()
        for order in orders:
            if order.id in seen:
                raise InputError(f"Duplicate order id: {order.id}")
            seen.add(order.id)

    def optimize(self, orders: Optional[Sequence[Order]], methods: Optional[Methods]) -> List[Order]:
        """
        Assign payment methods to `orders`, consuming the methods' limits in place.

        Returns the orders nothing could pay for (empty when every order was settled).
        """
        if orders is None or methods is None:
            raise InputError("Orders and payment methods must both be provided")
        self._validate_orders(orders)
        registry = MethodsService(self._index_methods(methods), self.points_id)

        unassigned = list(orders)
        self.store.log(f"OPTIMIZE START orders={len(unassigned)} methods={len(registry.methods)}")

        phases: List[Phase] = [
            PromotionalPhase(self.store, registry),
            PointsPhase(self.store, registry),
            RemainderPhase(self.store, registry),
        ]
        for phase in phases:
            phase.run(unassigned)

        for order in unassigned:
            self.store.log(f"[order={order.id}] left unpaid (value={order.value})", level=logging.WARNING)
        self.store.log(f"OPTIMIZE END paid={len(orders) - len(unassigned)} unpaid={len(unassigned)}")
        return unassigned
