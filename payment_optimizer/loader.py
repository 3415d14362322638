"""
JSON input loader for orders and payment methods.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from payment_optimizer.models import Order, PaymentMethod
from payment_optimizer.pricing import CENT

PathLike = Union[str, Path]


class LoadError(Exception):
    pass


class OrderRecord(BaseModel):
    """One entry of the orders file."""

    id: str = Field(..., min_length=1)
    value: Decimal = Field(..., ge=0, decimal_places=2)
    promotions: Optional[List[str]] = None

    # Fields we do not know about are dropped, not rejected
    model_config = ConfigDict(extra="ignore")

    def to_order(self) -> Order:
        return Order(id=self.id, value=self.value.quantize(CENT), promotions=list(self.promotions or []))


class PaymentMethodRecord(BaseModel):
    """One entry of the payment methods file."""

    id: str = Field(..., min_length=1)
    discount: int = Field(..., ge=0, le=100, description="Discount percentage")
    limit: Decimal = Field(..., ge=0, decimal_places=2)

    model_config = ConfigDict(extra="ignore")

    def to_method(self) -> PaymentMethod:
        return PaymentMethod(id=self.id, discount=self.discount, limit=self.limit.quantize(CENT))


_ORDERS = TypeAdapter(List[OrderRecord])
_METHODS = TypeAdapter(List[PaymentMethodRecord])


def _read_json(path: PathLike) -> Any:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Cannot read {path}: {exc}") from exc
    try:
        return json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as exc:
        raise LoadError(f"Invalid JSON in {path}: {exc}") from exc


def load_orders(path: PathLike) -> List[Order]:
    try:
        records = _ORDERS.validate_python(_read_json(path))
        return [record.to_order() for record in records]
    except (ValidationError, InvalidOperation) as exc:
        raise LoadError(f"Invalid orders in {path}: {exc}") from exc


def load_payment_methods(path: PathLike) -> List[PaymentMethod]:
    try:
        records = _METHODS.validate_python(_read_json(path))
        return [record.to_method() for record in records]
    except (ValidationError, InvalidOperation) as exc:
        raise LoadError(f"Invalid payment methods in {path}: {exc}") from exc
