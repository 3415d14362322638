from __future__ import annotations

from typing import IO, Iterable, List, Optional

from payment_optimizer.models import PaymentMethod
from payment_optimizer.pricing import ZERO


def usage_lines(methods: Iterable[PaymentMethod]) -> List[str]:
    """`<id> <used>` for every method that was charged, in the given order."""
    return [f"{method.id} {method.used}" for method in methods if method.used > ZERO]


def print_usage(methods: Iterable[PaymentMethod], file: Optional[IO[str]] = None) -> None:
    for line in usage_lines(methods):
        print(line, file=file)
