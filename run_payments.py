from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from payment_optimizer.loader import LoadError, load_orders, load_payment_methods
from payment_optimizer.models import InsufficientFundsError
from payment_optimizer.optimizer import InputError, PaymentOptimizer
from payment_optimizer.pricing import POINTS_ID
from payment_optimizer.report import print_usage


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Assign payment methods to orders and print how much each method was charged.")
    p.add_argument("orders", help="Path to orders JSON file")
    p.add_argument("payment_methods", help="Path to payment methods JSON file")
    p.add_argument("--points-id", type=str, default=POINTS_ID, help="Id of the loyalty points account")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every phase and charge to stderr")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    # логи только в stderr, stdout остаётся под результат
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format="%(message)s")

    try:
        orders = load_orders(args.orders)
        methods = load_payment_methods(args.payment_methods)
    except LoadError as e:
        print(f"File loading error: {e}", file=sys.stderr)
        return 1

    try:
        PaymentOptimizer(points_id=args.points_id).optimize(orders, methods)
    except (InputError, InsufficientFundsError) as e:
        print(f"Processing error: {e}", file=sys.stderr)
        return 1

    print_usage(methods)
    return 0


if __name__ == "__main__":
    sys.exit(main())
