"""
Command line for the inventory engine.

Sets up the database, seeds reference data, records transactions and prints
reports.  Every command prints the operation's JSON envelope on stdout;
engine errors print ``{"error": <code>, "message": ...}`` on stderr and exit
with status 1.

    inventory-engine --config inventory.yaml init-db
    inventory-engine seed --category Tools --user alice
    inventory-engine add-product --name Widget --price 10 --stock 5 --category-id 1
    inventory-engine record 1 3 sale 1
    inventory-engine low-stock --threshold 5
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence

from inventory_engine.bootstrap import bootstrap
from inventory_engine.config import get_active_config
from inventory_engine.domain.dtos import OperationResult
from inventory_engine.exceptions import InventoryEngineError
from inventory_engine.services.inventory_service import InventoryService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inventory-engine",
        description="Product inventory, stock ledger and reports.",
    )
    parser.add_argument("--config", help="YAML configuration file")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="Create missing tables")

    seed = commands.add_parser("seed", help="Ensure categories and users exist")
    seed.add_argument("--category", action="append", default=[], dest="categories")
    seed.add_argument("--user", action="append", default=[], dest="users")

    add = commands.add_parser("add-product", help="Create a product")
    add.add_argument("--name", required=True)
    add.add_argument("--description")
    add.add_argument("--price", required=True)
    add.add_argument("--stock", type=int, required=True)
    add.add_argument("--category-id", type=int, required=True)

    listing = commands.add_parser("list", help="List products")
    listing.add_argument("--page", type=int, default=1)
    listing.add_argument("--limit", type=int)
    listing.add_argument("--category", help="Filter by category name")

    record = commands.add_parser("record", help="Record a purchase or sale")
    record.add_argument("product_id", type=int)
    record.add_argument("quantity", type=int)
    record.add_argument("type", choices=["purchase", "sale"])
    record.add_argument("user_id", type=int)

    history = commands.add_parser("history", help="Transactions for a product")
    history.add_argument("product_id", type=int)

    commands.add_parser("value", help="Total inventory value")

    low = commands.add_parser("low-stock", help="Products at or below a threshold")
    low.add_argument("--threshold", type=int)

    return parser


def _dispatch(service: InventoryService, args: argparse.Namespace) -> OperationResult | None:
    if args.command == "init-db":
        return None
    if args.command == "seed":
        return service.load_reference_data(args.categories, args.users)
    if args.command == "add-product":
        return service.create_product(
            name=args.name,
            description=args.description,
            price=args.price,
            stock=args.stock,
            category_id=args.category_id,
        )
    if args.command == "list":
        if args.category:
            return service.list_products_by_category(args.category)
        return service.list_products(page=args.page, limit=args.limit)
    if args.command == "record":
        return service.record_transaction(
            product_id=args.product_id,
            quantity=args.quantity,
            transaction_type=args.type,
            user_id=args.user_id,
        )
    if args.command == "history":
        return service.get_product_history(args.product_id)
    if args.command == "value":
        return service.get_inventory_value()
    if args.command == "low-stock":
        return service.get_low_stock_products(args.threshold)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_active_config(args.config)
    service = bootstrap(config)

    try:
        result = _dispatch(service, args)
    except InventoryEngineError as exc:
        print(json.dumps({"error": exc.code, "message": str(exc)}), file=sys.stderr)
        return 1

    if result is None:
        print(json.dumps({"message": "Tables created"}))
    else:
        print(json.dumps(result.to_dict(), indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
