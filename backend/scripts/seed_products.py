#!/usr/bin/env python3
"""
Seed demo products for a seller account from a JSON file.

Each entry needs name/price/weight; description and stock are optional.
SKUs are issued by the service, so running the script twice seeds twice.

Usage:
    python scripts/seed_products.py --file catalogue.json --user-id 1
"""
import argparse
import json
import logging
import os
import sys
from decimal import Decimal, InvalidOperation

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.db import SessionLocal, init_db
from app.errors import CatalogError
from app.schemas.product_schema import ProductInfoIn
from app.services.product_service import ProductService
from app.utils.validator import validate_product_info

logger = logging.getLogger("seed_products")

DEMO_PRODUCTS = [
    {"name": "Arabica Coffee 200g", "price": "7.50", "weight": 0.2, "description": "Medium roast beans", "stock": 40},
    {"name": "Green Tea 100g", "price": "4.25", "weight": 0.1, "description": "Loose leaf sencha", "stock": 25},
    {"name": "Ceramic Mug", "price": "9.99", "weight": 0.35, "description": "Dishwasher safe, 350ml", "stock": 12},
]


def _normalize_entry(entry):
    """Return a ProductInfoIn built from a loosely shaped JSON entry."""
    name = entry.get("name") or entry.get("title") or ""
    try:
        price = Decimal(str(entry.get("price", "0")))
    except InvalidOperation:
        price = Decimal("0")
    return ProductInfoIn(
        name=name,
        price=price,
        weight=float(entry.get("weight") or 0),
        description=entry.get("description") or "",
        stock=int(entry.get("stock") or 0),
    )


def load_entries(path):
    if not path:
        return DEMO_PRODUCTS
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    # accept either a bare list or {"products": [...]}
    if isinstance(data, dict):
        data = data.get("products") or data.get("items") or []
    return data


def seed(entries, user_id):
    db = SessionLocal()
    created, skipped = 0, 0
    try:
        svc = ProductService(db)
        for entry in entries:
            info = _normalize_entry(entry)
            try:
                validate_product_info(info)
                product = svc.create_product(info, user_id=user_id)
            except CatalogError as e:
                logger.warning("Skipping %r: %s", entry, e.message)
                skipped += 1
                continue
            logger.info("Seeded %s -> %s", product.name, product.sku)
            created += 1
    finally:
        db.close()
    return created, skipped


def main():
    parser = argparse.ArgumentParser(description="Seed demo products.")
    parser.add_argument("--file", default=None, help="JSON file with product entries")
    parser.add_argument("--user-id", type=int, default=1, help="owning seller account id")
    parser.add_argument("--reset", action="store_true", help="drop and recreate tables first")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    init_db(reset=args.reset)
    created, skipped = seed(load_entries(args.file), args.user_id)
    logger.info("Done: %d created, %d skipped", created, skipped)


if __name__ == "__main__":
    main()
