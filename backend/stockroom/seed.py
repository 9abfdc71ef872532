# backend/stockroom/seed.py
"""
Create tables and load a sample catalog (DEV ONLY).

    stockroom-seed            # only if the skus table is empty
    stockroom-seed --reset    # wipe transactions + skus first
"""

import argparse
from datetime import datetime, timedelta

from sqlalchemy import func, select

from stockroom.core.config import Settings
from stockroom.core.database import Database
from stockroom.models import Sku, Transaction
from stockroom.services.ledger import TransactionLedger
from stockroom.services.registry import SkuRegistry

# name, category, reorder_level, current_quantity, unit_price
SAMPLE_SKUS = [
    ("Ceramic Floor Tile 2x2 White", "Tiles", 50, 120, 45),
    ("Vitrified Tile 2x2 Marble Look", "Tiles", 30, 25, 85),
    ("Wall Tile 1x1 Blue Mosaic", "Tiles", 40, 8, 35),
    ("Outdoor Tile Anti-Skid Grey", "Tiles", 20, 45, 65),
    ("Sunmica Sheet White Glossy 8x4", "Laminates", 25, 60, 450),
    ("Laminate Sheet Wood Grain Oak", "Laminates", 20, 5, 520),
    ("HPL Sheet Solid Black Matte", "Laminates", 15, 30, 680),
    ("Door Handle SS Premium", "Hardware", 30, 85, 250),
    ("Cabinet Hinges Soft Close (Pair)", "Hardware", 50, 12, 120),
    ("Drawer Slide 18 inch", "Hardware", 40, 65, 180),
    ("Door Lock Mortise 3 Lever", "Hardware", 25, 3, 450),
    ("Plywood 8x4 Marine Grade", "Plywood", 10, 22, 2800),
    ("Plywood 8x4 Commercial", "Plywood", 15, 35, 1200),
    ("MDF Board 8x4 18mm", "Plywood", 20, 0, 950),
]

# sku position (1-based), type, quantity, reason, notes, days ago
SAMPLE_TRANSACTIONS = [
    (1, "PURCHASE", 50, "Supplier Delivery", "From Kajaria - Invoice #4521", 9),
    (5, "PURCHASE", 30, "Supplier Delivery", "From Greenlam", 11),
    (2, "DAMAGE", 5, "Broken in Transit", "Cracked tiles - claim filed", 7),
    (8, "SALE", 15, "Customer Order", "Bulk order for new building", 6),
    (4, "SALE", 10, "Customer Order", "Terrace flooring project", 5),
    (1, "SALE", 20, "Customer Order", "Sold to Sharma Contractors", 4),
    (6, "SALE", 2, "Customer Order", "Interior project", 105),
    (7, "SALE", 5, "Customer Order", "Kitchen cabinets", 131),
]


def seed(database: Database, reset: bool = False) -> int:
    database.create_all()

    db = database.session()
    try:
        if reset:
            db.query(Transaction).delete()
            db.query(Sku).delete()
            db.commit()

        if db.scalar(select(func.count(Sku.id))):
            print("Database already has data, skipping sample data")
            return 0

        registry = SkuRegistry(db)
        ledger = TransactionLedger(db)

        skus = [
            registry.create(
                name=name,
                category=category,
                reorder_level=reorder_level,
                current_quantity=qty,
                unit_price=price,
            )
            for name, category, reorder_level, qty, price in SAMPLE_SKUS
        ]
        print(f"Inserted {len(skus)} sample SKUs")

        now = datetime.utcnow()
        for pos, tx_type, qty, reason, notes, days_ago in SAMPLE_TRANSACTIONS:
            ledger.record(
                sku_id=skus[pos - 1].id,
                transaction_type=tx_type,
                quantity=qty,
                reason=reason,
                notes=notes,
                created_at=now - timedelta(days=days_ago),
            )
        print(f"Inserted {len(SAMPLE_TRANSACTIONS)} sample transactions")

        return len(skus)
    finally:
        db.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed the inventory database with sample data")
    parser.add_argument("--reset", action="store_true", help="delete existing SKUs and transactions first")
    parser.add_argument("--database-url", help="override DATABASE_URL")
    args = parser.parse_args(argv)

    settings = Settings()
    database = Database(args.database_url or settings.DATABASE_URL)
    try:
        seed(database, reset=args.reset)
    finally:
        database.dispose()

    print("✅ Database seeded")


if __name__ == "__main__":
    main()
