# backend/stockroom/services/reports.py
"""
Read-only inventory reports.

Date windows are computed here (``now - timedelta(days=N)``) and bound as
parameters, so the same statements run on SQLite and PostgreSQL.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from stockroom.models import Sku, Transaction, TransactionType
from stockroom.services.filters import TransactionFilter
from stockroom.services.ledger import TransactionLedger
from stockroom.services.reorder import compute_reorder_fields, round_currency

DEAD_STOCK_DAYS = 90
MOVEMENT_DAYS = 30
REPORT_LIMIT = 10
RECENT_TRANSACTIONS = 10


def sku_row(s: Sku) -> dict:
    return {
        "id": s.id,
        "name": s.name,
        "category": s.category,
        "reorder_level": s.reorder_level,
        "current_quantity": s.current_quantity,
        "unit_price": float(s.unit_price or 0),
        "created_at": s.created_at,
    }


class ReportingEngine:
    def __init__(self, db: Session, now: Optional[datetime] = None):
        self.db = db
        self.now = now or datetime.utcnow()

    def _since(self, days: int) -> datetime:
        return self.now - timedelta(days=days)

    # ---------- DEAD STOCK ----------

    def dead_stock(self, window_days: int = DEAD_STOCK_DAYS) -> List[dict]:
        """In-stock SKUs without a sale in the trailing window.

        Never-sold SKUs come first, then the longest since their last sale.
        """
        recent_sellers = select(Transaction.sku_id).where(
            Transaction.transaction_type == TransactionType.SALE.value,
            Transaction.created_at >= self._since(window_days),
        )
        last_sale = (
            select(func.max(Transaction.created_at))
            .where(
                Transaction.sku_id == Sku.id,
                Transaction.transaction_type == TransactionType.SALE.value,
            )
            .correlate(Sku)
            .scalar_subquery()
        )

        stmt = (
            select(Sku, last_sale.label("last_sale_date"))
            .where(Sku.current_quantity > 0, Sku.id.not_in(recent_sellers))
            .order_by(Sku.name, Sku.id)
        )

        items = []
        for s, last_sale_date in self.db.execute(stmt):
            row = sku_row(s)
            row["stock_value"] = s.stock_value
            row["last_sale_date"] = last_sale_date
            row["days_since_last_sale"] = (
                (self.now - last_sale_date).days if last_sale_date is not None else None
            )
            items.append(row)

        items.sort(
            key=lambda r: (
                r["days_since_last_sale"] is not None,
                -(r["days_since_last_sale"] or 0),
            )
        )
        return items

    # ---------- REORDER ----------

    def reorder_list(self) -> List[dict]:
        shortage = Sku.reorder_level - Sku.current_quantity
        stmt = (
            select(Sku)
            .where(Sku.current_quantity <= Sku.reorder_level)
            .order_by(
                case((Sku.current_quantity == 0, 0), else_=1),
                shortage.desc(),
                Sku.name,
            )
        )

        items = []
        for s in self.db.scalars(stmt):
            row = sku_row(s)
            row.update(compute_reorder_fields(s))
            items.append(row)
        return items

    # ---------- MOVEMENT ----------

    def top_selling(self, window_days: int = MOVEMENT_DAYS, limit: int = REPORT_LIMIT) -> List[dict]:
        sale_count = func.count(Transaction.id).label("sale_count")
        total_sold = func.sum(Transaction.quantity).label("total_sold")
        revenue = func.sum(Transaction.quantity * Sku.unit_price).label("revenue")

        stmt = (
            select(
                Sku.id,
                Sku.name,
                Sku.category,
                Sku.current_quantity,
                Sku.unit_price,
                sale_count,
                total_sold,
                revenue,
            )
            .join(Transaction, Transaction.sku_id == Sku.id)
            .where(
                Transaction.transaction_type == TransactionType.SALE.value,
                Transaction.created_at >= self._since(window_days),
            )
            .group_by(Sku.id, Sku.name, Sku.category, Sku.current_quantity, Sku.unit_price)
            .order_by(total_sold.desc(), Sku.name)
            .limit(limit)
        )

        return [
            {
                "id": r.id,
                "name": r.name,
                "category": r.category,
                "current_quantity": r.current_quantity,
                "unit_price": float(r.unit_price or 0),
                "sale_count": int(r.sale_count),
                "total_sold": int(r.total_sold or 0),
                "revenue": float(r.revenue or 0),
            }
            for r in self.db.execute(stmt)
        ]

    def slow_moving(self, window_days: int = MOVEMENT_DAYS, limit: int = REPORT_LIMIT) -> List[dict]:
        movement = (
            select(func.coalesce(func.sum(Transaction.quantity), 0))
            .where(
                Transaction.sku_id == Sku.id,
                Transaction.created_at >= self._since(window_days),
            )
            .correlate(Sku)
            .scalar_subquery()
            .label("total_movement")
        )
        stock_value = (Sku.current_quantity * Sku.unit_price).label("stock_value")

        stmt = (
            select(Sku, movement, stock_value)
            .where(Sku.current_quantity > 0)
            .order_by(movement.asc(), stock_value.desc(), Sku.name)
            .limit(limit)
        )

        return [
            {
                "id": s.id,
                "name": s.name,
                "category": s.category,
                "current_quantity": s.current_quantity,
                "unit_price": float(s.unit_price or 0),
                "stock_value": s.stock_value,
                "total_movement": int(total_movement or 0),
            }
            for s, total_movement, _ in self.db.execute(stmt)
        ]

    # ---------- DASHBOARD ----------

    def category_breakdown(self) -> List[dict]:
        total_value = func.coalesce(func.sum(Sku.current_quantity * Sku.unit_price), 0).label("total_value")
        stmt = (
            select(
                Sku.category,
                func.count(Sku.id).label("sku_count"),
                func.coalesce(func.sum(Sku.current_quantity), 0).label("total_quantity"),
                total_value,
            )
            .group_by(Sku.category)
            .order_by(total_value.desc(), Sku.category)
        )
        return [
            {
                "category": r.category,
                "sku_count": int(r.sku_count),
                "total_quantity": int(r.total_quantity),
                "total_value": float(r.total_value),
            }
            for r in self.db.execute(stmt)
        ]

    def today_stats(self) -> List[dict]:
        start = datetime.combine(self.now.date(), datetime.min.time())
        stmt = (
            select(
                Transaction.transaction_type,
                func.count(Transaction.id).label("count"),
                func.sum(Transaction.quantity).label("total_quantity"),
            )
            .where(
                Transaction.created_at >= start,
                Transaction.created_at < start + timedelta(days=1),
            )
            .group_by(Transaction.transaction_type)
            .order_by(Transaction.transaction_type)
        )
        return [
            {
                "transaction_type": r.transaction_type,
                "count": int(r.count),
                "total_quantity": int(r.total_quantity or 0),
            }
            for r in self.db.execute(stmt)
        ]

    def dashboard_summary(self, dead_stock_days: int = DEAD_STOCK_DAYS) -> dict:
        total_skus = self.db.scalar(select(func.count(Sku.id))) or 0
        stock_value = self.db.scalar(
            select(func.coalesce(func.sum(Sku.current_quantity * Sku.unit_price), 0))
        )
        reorder_count = self.db.scalar(
            select(func.count(Sku.id)).where(Sku.current_quantity <= Sku.reorder_level)
        ) or 0
        out_of_stock = self.db.scalar(
            select(func.count(Sku.id)).where(Sku.current_quantity == 0)
        ) or 0

        dead = self.dead_stock(dead_stock_days)

        recent = TransactionLedger(self.db).list(TransactionFilter(limit=RECENT_TRANSACTIONS))

        return {
            "total_skus": int(total_skus),
            "stock_value": round_currency(stock_value),
            "reorder_count": int(reorder_count),
            "out_of_stock_count": int(out_of_stock),
            "dead_stock_count": len(dead),
            "dead_stock_value": round_currency(sum(r["stock_value"] for r in dead)),
            "recent_transactions": recent,
            "category_breakdown": self.category_breakdown(),
            "today_stats": self.today_stats(),
        }
