# backend/stockroom/services/filters.py
"""
Structured list filters.

Each filter turns its populated fields into SQLAlchemy expressions; the
services AND them together. User input only ever reaches the database as a
bound parameter.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy import func

from stockroom.models import Sku, Transaction

DEFAULT_TRANSACTION_LIMIT = 100
MAX_TRANSACTION_LIMIT = 1000


@dataclass(frozen=True)
class SkuFilter:
    category: Optional[str] = None
    name_contains: Optional[str] = None
    low_stock_only: bool = False

    def clauses(self) -> list:
        out = []
        if self.category:
            out.append(Sku.category == self.category)
        if self.name_contains:
            # case-insensitive; % and _ in the search term match literally
            out.append(func.lower(Sku.name).contains(self.name_contains.lower(), autoescape=True))
        if self.low_stock_only:
            out.append(Sku.current_quantity <= Sku.reorder_level)
        return out


@dataclass(frozen=True)
class TransactionFilter:
    sku_id: Optional[int] = None
    transaction_type: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    limit: int = DEFAULT_TRANSACTION_LIMIT

    def clauses(self) -> list:
        out = []
        if self.sku_id is not None:
            out.append(Transaction.sku_id == self.sku_id)
        if self.transaction_type:
            out.append(Transaction.transaction_type == self.transaction_type.upper())
        if self.start_date is not None:
            out.append(Transaction.created_at >= datetime.combine(self.start_date, time.min))
        if self.end_date is not None:
            # end date is inclusive: everything before the following midnight
            out.append(Transaction.created_at < datetime.combine(self.end_date + timedelta(days=1), time.min))
        return out

    def bounded_limit(self) -> int:
        return max(1, min(self.limit, MAX_TRANSACTION_LIMIT))
