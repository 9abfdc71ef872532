# backend/stockroom/services/registry.py

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockroom.core.database import INT_MAX
from stockroom.core.errors import ConflictError, NotFoundError, StorageError, ValidationError
from stockroom.models import Sku, Transaction
from stockroom.services.filters import SkuFilter

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "category", "reorder_level", "unit_price")


def _clean_text(value: Optional[str], field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} must not be empty")
    return cleaned


def _check_non_negative(value, field: str):
    if value is not None and value < 0:
        raise ValidationError(f"{field} cannot be negative")


def _check_int_range(value, field: str):
    if value is not None and abs(value) > INT_MAX:
        raise ValidationError(f"{field} is out of range")


class SkuRegistry:
    """Catalog of SKUs. Quantity is only ever moved by the ledger."""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        name: str,
        category: str,
        reorder_level: int = 10,
        current_quantity: int = 0,
        unit_price: float = 0.0,
    ) -> Sku:
        if not (name or "").strip() or not (category or "").strip():
            raise ValidationError("Name and category required")
        _check_non_negative(reorder_level, "reorder_level")
        _check_non_negative(unit_price, "unit_price")
        _check_int_range(reorder_level, "reorder_level")
        _check_int_range(current_quantity, "current_quantity")

        sku = Sku(
            name=name.strip(),
            category=category.strip(),
            reorder_level=reorder_level,
            current_quantity=current_quantity,
            unit_price=unit_price,
        )
        self.db.add(sku)
        self._commit("Failed to create SKU")
        self.db.refresh(sku)

        logger.info("Created SKU %s (%s / %s)", sku.id, sku.name, sku.category)
        return sku

    def get(self, sku_id: int) -> Sku:
        # ids outside the column range cannot exist
        sku = self.db.get(Sku, sku_id) if abs(sku_id) <= INT_MAX else None
        if sku is None:
            raise NotFoundError("SKU not found")
        return sku

    def list(self, filters: Optional[SkuFilter] = None) -> List[Sku]:
        filters = filters or SkuFilter()
        stmt = select(Sku).where(*filters.clauses()).order_by(Sku.name, Sku.id)
        return list(self.db.scalars(stmt))

    def list_categories(self) -> List[str]:
        stmt = select(Sku.category).distinct().order_by(Sku.category)
        return list(self.db.scalars(stmt))

    def update(self, sku_id: int, changes: dict) -> Sku:
        sku = self.get(sku_id)

        fields = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS and v is not None}
        if not fields:
            raise ValidationError("No fields to update")

        if "name" in fields:
            fields["name"] = _clean_text(fields["name"], "name")
        if "category" in fields:
            fields["category"] = _clean_text(fields["category"], "category")
        _check_non_negative(fields.get("reorder_level"), "reorder_level")
        _check_non_negative(fields.get("unit_price"), "unit_price")
        _check_int_range(fields.get("reorder_level"), "reorder_level")

        for k, v in fields.items():
            setattr(sku, k, v)

        self._commit("Failed to update SKU")
        self.db.refresh(sku)

        logger.info("Updated SKU %s: %s", sku.id, ", ".join(sorted(fields)))
        return sku

    def delete(self, sku_id: int):
        sku = self.get(sku_id)

        tx_count = self.db.scalar(
            select(func.count(Transaction.id)).where(Transaction.sku_id == sku_id)
        )
        if tx_count:
            raise ConflictError("Cannot delete SKU with transactions")

        self.db.delete(sku)
        self._commit("Failed to delete SKU")
        logger.info("Deleted SKU %s", sku_id)

    def _commit(self, message: str):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(message)
            raise StorageError(message) from e
