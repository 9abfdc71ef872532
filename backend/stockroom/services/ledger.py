# backend/stockroom/services/ledger.py

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockroom.core.database import INT_MAX
from stockroom.core.errors import NotFoundError, StorageError, ValidationError
from stockroom.models import Sku, Transaction, TransactionType, TRANSACTION_TYPES
from stockroom.services.filters import TransactionFilter

logger = logging.getLogger(__name__)


def to_row(tx: Transaction, sku: Sku) -> dict:
    return {
        "id": tx.id,
        "sku_id": tx.sku_id,
        "transaction_type": tx.transaction_type,
        "quantity": tx.quantity,
        "reason": tx.reason,
        "notes": tx.notes,
        "created_at": tx.created_at,
        "sku_name": sku.name,
        "sku_category": sku.category,
    }


def parse_type(value) -> TransactionType:
    try:
        return TransactionType(value)
    except ValueError:
        raise ValidationError(
            f"Invalid transaction type. Must be one of: {', '.join(TRANSACTION_TYPES)}"
        ) from None


class TransactionLedger:
    """Append-only stock movements. Each one moves exactly one SKU's quantity."""

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        sku_id: int,
        transaction_type,
        quantity: int,
        reason: Optional[str] = None,
        notes: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> dict:
        tx_type = parse_type(transaction_type)

        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")
        if quantity > INT_MAX:
            raise ValidationError(f"Quantity cannot exceed {INT_MAX}")
        if abs(sku_id) > INT_MAX:
            raise NotFoundError("SKU not found")

        try:
            sku = self.db.scalars(
                select(Sku)
                .where(Sku.id == sku_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            ).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to load SKU %s", sku_id)
            raise StorageError("Failed to create transaction") from e
        if sku is None:
            raise NotFoundError("SKU not found")

        tx = Transaction(
            sku_id=sku.id,
            transaction_type=tx_type.value,
            quantity=quantity,
            reason=reason or None,
            notes=notes or None,
        )
        if created_at is not None:
            tx.created_at = created_at

        # insert + quantity change commit together or not at all; the
        # increment runs in SQL so overlapping records never overwrite each other
        try:
            self.db.add(tx)
            self.db.flush()
            self.db.execute(
                update(Sku)
                .where(Sku.id == sku.id)
                .values(current_quantity=Sku.current_quantity + tx_type.direction * quantity)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to record %s for SKU %s", tx_type.value, sku_id)
            raise StorageError("Failed to create transaction") from e

        self.db.refresh(tx)
        self.db.refresh(sku)

        if sku.current_quantity < 0:
            logger.warning("SKU %s quantity going negative (%s)", sku_id, sku.current_quantity)

        logger.info(
            "Recorded %s of %s for SKU %s, quantity now %s",
            tx_type.value, quantity, sku_id, sku.current_quantity,
        )

        row = to_row(tx, sku)
        row["new_quantity"] = sku.current_quantity
        return row

    def list(self, filters: Optional[TransactionFilter] = None) -> List[dict]:
        filters = filters or TransactionFilter()
        stmt = (
            select(Transaction, Sku)
            .join(Sku, Transaction.sku_id == Sku.id)
            .where(*filters.clauses())
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .limit(filters.bounded_limit())
        )
        return [to_row(tx, sku) for tx, sku in self.db.execute(stmt)]
