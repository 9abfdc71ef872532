import enum
from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship

from stockroom.core.database import Base


class TransactionType(str, enum.Enum):
    PURCHASE = "PURCHASE"
    SALE = "SALE"
    DAMAGE = "DAMAGE"
    RETURN = "RETURN"

    @property
    def direction(self) -> int:
        """+1 for stock coming in, -1 for stock going out."""
        if self in (TransactionType.PURCHASE, TransactionType.RETURN):
            return 1
        return -1


TRANSACTION_TYPES = [t.value for t in TransactionType]


class Transaction(Base):
    __tablename__ = "transactions"

    __table_args__ = (
        CheckConstraint(
            "transaction_type IN ('PURCHASE', 'SALE', 'DAMAGE', 'RETURN')",
            name="ck_transaction_type",
        ),
        CheckConstraint("quantity > 0", name="ck_transaction_quantity_positive"),
        Index("ix_transactions_created_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)

    sku_id = Column(Integer, ForeignKey("skus.id"), nullable=False, index=True)
    transaction_type = Column(String, nullable=False)  # TransactionType value
    quantity = Column(Integer, nullable=False)

    reason = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    sku = relationship("Sku", back_populates="transactions")
