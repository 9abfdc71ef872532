from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship
from datetime import datetime
from stockroom.core.database import Base


class Sku(Base):
    __tablename__ = "skus"

    __table_args__ = (
        # SAFETY CONSTRAINTS
        # no check on current_quantity: sales may drive it below zero
        CheckConstraint("reorder_level >= 0", name="ck_reorder_level_non_negative"),
        CheckConstraint("unit_price >= 0", name="ck_unit_price_non_negative"),

        # PERFORMANCE INDEXES
        Index("ix_skus_category", "category"),
    )

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    category = Column(String, nullable=False)

    reorder_level = Column(Integer, nullable=False, default=10)
    current_quantity = Column(Integer, nullable=False, default=0)

    unit_price = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    transactions = relationship("Transaction", back_populates="sku", passive_deletes=True)

    @property
    def stock_value(self) -> float:
        return float(self.current_quantity or 0) * float(self.unit_price or 0)
