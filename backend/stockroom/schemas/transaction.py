# backend/stockroom/schemas/transaction.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from stockroom.core.database import INT_MAX
from stockroom.schemas.common import Envelope, MessageEnvelope


class Transaction(BaseModel):
    id: int
    sku_id: int
    transaction_type: str
    quantity: int
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    # joined from skus for display
    sku_name: str
    sku_category: str


class RecordedTransaction(Transaction):
    new_quantity: int


class TransactionCreate(BaseModel):
    sku_id: int = Field(..., ge=1, le=INT_MAX)
    # checked by the ledger so the error lists the valid types
    transaction_type: str
    # lower bound checked by the ledger
    quantity: int = Field(..., le=INT_MAX)
    reason: Optional[str] = None
    notes: Optional[str] = None


class TransactionListResponse(Envelope[List[Transaction]]):
    count: int


class TransactionCreatedResponse(MessageEnvelope[RecordedTransaction]):
    pass
