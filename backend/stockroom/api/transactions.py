# backend/stockroom/api/transactions.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from stockroom.api.deps import get_ledger
from stockroom.core.database import INT_MAX
from stockroom.schemas.transaction import (
    TransactionCreate,
    TransactionCreatedResponse,
    TransactionListResponse,
)
from stockroom.services.filters import DEFAULT_TRANSACTION_LIMIT, TransactionFilter
from stockroom.services.ledger import TransactionLedger

router = APIRouter()


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    sku_id: Optional[int] = Query(None, ge=1, le=INT_MAX),
    type: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    limit: int = Query(DEFAULT_TRANSACTION_LIMIT, ge=1),
    ledger: TransactionLedger = Depends(get_ledger),
):
    filters = TransactionFilter(
        sku_id=sku_id,
        transaction_type=type,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )
    rows = ledger.list(filters)
    return {"data": rows, "count": len(rows)}


@router.post("", response_model=TransactionCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: TransactionCreate,
    ledger: TransactionLedger = Depends(get_ledger),
):
    row = ledger.record(
        sku_id=payload.sku_id,
        transaction_type=payload.transaction_type,
        quantity=payload.quantity,
        reason=payload.reason,
        notes=payload.notes,
    )
    return {
        "data": row,
        "message": f"{row['transaction_type']} recorded successfully",
    }
