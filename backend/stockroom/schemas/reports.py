# backend/stockroom/schemas/reports.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from stockroom.schemas.common import Envelope
from stockroom.schemas.sku import Sku
from stockroom.schemas.transaction import Transaction


class DeadStockItem(Sku):
    stock_value: float
    last_sale_date: Optional[datetime] = None
    days_since_last_sale: Optional[int] = None


class DeadStockSummary(BaseModel):
    count: int
    total_value: int


class DeadStockResponse(Envelope[List[DeadStockItem]]):
    summary: DeadStockSummary


class ReorderItem(Sku):
    shortage: int
    suggested_order_qty: int


class ReorderSummary(BaseModel):
    count: int
    out_of_stock: int


class ReorderResponse(Envelope[List[ReorderItem]]):
    summary: ReorderSummary


class TopSellingItem(BaseModel):
    id: int
    name: str
    category: str
    current_quantity: int
    unit_price: float

    sale_count: int
    total_sold: int
    revenue: float


class SlowMovingItem(BaseModel):
    id: int
    name: str
    category: str
    current_quantity: int
    unit_price: float

    stock_value: float
    total_movement: int


class TopSellingResponse(Envelope[List[TopSellingItem]]):
    period: str


class SlowMovingResponse(Envelope[List[SlowMovingItem]]):
    period: str


class CategoryBreakdown(BaseModel):
    category: str
    sku_count: int
    total_quantity: int
    total_value: float


class TodayStat(BaseModel):
    transaction_type: str
    count: int
    total_quantity: int


class DashboardSummary(BaseModel):
    total_skus: int
    stock_value: int
    reorder_count: int
    out_of_stock_count: int
    dead_stock_count: int
    dead_stock_value: int

    recent_transactions: List[Transaction]
    category_breakdown: List[CategoryBreakdown]

    # best-effort: empty when nothing moved today
    today_stats: List[TodayStat] = []
