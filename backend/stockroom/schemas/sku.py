# backend/stockroom/schemas/sku.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from stockroom.core.database import INT_MAX


class Sku(BaseModel):
    id: int
    name: str
    category: str
    reorder_level: int
    current_quantity: int
    unit_price: float
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SkuCreate(BaseModel):
    name: str
    category: str
    reorder_level: int = Field(10, ge=0, le=INT_MAX)
    current_quantity: int = Field(0, ge=-INT_MAX, le=INT_MAX)
    unit_price: float = Field(0.0, ge=0)


class SkuUpdate(BaseModel):
    # current_quantity is deliberately absent: only transactions move stock
    name: Optional[str] = None
    category: Optional[str] = None
    reorder_level: Optional[int] = Field(None, ge=0, le=INT_MAX)
    unit_price: Optional[float] = Field(None, ge=0)

    def changes(self) -> dict:
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}
