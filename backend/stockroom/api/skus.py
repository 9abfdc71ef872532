# backend/stockroom/api/skus.py

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from stockroom.api.deps import get_registry
from stockroom.schemas.common import Envelope, MessageEnvelope
from stockroom.schemas.sku import Sku, SkuCreate, SkuUpdate
from stockroom.services.filters import SkuFilter
from stockroom.services.registry import SkuRegistry

router = APIRouter()


@router.get("", response_model=Envelope[List[Sku]])
def list_skus(
    category: Optional[str] = None,
    search: Optional[str] = None,
    low_stock: bool = False,
    registry: SkuRegistry = Depends(get_registry),
):
    filters = SkuFilter(category=category, name_contains=search, low_stock_only=low_stock)
    return {"data": registry.list(filters)}


# must stay above /{sku_id}
@router.get("/categories", response_model=Envelope[List[str]])
def list_categories(registry: SkuRegistry = Depends(get_registry)):
    return {"data": registry.list_categories()}


@router.get("/{sku_id}", response_model=Envelope[Sku])
def get_sku(sku_id: int, registry: SkuRegistry = Depends(get_registry)):
    return {"data": registry.get(sku_id)}


@router.post("", response_model=Envelope[Sku], status_code=status.HTTP_201_CREATED)
def create_sku(payload: SkuCreate, registry: SkuRegistry = Depends(get_registry)):
    return {"data": registry.create(**payload.model_dump())}


@router.put("/{sku_id}", response_model=Envelope[Sku])
def update_sku(
    sku_id: int,
    payload: SkuUpdate,
    registry: SkuRegistry = Depends(get_registry),
):
    return {"data": registry.update(sku_id, payload.changes())}


@router.delete("/{sku_id}", response_model=MessageEnvelope[dict])
def delete_sku(sku_id: int, registry: SkuRegistry = Depends(get_registry)):
    registry.delete(sku_id)
    return {"data": {"id": sku_id}, "message": "SKU deleted"}
