# backend/stockroom/schemas/common.py

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Every API payload is wrapped as {success, data}.

    Errors are rendered by the exception handlers in main.py as
    {success: false, error}.
    """

    success: bool = True
    data: T


class MessageEnvelope(Envelope[T], Generic[T]):
    message: str


class HealthResponse(BaseModel):
    status: str
    message: str
    db_connected: bool
    timestamp: datetime
