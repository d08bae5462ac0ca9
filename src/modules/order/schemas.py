"""Pydantic v2 schemas for order endpoints."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from src.models.enums import AmazonOrderStatus, DestinationType, OrderStatus

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class OrderCreate(BaseModel):
    sku: str = Field(..., max_length=100)
    model_number: str | None = Field(None, max_length=100)
    product_name: str = Field(..., max_length=255)
    # Form input arrives as text; parsed and range-checked by the service.
    # StrictInt keeps JSON booleans from being coerced to 1.
    quantity: StrictInt | str
    destination_type: DestinationType
    company_id: uuid.UUID | None = None
    notes: str | None = None


class MarkDeliveredRequest(BaseModel):
    notes: str | None = None


class InventoryUpdate(BaseModel):
    """Amazon stock edit — only Amazon manual statuses are representable."""

    status: AmazonOrderStatus
    notes: str | None = None


class NotesUpdate(BaseModel):
    notes: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    shipment_id: uuid.UUID
    shipment_number: str | None = None
    sku: str
    model_number: str | None = None
    product_name: str
    quantity: int
    destination_type: DestinationType
    company_id: uuid.UUID | None = None
    company_name: str | None = None
    status: OrderStatus
    notes: str | None = None
    created_at: datetime


class OrderListResponse(BaseModel):
    items: list[OrderResponse]
    total: int
