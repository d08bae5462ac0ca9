"""Pydantic v2 schemas for shipment endpoints."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import DestinationType, ShipmentStatus
from src.models.shipment import Shipment
from src.modules.order.schemas import OrderResponse
from src.modules.shipment.constants import next_shipment_status

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ShipmentCreate(BaseModel):
    shipment_number: str = Field(..., min_length=1, max_length=100)
    notes: str | None = None


class ShipmentStatusUpdate(BaseModel):
    status: ShipmentStatus


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ShipmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    shipment_number: str
    status: ShipmentStatus
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class ShipmentListResponse(BaseModel):
    items: list[ShipmentResponse]
    total: int


class ShipmentDetailResponse(ShipmentResponse):
    """A shipment with its orders split by destination."""

    next_status: ShipmentStatus | None = None
    company_orders: list[OrderResponse] = Field(default_factory=list)
    amazon_orders: list[OrderResponse] = Field(default_factory=list)

    @classmethod
    def from_shipment(cls, shipment: Shipment) -> ShipmentDetailResponse:
        orders = [OrderResponse.model_validate(o) for o in shipment.orders]
        return cls(
            id=shipment.id,
            shipment_number=shipment.shipment_number,
            status=shipment.status,
            notes=shipment.notes,
            created_at=shipment.created_at,
            updated_at=shipment.updated_at,
            next_status=next_shipment_status(shipment.status),
            company_orders=[o for o in orders if o.destination_type == DestinationType.COMPANY],
            amazon_orders=[o for o in orders if o.destination_type == DestinationType.AMAZON],
        )
