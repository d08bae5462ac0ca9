"""Shipment API router."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.session import get_db
from src.modules.auth.dependencies import AuthenticatedUser, get_current_user
from src.modules.order.schemas import OrderCreate, OrderResponse
from src.modules.order.service import OrderService
from src.modules.shipment.schemas import (
    ShipmentCreate,
    ShipmentDetailResponse,
    ShipmentListResponse,
    ShipmentResponse,
    ShipmentStatusUpdate,
)
from src.modules.shipment.service import ShipmentService

router = APIRouter(prefix="/shipments", tags=["shipments"])


@router.get("/", response_model=ShipmentListResponse)
async def list_shipments(
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List all shipments, newest first."""
    svc = ShipmentService(db)
    items = await svc.list_shipments()
    return ShipmentListResponse(
        items=[ShipmentResponse.model_validate(s) for s in items],
        total=len(items),
    )


@router.post("/", response_model=ShipmentResponse, status_code=201)
async def create_shipment(
    body: ShipmentCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = ShipmentService(db)
    shipment = await svc.create_shipment(body.shipment_number, notes=body.notes)
    return ShipmentResponse.model_validate(shipment)


@router.get("/{shipment_id}", response_model=ShipmentDetailResponse)
async def get_shipment(
    shipment_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a shipment with its company and Amazon orders."""
    svc = ShipmentService(db)
    shipment = await svc.get_shipment_with_orders(shipment_id)
    return ShipmentDetailResponse.from_shipment(shipment)


@router.post("/{shipment_id}/status", response_model=ShipmentDetailResponse)
async def advance_shipment_status(
    shipment_id: uuid.UUID,
    body: ShipmentStatusUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Advance the shipment to its next status."""
    svc = ShipmentService(db)
    shipment = await svc.advance_status(shipment_id, body.status)
    return ShipmentDetailResponse.from_shipment(shipment)


@router.post("/{shipment_id}/orders", response_model=OrderResponse, status_code=201)
async def add_order(
    shipment_id: uuid.UUID,
    body: OrderCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Add a product line to the shipment."""
    svc = OrderService(db)
    order = await svc.add_order(
        shipment_id,
        sku=body.sku,
        model_number=body.model_number,
        product_name=body.product_name,
        quantity=body.quantity,
        destination_type=body.destination_type,
        company_id=body.company_id,
        notes=body.notes,
    )
    return OrderResponse.model_validate(order)
