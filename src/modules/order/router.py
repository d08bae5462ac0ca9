"""Order API router — company deliveries and Amazon inventory."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.session import get_db
from src.models.enums import AmazonOrderStatus
from src.modules.auth.dependencies import AuthenticatedUser, get_current_user
from src.modules.order.schemas import (
    InventoryUpdate,
    MarkDeliveredRequest,
    NotesUpdate,
    OrderListResponse,
    OrderResponse,
)
from src.modules.order.service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


@router.get("/company", response_model=OrderListResponse)
async def list_company_orders(
    company_id: uuid.UUID | None = Query(None),
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List orders bound for companies, optionally for one company."""
    svc = OrderService(db)
    items = await svc.list_company_orders(company_id=company_id)
    return OrderListResponse(
        items=[OrderResponse.model_validate(o) for o in items],
        total=len(items),
    )


@router.get("/amazon", response_model=OrderListResponse)
async def list_amazon_orders(
    status: AmazonOrderStatus | None = Query(None),
    search: str | None = Query(None, max_length=100),
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List Amazon stock, filtered by status and SKU/product-name search."""
    svc = OrderService(db)
    items = await svc.list_amazon_orders(status=status, search=search)
    return OrderListResponse(
        items=[OrderResponse.model_validate(o) for o in items],
        total=len(items),
    )


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = OrderService(db)
    order = await svc.get_order(order_id)
    return OrderResponse.model_validate(order)


# ---------------------------------------------------------------------------
# Status changes
# ---------------------------------------------------------------------------


@router.post("/{order_id}/deliver", response_model=OrderResponse)
async def mark_delivered(
    order_id: uuid.UUID,
    body: MarkDeliveredRequest | None = None,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Mark a company order as delivered."""
    svc = OrderService(db)
    order = await svc.mark_delivered(order_id, notes=body.notes if body else None)
    return OrderResponse.model_validate(order)


@router.put("/{order_id}/inventory", response_model=OrderResponse)
async def update_inventory_item(
    order_id: uuid.UUID,
    body: InventoryUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Set an Amazon order's status and notes."""
    svc = OrderService(db)
    order = await svc.update_inventory_item(order_id, status=body.status, notes=body.notes)
    return OrderResponse.model_validate(order)


@router.patch("/{order_id}/notes", response_model=OrderResponse)
async def update_notes(
    order_id: uuid.UUID,
    body: NotesUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = OrderService(db)
    order = await svc.update_notes(order_id, notes=body.notes)
    return OrderResponse.model_validate(order)
