"""Shipment service — creation, reads, and the status lifecycle with its stock cascade."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from src.exceptions import (
    BusinessRuleException,
    ConflictException,
    NotFoundException,
    ValidationException,
)
from src.models.enums import OrderStatus, ShipmentStatus
from src.models.order import Order
from src.models.shipment import Shipment
from src.modules.order.constants import amazon_orders_to_stock
from src.modules.shipment.constants import resolve_shipment_transition

logger = logging.getLogger(__name__)


class ShipmentService:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_shipment(
        self, shipment_number: str, notes: str | None = None
    ) -> Shipment:
        """Register a new shipment in ``open`` status."""
        shipment_number = (shipment_number or "").strip()
        if not shipment_number:
            raise ValidationException(
                "Shipment number is required",
                details=[{"field": "shipment_number", "message": "Shipment number is required"}],
            )

        existing = await self.db.execute(
            select(Shipment.id).where(Shipment.shipment_number == shipment_number)
        )
        if existing.scalar_one_or_none() is not None:
            raise ConflictException(f"Shipment '{shipment_number}' already exists")

        shipment = Shipment(
            shipment_number=shipment_number,
            status=ShipmentStatus.OPEN,
            notes=notes or None,
        )
        self.db.add(shipment)
        await self.db.flush()
        await self.db.refresh(shipment)

        logger.info("Created shipment %s (%s)", shipment.id, shipment_number)
        return shipment

    # ------------------------------------------------------------------
    # Get / List
    # ------------------------------------------------------------------

    async def list_shipments(self) -> list[Shipment]:
        """All shipments, newest first."""
        result = await self.db.execute(
            select(Shipment).order_by(Shipment.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_shipment_with_orders(self, shipment_id: uuid.UUID) -> Shipment:
        """Get a shipment with its orders and each order's company."""
        result = await self.db.execute(
            select(Shipment)
            .options(joinedload(Shipment.orders).joinedload(Order.company))
            .where(Shipment.id == shipment_id)
            .execution_options(populate_existing=True)
        )
        shipment = result.unique().scalar_one_or_none()
        if shipment is None:
            raise NotFoundException(f"Shipment {shipment_id} not found")
        return shipment

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    async def _lock_shipment(self, shipment_id: uuid.UUID) -> None:
        # Inserting an order takes a key-share lock on its shipment row,
        # which conflicts with FOR UPDATE until this transaction ends
        result = await self.db.execute(
            select(Shipment.id).where(Shipment.id == shipment_id).with_for_update()
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundException(f"Shipment {shipment_id} not found")

    async def advance_status(
        self, shipment_id: uuid.UUID, target_status: ShipmentStatus
    ) -> Shipment:
        """Move a shipment one step along open -> ordered -> received.

        Receiving a shipment puts its pending Amazon orders in stock. Both
        writes share the caller's transaction, so they commit or fail together.
        The shipment row is locked before its orders are read, so an order
        inserted concurrently is either seen by the cascade or waits for it.
        """
        await self._lock_shipment(shipment_id)
        shipment = await self.get_shipment_with_orders(shipment_id)

        outcome = resolve_shipment_transition(shipment.status, target_status)
        if not outcome.allowed:
            raise BusinessRuleException(
                f"Cannot update shipment {shipment.shipment_number}: {outcome.reason}"
            )

        old_status = shipment.status
        shipment.status = target_status

        stocked: list[Order] = []
        if target_status == ShipmentStatus.RECEIVED:
            stocked = amazon_orders_to_stock(shipment.orders)
            for order in stocked:
                order.status = OrderStatus.IN_STOCK

        await self.db.flush()

        logger.info(
            "Shipment %s transitioned %s -> %s (%d Amazon orders now in stock)",
            shipment_id, old_status.value, target_status.value, len(stocked),
        )

        # Re-read so server-side timestamps are current in the response
        return await self.get_shipment_with_orders(shipment_id)
