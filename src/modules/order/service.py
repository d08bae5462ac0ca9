"""Order service — adding line items to shipments, manual status changes, order views."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from src.exceptions import BusinessRuleException, NotFoundException
from src.models.company import Company
from src.models.enums import (
    AmazonOrderStatus,
    DestinationType,
    OrderStatus,
)
from src.models.order import Order
from src.models.shipment import Shipment
from src.modules.order.constants import resolve_order_transition
from src.modules.order.validators import validate_new_order

logger = logging.getLogger(__name__)


def _blank_to_none(notes: str | None) -> str | None:
    return notes if notes else None


class OrderService:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def add_order(
        self,
        shipment_id: uuid.UUID,
        *,
        sku: str,
        product_name: str,
        quantity: int | str,
        destination_type: DestinationType | str,
        model_number: str | None = None,
        company_id: uuid.UUID | None = None,
        notes: str | None = None,
    ) -> Order:
        """Attach a new pending order to a shipment."""
        new_order = validate_new_order(
            sku=sku,
            product_name=product_name,
            quantity=quantity,
            destination_type=destination_type,
            model_number=model_number,
            company_id=company_id,
            notes=notes,
        )

        shipment_result = await self.db.execute(
            select(Shipment.id).where(Shipment.id == shipment_id)
        )
        if shipment_result.scalar_one_or_none() is None:
            raise NotFoundException(f"Shipment {shipment_id} not found")

        if new_order.destination_type == DestinationType.COMPANY:
            company_result = await self.db.execute(
                select(Company.id).where(Company.id == new_order.company_id)
            )
            if company_result.scalar_one_or_none() is None:
                raise NotFoundException(f"Company {new_order.company_id} not found")

        order = Order(
            shipment_id=shipment_id,
            sku=new_order.sku,
            model_number=new_order.model_number,
            product_name=new_order.product_name,
            quantity=new_order.quantity,
            destination_type=new_order.destination_type,
            company_id=new_order.company_id,
            status=OrderStatus.PENDING,
            notes=new_order.notes,
        )
        self.db.add(order)
        await self.db.flush()

        logger.info(
            "Added %s order %s (%s x%d) to shipment %s",
            new_order.destination_type.value, order.id, new_order.sku,
            new_order.quantity, shipment_id,
        )
        return await self.get_order(order.id)

    # ------------------------------------------------------------------
    # Get
    # ------------------------------------------------------------------

    async def get_order(self, order_id: uuid.UUID) -> Order:
        """Get an order with its company and owning shipment."""
        result = await self.db.execute(
            select(Order)
            .options(joinedload(Order.company), joinedload(Order.shipment))
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        order = result.unique().scalar_one_or_none()
        if order is None:
            raise NotFoundException(f"Order {order_id} not found")
        return order

    # ------------------------------------------------------------------
    # Manual status transitions
    # ------------------------------------------------------------------

    async def set_order_status(
        self,
        order_id: uuid.UUID,
        new_status: OrderStatus | str,
        notes: str | None = None,
    ) -> Order:
        """Apply a manual status change, routed by the order's destination."""
        order = await self.get_order(order_id)
        # The inventory dialog always submits notes; the delivered action does not
        return await self._apply_transition(
            order,
            new_status,
            notes,
            replace_notes=order.destination_type == DestinationType.AMAZON,
        )

    async def mark_delivered(
        self, order_id: uuid.UUID, notes: str | None = None
    ) -> Order:
        """Mark a pending company order as delivered."""
        order = await self.get_order(order_id)
        if order.destination_type != DestinationType.COMPANY:
            raise BusinessRuleException(
                "Only company orders can be marked delivered; "
                "use the inventory update for Amazon stock"
            )
        return await self._apply_transition(
            order, OrderStatus.DELIVERED, notes, replace_notes=False
        )

    async def update_inventory_item(
        self,
        order_id: uuid.UUID,
        status: AmazonOrderStatus,
        notes: str | None,
    ) -> Order:
        """Set an Amazon order's status and notes together."""
        order = await self.get_order(order_id)
        if order.destination_type != DestinationType.AMAZON:
            raise BusinessRuleException(
                "Only Amazon orders can be updated from the inventory view"
            )
        return await self._apply_transition(
            order, OrderStatus(status.value), notes, replace_notes=True
        )

    async def update_notes(self, order_id: uuid.UUID, notes: str | None) -> Order:
        """Notes are editable whatever the order's status."""
        order = await self.get_order(order_id)
        order.notes = _blank_to_none(notes)
        await self.db.flush()
        return order

    async def _apply_transition(
        self,
        order: Order,
        new_status: OrderStatus | str,
        notes: str | None,
        *,
        replace_notes: bool,
    ) -> Order:
        outcome = resolve_order_transition(order.destination_type, order.status, new_status)
        if not outcome.allowed:
            raise BusinessRuleException(
                f"Cannot update order {order.id}: {outcome.reason}"
            )

        old_status = order.status
        order.status = outcome.status
        if replace_notes or notes is not None:
            order.notes = _blank_to_none(notes)
        await self.db.flush()

        logger.info(
            "Order %s transitioned %s -> %s",
            order.id, old_status.value, order.status.value,
        )
        return order

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    async def list_company_orders(
        self, company_id: uuid.UUID | None = None
    ) -> list[Order]:
        """Company-destination orders, newest first, optionally for one company."""
        query = (
            select(Order)
            .options(joinedload(Order.company), joinedload(Order.shipment))
            .where(Order.destination_type == DestinationType.COMPANY)
        )
        if company_id is not None:
            query = query.where(Order.company_id == company_id)

        query = query.order_by(Order.created_at.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_amazon_orders(
        self,
        status: AmazonOrderStatus | OrderStatus | None = None,
        search: str | None = None,
    ) -> list[Order]:
        """Amazon-destination orders, newest first.

        ``status`` is an exact match; ``search`` is a case-insensitive
        substring match against SKU or product name.
        """
        query = (
            select(Order)
            .options(joinedload(Order.shipment))
            .where(Order.destination_type == DestinationType.AMAZON)
        )
        if status is not None:
            query = query.where(Order.status == OrderStatus(status.value))

        term = (search or "").strip()
        if term:
            query = query.where(
                or_(
                    Order.sku.icontains(term, autoescape=True),
                    Order.product_name.icontains(term, autoescape=True),
                )
            )

        query = query.order_by(Order.created_at.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())
