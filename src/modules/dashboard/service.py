"""Dashboard service — summary counters for the landing page."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.enums import DestinationType, OrderStatus, ShipmentStatus
from src.models.order import Order
from src.models.shipment import Shipment
from src.modules.dashboard.schemas import DashboardCounts


class DashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, model, *criteria) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(model).where(*criteria)
        )
        return result.scalar() or 0

    async def dashboard_counts(self) -> DashboardCounts:
        """Count shipments by status and orders by destination.

        The counts are independent queries, not a consistent snapshot; they
        are for display only.
        """
        amazon = Order.destination_type == DestinationType.AMAZON
        company = Order.destination_type == DestinationType.COMPANY

        return DashboardCounts(
            total_shipments=await self._count(Shipment),
            open_shipments=await self._count(Shipment, Shipment.status == ShipmentStatus.OPEN),
            ordered_shipments=await self._count(Shipment, Shipment.status == ShipmentStatus.ORDERED),
            received_shipments=await self._count(Shipment, Shipment.status == ShipmentStatus.RECEIVED),
            amazon_stock=await self._count(Order, amazon),
            in_stock=await self._count(Order, amazon, Order.status == OrderStatus.IN_STOCK),
            company_orders=await self._count(Order, company),
            pending_orders=await self._count(Order, company, Order.status == OrderStatus.PENDING),
        )
