"""Shipment model — an inbound batch of products."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Index, String, Text
from sqlalchemy.dialects.postgresql import ENUM
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from src.models.enums import ShipmentStatus, enum_values

if TYPE_CHECKING:
    from src.models.order import Order


class Shipment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "shipments"

    shipment_number: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True
    )
    status: Mapped[ShipmentStatus] = mapped_column(
        ENUM(
            ShipmentStatus,
            name="shipmentstatus",
            create_type=False,
            values_callable=enum_values,
        ),
        nullable=False,
        default=ShipmentStatus.OPEN,
        server_default=ShipmentStatus.OPEN.value,
    )
    notes: Mapped[str | None] = mapped_column(Text)

    # Relationships
    orders: Mapped[list[Order]] = relationship(
        "Order",
        back_populates="shipment",
        lazy="noload",
        order_by="Order.created_at",
    )

    __table_args__ = (
        Index("ix_shipments_status", "status"),
        Index("ix_shipments_created_at", "created_at"),
    )
