"""Order model — a line item inside a shipment, bound for a company or Amazon stock."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import ENUM, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin
from src.models.enums import DestinationType, OrderStatus, enum_values

if TYPE_CHECKING:
    from src.models.company import Company
    from src.models.shipment import Shipment


class Order(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "orders"

    shipment_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("shipments.id", ondelete="RESTRICT"),
        nullable=False,
    )
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    model_number: Mapped[str | None] = mapped_column(String(100))
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    destination_type: Mapped[DestinationType] = mapped_column(
        ENUM(
            DestinationType,
            name="destinationtype",
            create_type=False,
            values_callable=enum_values,
        ),
        nullable=False,
    )
    company_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="RESTRICT"),
    )
    status: Mapped[OrderStatus] = mapped_column(
        ENUM(
            OrderStatus,
            name="orderstatus",
            create_type=False,
            values_callable=enum_values,
        ),
        nullable=False,
        default=OrderStatus.PENDING,
        server_default=OrderStatus.PENDING.value,
    )
    notes: Mapped[str | None] = mapped_column(Text)

    # Relationships
    shipment: Mapped[Shipment] = relationship(
        "Shipment", back_populates="orders", lazy="noload"
    )
    company: Mapped[Company | None] = relationship("Company", lazy="noload")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="quantity_positive"),
        CheckConstraint(
            "(destination_type = 'company' AND company_id IS NOT NULL)"
            " OR (destination_type = 'amazon' AND company_id IS NULL)",
            name="destination_company",
        ),
        Index("ix_orders_shipment_id", "shipment_id"),
        Index("ix_orders_company_id", "company_id", postgresql_where="company_id IS NOT NULL"),
        Index("ix_orders_destination_status", "destination_type", "status"),
    )

    @property
    def company_name(self) -> str | None:
        return self.company.name if self.company is not None else None

    @property
    def shipment_number(self) -> str | None:
        return self.shipment.shipment_number if self.shipment is not None else None
