# Import all models so SQLAlchemy metadata is populated for Alembic autogenerate
from src.models.company import Company
from src.models.enums import (
    AmazonOrderStatus,
    CompanyOrderStatus,
    DestinationType,
    OrderStatus,
    ShipmentStatus,
)
from src.models.order import Order
from src.models.shipment import Shipment

__all__ = [
    "AmazonOrderStatus",
    "Company",
    "CompanyOrderStatus",
    "DestinationType",
    "Order",
    "OrderStatus",
    "Shipment",
    "ShipmentStatus",
]
