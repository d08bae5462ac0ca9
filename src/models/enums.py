import enum


class ShipmentStatus(str, enum.Enum):
    OPEN = "open"
    ORDERED = "ordered"
    RECEIVED = "received"


class DestinationType(str, enum.Enum):
    COMPANY = "company"
    AMAZON = "amazon"


class OrderStatus(str, enum.Enum):
    """Every status an order row can hold, across both destinations."""

    PENDING = "pending"
    DELIVERED = "delivered"
    IN_STOCK = "in-stock"
    SOLD = "sold"
    IN_OFFICE_USE = "in-office-use"


class CompanyOrderStatus(str, enum.Enum):
    PENDING = "pending"
    DELIVERED = "delivered"


class AmazonOrderStatus(str, enum.Enum):
    PENDING = "pending"
    IN_STOCK = "in-stock"
    SOLD = "sold"
    IN_OFFICE_USE = "in-office-use"


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Persist enum *values* (``in-stock``) rather than member names (``IN_STOCK``)."""
    return [member.value for member in enum_cls]
