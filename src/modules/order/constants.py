"""Order status rules per destination, and the receive-time stock cascade."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from src.models.enums import (
    AmazonOrderStatus,
    CompanyOrderStatus,
    DestinationType,
    OrderStatus,
)
from src.modules.shipment.constants import TransitionResult

if TYPE_CHECKING:
    from src.models.order import Order

# Legal stored values for each destination
ORDER_STATUSES_BY_DESTINATION: dict[DestinationType, set[OrderStatus]] = {
    DestinationType.COMPANY: {OrderStatus(s.value) for s in CompanyOrderStatus},
    DestinationType.AMAZON: {OrderStatus(s.value) for s in AmazonOrderStatus},
}

# Company orders move forward only; delivered is terminal
COMPANY_ORDER_TRANSITIONS: dict[CompanyOrderStatus, set[CompanyOrderStatus]] = {
    CompanyOrderStatus.PENDING: {CompanyOrderStatus.DELIVERED},
    CompanyOrderStatus.DELIVERED: set(),
}

# Amazon stock can be set to any of these from the inventory view, whatever
# its current value. ``pending -> in-stock`` also happens on shipment receipt.
AMAZON_MANUAL_STATUSES: set[AmazonOrderStatus] = {
    AmazonOrderStatus.IN_STOCK,
    AmazonOrderStatus.SOLD,
    AmazonOrderStatus.IN_OFFICE_USE,
}


def status_variant(
    destination: DestinationType, status: OrderStatus | str
) -> CompanyOrderStatus | AmazonOrderStatus:
    """Narrow a stored status to its destination-specific enum.

    Raises ``ValueError`` if the status is not legal for the destination.
    """
    value = status.value if isinstance(status, OrderStatus) else status
    if destination == DestinationType.COMPANY:
        return CompanyOrderStatus(value)
    return AmazonOrderStatus(value)


def resolve_order_transition(
    destination: DestinationType,
    current: OrderStatus,
    target: OrderStatus | str,
) -> TransitionResult:
    """Check a manual order status change against its destination's rules."""
    target_value = target.value if isinstance(target, OrderStatus) else target
    try:
        wanted = status_variant(destination, target_value)
    except ValueError:
        return TransitionResult.reject(
            f"'{target_value}' is not a valid status for {destination.value} orders"
        )

    if destination == DestinationType.COMPANY:
        now = status_variant(destination, current)
        if wanted not in COMPANY_ORDER_TRANSITIONS.get(now, set()):
            return TransitionResult.reject(
                f"cannot move a company order from '{now.value}' to '{wanted.value}'"
            )
    elif wanted not in AMAZON_MANUAL_STATUSES:
        return TransitionResult.reject(
            f"Amazon orders can only be set to "
            f"{sorted(s.value for s in AMAZON_MANUAL_STATUSES)}"
        )

    return TransitionResult.accept(OrderStatus(wanted.value))


def amazon_orders_to_stock(orders: Iterable[Order]) -> list[Order]:
    """Orders that move to in-stock when their shipment is received."""
    return [
        order
        for order in orders
        if order.destination_type == DestinationType.AMAZON
        and order.status == OrderStatus.PENDING
    ]
