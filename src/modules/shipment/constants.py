"""Shipment status transitions and the pure rules that apply them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.models.enums import ShipmentStatus

# ---------------------------------------------------------------------------
# Valid status transitions: current_status -> set of allowed next statuses
# ---------------------------------------------------------------------------

SHIPMENT_TRANSITIONS: dict[ShipmentStatus, set[ShipmentStatus]] = {
    ShipmentStatus.OPEN: {ShipmentStatus.ORDERED},
    ShipmentStatus.ORDERED: {ShipmentStatus.RECEIVED},
    ShipmentStatus.RECEIVED: set(),
}

SHIPMENT_TERMINAL_STATUSES: set[ShipmentStatus] = {ShipmentStatus.RECEIVED}


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of checking a status change, independent of any persistence."""

    allowed: bool
    status: Enum | None = None
    reason: str | None = None

    @classmethod
    def accept(cls, status: Enum) -> TransitionResult:
        return cls(allowed=True, status=status)

    @classmethod
    def reject(cls, reason: str) -> TransitionResult:
        return cls(allowed=False, reason=reason)


def resolve_shipment_transition(
    current: ShipmentStatus, target: ShipmentStatus
) -> TransitionResult:
    """Check that *target* is the immediate successor of *current*."""
    if current == target:
        return TransitionResult.reject(f"shipment is already '{current.value}'")
    if current in SHIPMENT_TERMINAL_STATUSES:
        return TransitionResult.reject(f"'{current.value}' is a terminal status")

    allowed = SHIPMENT_TRANSITIONS.get(current, set())
    if target not in allowed:
        return TransitionResult.reject(
            f"cannot move from '{current.value}' to '{target.value}'; "
            f"allowed: {sorted(s.value for s in allowed)}"
        )
    return TransitionResult.accept(target)


def next_shipment_status(current: ShipmentStatus) -> ShipmentStatus | None:
    """The single transition offered to the operator, or None once received."""
    allowed = SHIPMENT_TRANSITIONS.get(current, set())
    return next(iter(allowed), None)
