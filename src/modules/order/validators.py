"""Order form validation — runs before anything touches the database."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from src.exceptions import ValidationException
from src.models.enums import DestinationType


@dataclass
class NewOrder:
    """A validated, normalised order ready to insert."""

    sku: str
    product_name: str
    quantity: int
    destination_type: DestinationType
    model_number: str | None = None
    company_id: uuid.UUID | None = None
    notes: str | None = None


# orders.quantity is a 32-bit INTEGER column
MAX_QUANTITY = 2**31 - 1


def parse_quantity(value: int | str | None) -> int | None:
    """Return *value* as a positive integer, or None if it is not one.

    Accepts ints and integer strings (``"3"``) up to ``MAX_QUANTITY``;
    rejects zero, negatives, booleans, floats and anything non-numeric.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        quantity = value
    elif isinstance(value, str):
        try:
            quantity = int(value.strip())
        except ValueError:
            return None
    else:
        return None
    return quantity if 0 < quantity <= MAX_QUANTITY else None


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_new_order(
    *,
    sku: str | None,
    product_name: str | None,
    quantity: int | str | None,
    destination_type: DestinationType | str | None,
    model_number: str | None = None,
    company_id: uuid.UUID | str | None = None,
    notes: str | None = None,
) -> NewOrder:
    """Validate add-order input, collecting every problem into one exception."""
    details: list[dict] = []

    sku = _clean(sku)
    if sku is None:
        details.append({"field": "sku", "message": "SKU is required"})

    product_name = _clean(product_name)
    if product_name is None:
        details.append({"field": "product_name", "message": "Product name is required"})

    parsed_quantity = parse_quantity(quantity)
    if parsed_quantity is None:
        details.append({
            "field": "quantity",
            "message": f"Quantity must be a whole number from 1 to {MAX_QUANTITY}",
        })

    destination: DestinationType | None = None
    try:
        destination = DestinationType(destination_type)
    except ValueError:
        details.append({
            "field": "destination_type",
            "message": f"Destination must be one of {[d.value for d in DestinationType]}",
        })

    parsed_company_id: uuid.UUID | None = None
    if destination == DestinationType.COMPANY:
        if company_id in (None, ""):
            details.append({"field": "company_id", "message": "Select a company for company orders"})
        else:
            try:
                parsed_company_id = (
                    company_id if isinstance(company_id, uuid.UUID) else uuid.UUID(str(company_id))
                )
            except ValueError:
                details.append({"field": "company_id", "message": "Company id is not a valid UUID"})

    if details:
        raise ValidationException(message="Order is invalid", details=details)

    return NewOrder(
        sku=sku,
        product_name=product_name,
        quantity=parsed_quantity,
        destination_type=destination,
        model_number=_clean(model_number),
        # Amazon stock never carries a company
        company_id=parsed_company_id,
        notes=_clean(notes),
    )
