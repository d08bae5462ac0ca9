"""Tests for add-order input validation."""

from __future__ import annotations

import uuid

import pytest

from src.exceptions import ValidationException
from src.models.enums import DestinationType
from src.modules.order.validators import MAX_QUANTITY, parse_quantity, validate_new_order


class TestParseQuantity:
    @pytest.mark.parametrize(
        "value,expected",
        [(1, 1), (12, 12), ("3", 3), (" 7 ", 7), (2147483647, 2147483647), ("2147483647", 2147483647)],
    )
    def test_positive_integers(self, value, expected):
        assert parse_quantity(value) == expected

    @pytest.mark.parametrize(
        "value",
        [0, -1, "0", "-4", "abc", "2.5", "", None, True, 1.0, 2147483648, "2147483648", 10**10],
    )
    def test_rejected(self, value):
        assert parse_quantity(value) is None


class TestValidateNewOrder:
    def test_normalises_fields(self):
        company_id = uuid.uuid4()

        order = validate_new_order(
            sku=" RAK-7268 ",
            product_name=" WisGate Edge Lite 2 ",
            quantity="4",
            destination_type="company",
            model_number="  ",
            company_id=str(company_id),
            notes=" for the Leeds office ",
        )

        assert order.sku == "RAK-7268"
        assert order.product_name == "WisGate Edge Lite 2"
        assert order.quantity == 4
        assert order.destination_type == DestinationType.COMPANY
        assert order.model_number is None
        assert order.company_id == company_id
        assert order.notes == "for the Leeds office"

    def test_amazon_drops_company(self):
        order = validate_new_order(
            sku="RAK-1",
            product_name="Sensor",
            quantity=1,
            destination_type=DestinationType.AMAZON,
            company_id=uuid.uuid4(),
        )
        assert order.company_id is None

    def test_unknown_destination(self):
        with pytest.raises(ValidationException) as exc_info:
            validate_new_order(
                sku="RAK-1", product_name="Sensor", quantity=1, destination_type="warehouse"
            )
        assert exc_info.value.details[0]["field"] == "destination_type"

    def test_malformed_company_id(self):
        with pytest.raises(ValidationException) as exc_info:
            validate_new_order(
                sku="RAK-1",
                product_name="Sensor",
                quantity=1,
                destination_type="company",
                company_id="not-a-uuid",
            )
        assert exc_info.value.details == [
            {"field": "company_id", "message": "Company id is not a valid UUID"}
        ]

    def test_quantity_above_column_range(self):
        with pytest.raises(ValidationException) as exc_info:
            validate_new_order(
                sku="RAK-1",
                product_name="Sensor",
                quantity=MAX_QUANTITY + 1,
                destination_type="amazon",
            )
        assert exc_info.value.details == [
            {"field": "quantity", "message": f"Quantity must be a whole number from 1 to {MAX_QUANTITY}"}
        ]
