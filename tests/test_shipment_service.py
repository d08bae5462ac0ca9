"""Unit tests for ShipmentService — creation, reads, lifecycle and receive cascade."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from src.exceptions import (
    BusinessRuleException,
    ConflictException,
    NotFoundException,
    ValidationException,
)
from src.models.enums import DestinationType, OrderStatus, ShipmentStatus
from src.models.shipment import Shipment
from src.modules.shipment.service import ShipmentService
from tests.helpers import make_list_result, make_scalar_result

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def shipment_service(mock_db):
    return ShipmentService(mock_db)


def _make_order(destination: DestinationType, status: OrderStatus, sku: str):
    order = MagicMock()
    order.id = uuid.uuid4()
    order.sku = sku
    order.destination_type = destination
    order.status = status
    return order


def _make_shipment(status=ShipmentStatus.OPEN, orders=None):
    shipment = MagicMock()
    shipment.id = uuid.uuid4()
    shipment.shipment_number = "SHP-2026-014"
    shipment.status = status
    shipment.notes = None
    shipment.orders = orders or []
    shipment.created_at = datetime.now(UTC)
    shipment.updated_at = datetime.now(UTC)
    return shipment


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


class TestCreateShipment:
    @pytest.mark.asyncio
    async def test_create_starts_open(self, shipment_service, mock_db):
        mock_db.execute.return_value = make_scalar_result(None)

        shipment = await shipment_service.create_shipment("  SHP-001 ", notes="")

        mock_db.add.assert_called_once()
        added = mock_db.add.call_args.args[0]
        assert isinstance(added, Shipment)
        assert added is shipment
        assert added.shipment_number == "SHP-001"
        assert added.status == ShipmentStatus.OPEN
        assert added.notes is None
        mock_db.flush.assert_awaited()

    @pytest.mark.asyncio
    async def test_blank_number_rejected_before_query(self, shipment_service, mock_db):
        with pytest.raises(ValidationException, match="required"):
            await shipment_service.create_shipment("   ")
        mock_db.execute.assert_not_awaited()
        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_number_conflicts(self, shipment_service, mock_db):
        mock_db.execute.return_value = make_scalar_result(uuid.uuid4())

        with pytest.raises(ConflictException, match="already exists"):
            await shipment_service.create_shipment("SHP-001")
        mock_db.add.assert_not_called()


# ---------------------------------------------------------------------------
# Get / List
# ---------------------------------------------------------------------------


class TestReadShipments:
    @pytest.mark.asyncio
    async def test_list_returns_rows(self, shipment_service, mock_db):
        rows = [_make_shipment(), _make_shipment(ShipmentStatus.RECEIVED)]
        mock_db.execute.return_value = make_list_result(rows)

        result = await shipment_service.list_shipments()

        assert result == rows
        statement = mock_db.execute.call_args.args[0]
        assert "ORDER BY shipments.created_at DESC" in str(statement)

    @pytest.mark.asyncio
    async def test_get_not_found(self, shipment_service, mock_db):
        mock_db.execute.return_value = make_scalar_result(None)

        with pytest.raises(NotFoundException, match="not found"):
            await shipment_service.get_shipment_with_orders(uuid.uuid4())


# ---------------------------------------------------------------------------
# Status transitions
# ---------------------------------------------------------------------------


class TestAdvanceStatus:
    @pytest.mark.asyncio
    async def test_open_to_ordered(self, shipment_service, mock_db):
        shipment = _make_shipment(ShipmentStatus.OPEN)
        mock_db.execute.return_value = make_scalar_result(shipment)

        result = await shipment_service.advance_status(shipment.id, ShipmentStatus.ORDERED)

        assert result.status == ShipmentStatus.ORDERED
        mock_db.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_received_cascades_to_pending_amazon_orders_only(
        self, shipment_service, mock_db
    ):
        a = _make_order(DestinationType.AMAZON, OrderStatus.PENDING, "A")
        b = _make_order(DestinationType.AMAZON, OrderStatus.IN_STOCK, "B")
        c = _make_order(DestinationType.COMPANY, OrderStatus.PENDING, "C")
        shipment = _make_shipment(ShipmentStatus.ORDERED, orders=[a, b, c])
        mock_db.execute.return_value = make_scalar_result(shipment)

        await shipment_service.advance_status(shipment.id, ShipmentStatus.RECEIVED)

        assert shipment.status == ShipmentStatus.RECEIVED
        assert a.status == OrderStatus.IN_STOCK
        assert b.status == OrderStatus.IN_STOCK
        assert c.status == OrderStatus.PENDING
        # Shipment and order writes go out in a single flush
        mock_db.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_ordered_does_not_touch_orders(self, shipment_service, mock_db):
        a = _make_order(DestinationType.AMAZON, OrderStatus.PENDING, "A")
        shipment = _make_shipment(ShipmentStatus.OPEN, orders=[a])
        mock_db.execute.return_value = make_scalar_result(shipment)

        await shipment_service.advance_status(shipment.id, ShipmentStatus.ORDERED)

        assert a.status == OrderStatus.PENDING

    @pytest.mark.asyncio
    async def test_skip_to_received_rejected(self, shipment_service, mock_db):
        a = _make_order(DestinationType.AMAZON, OrderStatus.PENDING, "A")
        shipment = _make_shipment(ShipmentStatus.OPEN, orders=[a])
        mock_db.execute.return_value = make_scalar_result(shipment)

        with pytest.raises(BusinessRuleException, match="cannot move from 'open' to 'received'"):
            await shipment_service.advance_status(shipment.id, ShipmentStatus.RECEIVED)

        assert shipment.status == ShipmentStatus.OPEN
        assert a.status == OrderStatus.PENDING
        mock_db.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_received_cannot_reopen(self, shipment_service, mock_db):
        shipment = _make_shipment(ShipmentStatus.RECEIVED)
        mock_db.execute.return_value = make_scalar_result(shipment)

        with pytest.raises(BusinessRuleException, match="terminal"):
            await shipment_service.advance_status(shipment.id, ShipmentStatus.OPEN)
        assert shipment.status == ShipmentStatus.RECEIVED

    @pytest.mark.asyncio
    async def test_missing_shipment(self, shipment_service, mock_db):
        mock_db.execute.return_value = make_scalar_result(None)

        with pytest.raises(NotFoundException):
            await shipment_service.advance_status(uuid.uuid4(), ShipmentStatus.ORDERED)
        mock_db.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shipment_row_locked_before_orders_read(self, shipment_service, mock_db):
        shipment = _make_shipment(ShipmentStatus.ORDERED)
        mock_db.execute.return_value = make_scalar_result(shipment)

        await shipment_service.advance_status(shipment.id, ShipmentStatus.RECEIVED)

        statements = [
            str(call.args[0].compile(dialect=postgresql.dialect()))
            for call in mock_db.execute.call_args_list
        ]
        assert statements[0].endswith("FOR UPDATE")
        assert "orders" not in statements[0]
        # Orders are loaded by a later statement, after the lock is held
        assert "LEFT OUTER JOIN orders" in statements[1]
        assert "FOR UPDATE" not in statements[1]
