"""Pydantic v2 schemas for the dashboard summary."""

from pydantic import BaseModel, Field


class DashboardCounts(BaseModel):
    """Point-in-time counters; each comes from its own query."""

    total_shipments: int = Field(alias="totalShipments")
    open_shipments: int = Field(alias="openShipments")
    ordered_shipments: int = Field(alias="orderedShipments")
    received_shipments: int = Field(alias="receivedShipments")
    amazon_stock: int = Field(alias="amazonStock")
    in_stock: int = Field(alias="inStock")
    company_orders: int = Field(alias="companyOrders")
    pending_orders: int = Field(alias="pendingOrders")

    model_config = {"populate_by_name": True}
