"""Centralized v1 API router — all module routers are included here."""

from fastapi import APIRouter

from src.modules.company.router import router as company_router
from src.modules.dashboard.router import router as dashboard_router
from src.modules.order.router import router as order_router
from src.modules.shipment.router import router as shipment_router
from src.schemas.responses import ERROR_RESPONSES

v1_router = APIRouter(prefix="/api/v1", responses=ERROR_RESPONSES)
v1_router.include_router(shipment_router)
v1_router.include_router(order_router)
v1_router.include_router(company_router)
v1_router.include_router(dashboard_router)
