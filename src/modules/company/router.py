"""Company API router."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.session import get_db
from src.modules.auth.dependencies import AuthenticatedUser, get_current_user
from src.modules.company.schemas import (
    CompanyCreate,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
)
from src.modules.company.service import CompanyService

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("/", response_model=CompanyListResponse)
async def list_companies(
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List companies alphabetically."""
    svc = CompanyService(db)
    items = await svc.list_companies()
    return CompanyListResponse(
        items=[CompanyResponse.model_validate(c) for c in items],
        total=len(items),
    )


@router.post("/", response_model=CompanyResponse, status_code=201)
async def create_company(
    body: CompanyCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = CompanyService(db)
    company = await svc.create_company(body.name, contact=body.contact)
    return CompanyResponse.model_validate(company)


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = CompanyService(db)
    company = await svc.get_company(company_id)
    return CompanyResponse.model_validate(company)


@router.patch("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: uuid.UUID,
    body: CompanyUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = CompanyService(db)
    company = await svc.update_company(company_id, name=body.name, contact=body.contact)
    return CompanyResponse.model_validate(company)


@router.delete("/{company_id}", status_code=204)
async def delete_company(
    company_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a company. Rejected while any order still refers to it."""
    svc = CompanyService(db)
    await svc.delete_company(company_id)
    return Response(status_code=204)
