"""Company service — the internal recipients of company orders."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.exceptions import ConflictException, NotFoundException, ValidationException
from src.models.company import Company
from src.models.order import Order

logger = logging.getLogger(__name__)


def _require_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationException(
            "Company name is required",
            details=[{"field": "name", "message": "Company name is required"}],
        )
    return name


class CompanyService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_companies(self) -> list[Company]:
        result = await self.db.execute(select(Company).order_by(Company.name))
        return list(result.scalars().all())

    async def get_company(self, company_id: uuid.UUID) -> Company:
        result = await self.db.execute(select(Company).where(Company.id == company_id))
        company = result.scalar_one_or_none()
        if company is None:
            raise NotFoundException(f"Company {company_id} not found")
        return company

    async def create_company(self, name: str, contact: str | None = None) -> Company:
        company = Company(name=_require_name(name), contact=(contact or "").strip() or None)
        self.db.add(company)
        await self.db.flush()
        await self.db.refresh(company)
        logger.info("Created company %s (%s)", company.id, company.name)
        return company

    async def update_company(
        self,
        company_id: uuid.UUID,
        *,
        name: str | None = None,
        contact: str | None = None,
    ) -> Company:
        """Rename a company or change its contact. Only supplied fields change."""
        company = await self.get_company(company_id)
        if name is not None:
            company.name = _require_name(name)
        if contact is not None:
            company.contact = contact.strip() or None
        await self.db.flush()
        return company

    async def delete_company(self, company_id: uuid.UUID) -> None:
        """Delete a company that no order refers to."""
        company = await self.get_company(company_id)

        count_result = await self.db.execute(
            select(func.count()).select_from(Order).where(Order.company_id == company_id)
        )
        referencing = count_result.scalar() or 0
        if referencing > 0:
            raise ConflictException(
                f"Company '{company.name}' still has {referencing} order(s) and cannot be deleted"
            )

        await self.db.delete(company)
        await self.db.flush()
        logger.info("Deleted company %s (%s)", company_id, company.name)
