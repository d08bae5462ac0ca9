"""Unit tests for CompanyService."""

from __future__ import annotations

import uuid
from unittest.mock import MagicMock

import pytest

from src.exceptions import ConflictException, NotFoundException, ValidationException
from src.models.company import Company
from src.modules.company.service import CompanyService
from tests.helpers import make_count_result, make_list_result, make_scalar_result


@pytest.fixture
def company_service(mock_db):
    return CompanyService(mock_db)


def _make_company(name="Northwind Logistics", contact=None):
    company = MagicMock()
    company.id = uuid.uuid4()
    company.name = name
    company.contact = contact
    return company


class TestCreateCompany:
    @pytest.mark.asyncio
    async def test_create(self, company_service, mock_db):
        company = await company_service.create_company("  Northwind ", contact=" ops@northwind.test ")

        added = mock_db.add.call_args.args[0]
        assert isinstance(added, Company)
        assert added is company
        assert added.name == "Northwind"
        assert added.contact == "ops@northwind.test"
        mock_db.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, company_service, mock_db):
        with pytest.raises(ValidationException, match="name is required"):
            await company_service.create_company("   ")
        mock_db.add.assert_not_called()


class TestReadCompanies:
    @pytest.mark.asyncio
    async def test_list_sorted_by_name(self, company_service, mock_db):
        rows = [_make_company("Acme"), _make_company("Zenith")]
        mock_db.execute.return_value = make_list_result(rows)

        assert await company_service.list_companies() == rows
        assert "ORDER BY companies.name" in str(mock_db.execute.call_args.args[0])

    @pytest.mark.asyncio
    async def test_get_not_found(self, company_service, mock_db):
        mock_db.execute.return_value = make_scalar_result(None)

        with pytest.raises(NotFoundException):
            await company_service.get_company(uuid.uuid4())


class TestUpdateCompany:
    @pytest.mark.asyncio
    async def test_only_supplied_fields_change(self, company_service, mock_db):
        company = _make_company(contact="front desk")
        mock_db.execute.return_value = make_scalar_result(company)

        result = await company_service.update_company(company.id, name=" Northwind Ltd ")

        assert result.name == "Northwind Ltd"
        assert result.contact == "front desk"
        mock_db.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_blank_contact_cleared(self, company_service, mock_db):
        company = _make_company(contact="front desk")
        mock_db.execute.return_value = make_scalar_result(company)

        result = await company_service.update_company(company.id, contact="  ")

        assert result.contact is None

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, company_service, mock_db):
        company = _make_company()
        mock_db.execute.return_value = make_scalar_result(company)

        with pytest.raises(ValidationException):
            await company_service.update_company(company.id, name="")
        assert company.name == "Northwind Logistics"


class TestDeleteCompany:
    @pytest.mark.asyncio
    async def test_unreferenced_company_deleted(self, company_service, mock_db):
        company = _make_company()
        mock_db.execute.side_effect = [make_scalar_result(company), make_count_result(0)]

        await company_service.delete_company(company.id)

        mock_db.delete.assert_awaited_once_with(company)
        mock_db.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_referenced_company_conflicts(self, company_service, mock_db):
        company = _make_company()
        mock_db.execute.side_effect = [make_scalar_result(company), make_count_result(2)]

        with pytest.raises(ConflictException, match="still has 2 order"):
            await company_service.delete_company(company.id)
        mock_db.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_company(self, company_service, mock_db):
        mock_db.execute.return_value = make_scalar_result(None)

        with pytest.raises(NotFoundException):
            await company_service.delete_company(uuid.uuid4())
        mock_db.delete.assert_not_awaited()
