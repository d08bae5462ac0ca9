"""Builders shared by the test modules: mock query results and bearer tokens."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from jose import jwt

from src.config import settings


def make_token(
    sub: str | None = None,
    email: str = "ops@example.com",
    secret: str | None = None,
    expires_in: timedelta = timedelta(minutes=30),
) -> str:
    """Issue a bearer token the way the external identity provider would."""
    claims = {
        "sub": sub or str(uuid.uuid4()),
        "email": email,
        "role": "authenticated",
        "aud": settings.jwt_audience,
        "exp": datetime.now(UTC) + expires_in,
    }
    return jwt.encode(claims, secret or settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def make_scalar_result(value):
    """Create a mock result that returns a scalar value."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalar.return_value = value
    unique_mock = MagicMock()
    unique_mock.scalar_one_or_none.return_value = value
    result.unique.return_value = unique_mock
    scalars_mock = MagicMock()
    scalars_mock.all.return_value = [value] if value else []
    result.scalars.return_value = scalars_mock
    return result


def make_list_result(values: list):
    """Create a mock result for SELECT queries returning many rows."""
    result = MagicMock()
    scalars_mock = MagicMock()
    scalars_mock.all.return_value = values
    result.scalars.return_value = scalars_mock
    result.unique.return_value = result
    return result


def make_count_result(count_value: int):
    """Create a mock result for SELECT COUNT queries."""
    result = MagicMock()
    result.scalar.return_value = count_value
    return result
