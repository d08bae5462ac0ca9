"""Company model — an internal recipient of company-destination orders."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin


class Company(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact: Mapped[str | None] = mapped_column(String(255))
