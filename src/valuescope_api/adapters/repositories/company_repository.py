# src/valuescope_api/adapters/repositories/company_repository.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""SQLAlchemy company reference-data repository.

Implements :class:`~valuescope_api.domain.interfaces.repositories.company_repository.CompanyRepository`
on top of the ``company`` and ``security`` tables. Raw share-class labels are
translated to :class:`ShareClassType` here and nowhere else.
"""

from __future__ import annotations

from sqlalchemy import func, select

from valuescope_api.adapters.repositories.base_repository import BaseRepository
from valuescope_api.domain.entities.share_class import ShareClass
from valuescope_api.domain.enums.share_class_type import ShareClassType
from valuescope_api.domain.interfaces.repositories.company_repository import SecurityRef
from valuescope_api.infrastructure.database.models.valuation import Security


class SqlAlchemyCompanyRepository(BaseRepository[Security]):
    """Company and share-class lookups backed by PostgreSQL."""

    async def get_security_by_code(self, exchange: str, ticker: str) -> SecurityRef | None:
        stmt = select(Security).where(
            func.upper(Security.exchange) == exchange.upper(),
            Security.ticker == ticker,
        )
        row = await self.fetch_optional(stmt)
        if row is None:
            return None
        return SecurityRef(
            security_id=row.security_id,
            company_id=row.company_id,
            exchange=row.exchange.upper(),
            ticker=row.ticker,
        )

    async def list_share_classes(self, company_id: str) -> list[ShareClass]:
        stmt = (
            select(Security)
            .where(Security.company_id == company_id, Security.is_listed.is_(True))
            .order_by(Security.ticker.asc())
        )
        rows = await self.fetch_all(stmt)
        return [
            ShareClass(
                security_id=row.security_id,
                company_id=row.company_id,
                type=ShareClassType.from_label(row.type_label),
                ticker=row.ticker,
                exchange=row.exchange.upper(),
                name=row.name or "",
                type_label=row.type_label,
            )
            for row in rows
        ]
