# src/valuescope_api/infrastructure/health/db_check.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Readiness check for PostgreSQL.

The check runs a trivial ``SELECT 1`` through the shared session factory and
returns ``(success, detail)``. Latency is recorded by the readiness route.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

__all__ = ["DbHealthCheck"]


class DbHealthCheck:
    """Readiness check for the analytics database."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def db(self) -> tuple[bool, str | None]:
        """Check PostgreSQL using ``SELECT 1``.

        Returns:
            tuple[bool, str | None]: (success, diagnostic detail or None).
        """
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except Exception as exc:  # exercised in integration tests
            return False, str(exc)
        return True, None
