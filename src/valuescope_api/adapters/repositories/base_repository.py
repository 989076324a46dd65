# src/valuescope_api/adapters/repositories/base_repository.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""
BaseRepository: Shared read mechanics for ValueScope repositories.

Purpose:
    Shared mechanics for all repositories:
      * Session-per-query execution from an async session factory, so one
        repository instance can serve concurrent ``asyncio.gather`` calls.
      * Safe fetch helpers (optional, all, rows).
      * Deterministic latest-first ordering helper.

Layer: adapters / repositories

Notes:
    * No business logic, no domain decisions.
    * Repositories here are read-only and never commit.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Row, Select, nulls_last
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

TModel = TypeVar("TModel")


class BaseRepository(Generic[TModel]):  # noqa: UP046
    """Base class for read-side repositories."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the repository.

        Args:
            session_factory: Factory producing sessions bound to the target
                database. Each query runs in its own short-lived session;
                an ``AsyncSession`` must not be shared across tasks.
        """
        self._session_factory = session_factory

    @staticmethod
    def order_by_latest(
        stmt: Select[Any],
        timestamp_col: Any,
        pk_col: Any,
    ) -> Select[Any]:
        """Apply deterministic latest-first ordering.

        The resulting query orders by:

            timestamp DESC NULLS LAST, pk ASC
        """
        return stmt.order_by(
            nulls_last(timestamp_col.desc()),
            pk_col.asc(),
        )

    async def fetch_optional(self, stmt: Select[Any]) -> TModel | None:
        """Execute a statement and return zero or one entity."""
        async with self._session_factory() as session:
            res = await session.execute(stmt)
            return res.scalars().first()

    async def fetch_all(self, stmt: Select[Any]) -> list[TModel]:
        """Execute a statement and return all entities as a list."""
        async with self._session_factory() as session:
            res = await session.execute(stmt)
            return list(res.scalars().all())

    async def fetch_rows(self, stmt: Select[Any]) -> Sequence[Row[Any]]:
        """Execute a multi-column statement and return its rows."""
        async with self._session_factory() as session:
            res = await session.execute(stmt)
            return res.all()
