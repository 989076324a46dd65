# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Async SQLAlchemy engine and session factory.

This module owns the application-global async SQLAlchemy engine and the
`async_sessionmaker` the read repositories draw their sessions from.

Lifecycle:
    * Call `init_engine_and_sessionmaker(settings)` at app startup (lifespan).
    * Use `get_sessionmaker()` where a session factory is needed (repositories
      that run concurrent queries open one session per query).
    * Call `dispose_engine()` during shutdown.

Notes:
    * Repositories never commit; every session here is read-only in practice.
    * `pool_pre_ping=True` helps surface dead connections before use.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from valuescope_api.config.settings import Settings, get_settings

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None


def init_engine_and_sessionmaker(settings: Settings) -> None:
    """Initialize the global async engine and sessionmaker.

    Args:
        settings: Application settings providing `database_url`.

    Raises:
        ValueError: If `database_url` is empty.
    """
    global _engine, _sessionmaker

    if not settings.database_url:
        raise ValueError("database_url must be configured")
    if _engine is not None:
        return

    _engine = create_async_engine(
        url=settings.database_url,
        pool_pre_ping=True,
        # One aggregation fans out to this many concurrent sessions.
        pool_size=max(5, settings.analytics_fetch_concurrency),
        echo=False,
    )
    _sessionmaker = async_sessionmaker(bind=_engine, expire_on_commit=False, class_=AsyncSession)


async def dispose_engine() -> None:
    """Dispose the global engine at application shutdown."""
    global _engine, _sessionmaker
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _sessionmaker = None


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Return the async sessionmaker, initializing it lazily if needed.

    Test transports that skip lifespan still get a working factory via
    `get_settings()`.
    """
    if _sessionmaker is None:
        init_engine_and_sessionmaker(get_settings())
    assert _sessionmaker is not None
    return _sessionmaker

