# src/valuescope_api/infrastructure/database/models/base.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Declarative Base and persistence helpers for ValueScope.

This module defines:
    - A project-wide SQLAlchemy Declarative Base with deterministic naming
      conventions (for stable Alembic diffs).
    - An audit timestamp mixin (UTC).
    - A helper that qualifies foreign-key targets with the configured schema.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func
from sqlalchemy.types import DateTime

__all__ = [
    "DEFAULT_DB_SCHEMA",
    "NAMING_CONVENTIONS",
    "Base",
    "TimestampMixin",
    "metadata",
    "qualified",
]

#: Default database schema for all tables (``DB_SCHEMA``; empty disables it).
DEFAULT_DB_SCHEMA: str | None = os.getenv("DB_SCHEMA", "public") or None

#: Deterministic naming conventions for Alembic-friendly diffs.
#: Ref: https://alembic.sqlalchemy.org/en/latest/naming.html
NAMING_CONVENTIONS: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTIONS, schema=DEFAULT_DB_SCHEMA)


class Base(DeclarativeBase):
    """Declarative Base for all ORM models.

    The shared metadata carries the naming conventions and the default
    schema, so models only declare their own constraints.
    """

    metadata = metadata


def qualified(target: str) -> str:
    """Return ``table.column`` prefixed with the default schema, if any."""
    return f"{DEFAULT_DB_SCHEMA}.{target}" if DEFAULT_DB_SCHEMA else target


class TimestampMixin:
    """Mixin providing ``created_at`` and ``updated_at`` timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        server_default=func.now(),
    )
