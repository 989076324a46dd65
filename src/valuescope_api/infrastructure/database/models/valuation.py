# src/valuescope_api/infrastructure/database/models/valuation.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Valuation ORM models: companies, listed securities, daily metrics, rankings.

Metric values use NUMERIC(30,8) and are read back as :class:`~decimal.Decimal`.
``security.type_label`` keeps the raw upstream label (e.g. ``"보통주"``); it
is translated to a share class type by the repositories.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from valuescope_api.infrastructure.database.models.base import Base, TimestampMixin, qualified


class Company(TimestampMixin, Base):
    """Issuing company.

    ``marketcap_rank``/``marketcap_prior_rank`` hold the company-level
    market-value ranking (sum over all share classes).
    """

    __tablename__ = "company"

    company_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    marketcap_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    marketcap_prior_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)


class Security(TimestampMixin, Base):
    """Listed share class of a company."""

    __tablename__ = "security"
    __table_args__ = (UniqueConstraint("exchange", "ticker", name="uq_security_exchange_ticker"),)

    security_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    company_id: Mapped[str] = mapped_column(
        ForeignKey(qualified("company.company_id")),
        nullable=False,
        index=True,
    )
    exchange: Mapped[str] = mapped_column(String(16), nullable=False)
    ticker: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    type_label: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_listed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class SecurityMetricDaily(Base):
    """One metric value for one security on one trading date."""

    __tablename__ = "security_metric_daily"
    __table_args__ = (Index("ix_security_metric_daily_metric_date", "metric", "trade_date"),)

    security_id: Mapped[str] = mapped_column(
        ForeignKey(qualified("security.security_id")),
        primary_key=True,
    )
    metric: Mapped[str] = mapped_column(String(16), primary_key=True)
    trade_date: Mapped[date] = mapped_column(Date, primary_key=True)
    value: Mapped[Decimal | None] = mapped_column(Numeric(30, 8), nullable=True)


class SecurityRank(Base):
    """Market-wide rank of a security for one metric as of ``rank_date``.

    ``value`` is the metric value the rank was computed from.
    """

    __tablename__ = "security_rank"
    __table_args__ = (Index("ix_security_rank_metric_date_rank", "metric", "rank_date", "rank"),)

    security_id: Mapped[str] = mapped_column(
        ForeignKey(qualified("security.security_id")),
        primary_key=True,
    )
    metric: Mapped[str] = mapped_column(String(16), primary_key=True)
    rank_date: Mapped[date] = mapped_column(Date, primary_key=True)
    rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    prior_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    value: Mapped[Decimal | None] = mapped_column(Numeric(30, 8), nullable=True)
