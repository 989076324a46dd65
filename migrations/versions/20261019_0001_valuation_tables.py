"""Create valuation tables: company, security, daily metrics, ranks.

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19

This migration:
  * Creates public.company with the company-level market value ranking.
  * Creates public.security (one row per listed share class).
  * Creates public.security_metric_daily keyed by (security, metric, date).
  * Creates public.security_rank keyed by (security, metric, rank date).
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None

_SCHEMA = "public"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Apply the migration."""
    op.create_table(
        "company",
        sa.Column("company_id", sa.String(32), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("marketcap_rank", sa.Integer, nullable=True),
        sa.Column("marketcap_prior_rank", sa.Integer, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("company_id", name="pk_company"),
        schema=_SCHEMA,
    )

    op.create_table(
        "security",
        sa.Column("security_id", sa.String(32), nullable=False),
        sa.Column("company_id", sa.String(32), nullable=False),
        sa.Column("exchange", sa.String(16), nullable=False),
        sa.Column("ticker", sa.String(32), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("type_label", sa.String(64), nullable=True),
        sa.Column("is_listed", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("security_id", name="pk_security"),
        sa.ForeignKeyConstraint(
            ["company_id"],
            [f"{_SCHEMA}.company.company_id"],
            name="fk_security_company_id_company",
        ),
        sa.UniqueConstraint("exchange", "ticker", name="uq_security_exchange_ticker"),
        schema=_SCHEMA,
    )
    op.create_index(
        "ix_security_company_id",
        "security",
        ["company_id"],
        schema=_SCHEMA,
    )

    op.create_table(
        "security_metric_daily",
        sa.Column("security_id", sa.String(32), nullable=False),
        sa.Column("metric", sa.String(16), nullable=False),
        sa.Column("trade_date", sa.Date, nullable=False),
        sa.Column("value", sa.Numeric(30, 8), nullable=True),
        sa.PrimaryKeyConstraint(
            "security_id",
            "metric",
            "trade_date",
            name="pk_security_metric_daily",
        ),
        sa.ForeignKeyConstraint(
            ["security_id"],
            [f"{_SCHEMA}.security.security_id"],
            name="fk_security_metric_daily_security_id_security",
        ),
        schema=_SCHEMA,
    )
    op.create_index(
        "ix_security_metric_daily_metric_date",
        "security_metric_daily",
        ["metric", "trade_date"],
        schema=_SCHEMA,
    )

    op.create_table(
        "security_rank",
        sa.Column("security_id", sa.String(32), nullable=False),
        sa.Column("metric", sa.String(16), nullable=False),
        sa.Column("rank_date", sa.Date, nullable=False),
        sa.Column("rank", sa.Integer, nullable=True),
        sa.Column("prior_rank", sa.Integer, nullable=True),
        sa.PrimaryKeyConstraint("security_id", "metric", "rank_date", name="pk_security_rank"),
        sa.ForeignKeyConstraint(
            ["security_id"],
            [f"{_SCHEMA}.security.security_id"],
            name="fk_security_rank_security_id_security",
        ),
        schema=_SCHEMA,
    )


def downgrade() -> None:
    """Revert the migration."""
    op.drop_table("security_rank", schema=_SCHEMA)
    op.drop_index(
        "ix_security_metric_daily_metric_date",
        table_name="security_metric_daily",
        schema=_SCHEMA,
    )
    op.drop_table("security_metric_daily", schema=_SCHEMA)
    op.drop_index("ix_security_company_id", table_name="security", schema=_SCHEMA)
    op.drop_table("security", schema=_SCHEMA)
    op.drop_table("company", schema=_SCHEMA)
