"""Ranking boards: store the ranked value and index ranks per metric/date.

Revision ID: 20261019_0002
Revises: 20261019_0001
Create Date: 2026-10-19

This migration:
  * Adds public.security_rank.value (the metric value behind the rank).
  * Adds ix_security_rank_metric_date_rank for top-N and neighbourhood reads.
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_0002"
down_revision: str | None = "20261019_0001"
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None

_SCHEMA = "public"


def upgrade() -> None:
    """Apply the migration."""
    op.add_column(
        "security_rank",
        sa.Column("value", sa.Numeric(30, 8), nullable=True),
        schema=_SCHEMA,
    )
    op.create_index(
        "ix_security_rank_metric_date_rank",
        "security_rank",
        ["metric", "rank_date", "rank"],
        schema=_SCHEMA,
    )


def downgrade() -> None:
    """Revert the migration."""
    op.drop_index(
        "ix_security_rank_metric_date_rank",
        table_name="security_rank",
        schema=_SCHEMA,
    )
    op.drop_column("security_rank", "value", schema=_SCHEMA)
