# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Offline (SQL script) rendering of the Alembic migrations."""

from __future__ import annotations

import io
from pathlib import Path

from alembic import command
from alembic.config import Config

from valuescope_api.config.settings import get_settings

_MIGRATIONS = Path(__file__).resolve().parents[3] / "migrations"


def _render_upgrade() -> str:
    buffer = io.StringIO()
    cfg = Config(output_buffer=buffer)
    cfg.set_main_option("script_location", str(_MIGRATIONS))
    get_settings.cache_clear()
    command.upgrade(cfg, "head", sql=True)
    return buffer.getvalue()


def test_offline_upgrade_renders_every_revision_with_public_version_table() -> None:
    sql = _render_upgrade()

    assert "CREATE TABLE public.alembic_version" in sql
    assert "CREATE TABLE public.security_rank" in sql
    assert "ALTER TABLE public.security_rank ADD COLUMN value NUMERIC(30, 8)" in sql
    assert "CREATE INDEX ix_security_rank_metric_date_rank" in sql
    assert "UPDATE public.alembic_version" in sql
    assert "'20261019_0002'" in sql
