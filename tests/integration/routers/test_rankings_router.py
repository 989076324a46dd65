# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""HTTP tests for the market-wide ranking endpoint."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.anyio


async def test_top_ranked_lists_the_head_of_the_board(app_client: AsyncClient) -> None:
    r = await app_client.get("/v1/rankings/marketcap", params={"limit": 2})

    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["metric"] == "marketcap"
    assert data["security_id"] is None and data["current_rank"] is None
    assert [(e["rank"], e["sec_code"], e["name"]) for e in data["entries"]] == [
        (1, "KRX.005930", "삼성전자"),
        (2, "KRX.000002", ""),
    ]


async def test_metric_without_a_board_returns_no_entries(app_client: AsyncClient) -> None:
    r = await app_client.get("/v1/rankings/per")

    assert r.status_code == 200
    assert r.json()["data"] == {
        "metric": "per",
        "rank_date": None,
        "security_id": None,
        "current_rank": None,
        "entries": [],
    }


@pytest.mark.parametrize("limit", [0, 101])
async def test_limit_out_of_range_is_rejected(app_client: AsyncClient, limit: int) -> None:
    r = await app_client.get("/v1/rankings/marketcap", params={"limit": limit})

    assert r.status_code == 422
