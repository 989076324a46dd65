# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""HTTP tests for the security page analytics endpoints."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from valuescope_api.adapters.controllers.analytics_controller import AnalyticsController
from valuescope_api.dependencies.analytics import get_analytics_controller

pytestmark = pytest.mark.anyio

_BASE = "/v1/securities"


async def test_analysis_on_common_page_shows_the_company(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005930/metrics/marketcap/analysis",
        params=[("windows", "current"), ("windows", "12m")],
    )

    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["selection"] == {
        "mode": "aggregate",
        "focused_security_id": None,
        "highlighted_entity_id": "aggregate",
        "source": "url",
    }
    assert data["entity_id"] == "aggregate"
    assert data["as_of"] == "2023-06-01"
    assert data["latest_value"] == "150"
    assert [p["label"] for p in data["periods"]] == ["current", "12m"]
    assert data["periods"][0]["value"] == "150"
    assert data["min"] == "100" and data["max"] == "150"
    assert data["rank"] == {"current": 1, "prior": 2, "delta": -1}


async def test_analysis_with_focus_signal_shows_the_common_class(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005930/metrics/marketcap/analysis",
        params={"focus": "stock"},
    )

    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["selection"]["mode"] == "focused"
    assert data["selection"]["highlighted_entity_id"] == "S005930"
    assert data["latest_value"] == "120"
    assert data["rank"]["delta"] == 0


async def test_ratio_analysis_on_common_page_shows_the_common_class(app_client: AsyncClient) -> None:
    r = await app_client.get(f"{_BASE}/KRX.005930/metrics/per/analysis")

    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["selection"]["mode"] == "aggregate"
    assert data["entity_id"] == "S005930"
    assert data["latest_value"] == "10"
    assert data["rank"] == {"current": 1, "prior": 1, "delta": 0}


async def test_analysis_rejects_unknown_window(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005930/metrics/marketcap/analysis",
        params={"windows": "7w"},
    )

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_PERIOD_WINDOW"


@pytest.mark.parametrize(
    ("sec_code", "status", "code"),
    [
        ("005930", 400, "INVALID_SECURITY_CODE"),
        ("KRX.999999", 404, "SECURITY_NOT_FOUND"),
    ],
)
async def test_security_code_errors(
    app_client: AsyncClient,
    sec_code: str,
    status: int,
    code: str,
) -> None:
    r = await app_client.get(f"{_BASE}/{sec_code}/selection")

    assert r.status_code == status
    err = r.json()["error"]
    assert err["code"] == code
    assert err["trace_id"] == r.headers["X-Request-ID"]


async def test_distribution_histogram_uses_metric_default_width(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005930/metrics/div/distribution",
        params={"kind": "histogram"},
    )

    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["kind"] == "histogram"
    assert data["bin_width"] == "0.5"
    assert data["histogram"] == [{"start": "2.0", "end": "2.5", "count": 3}]
    assert data["heatmap"] is None and data["growth"] is None


async def test_distribution_growth(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005930/metrics/div/distribution",
        params={"kind": "growth"},
    )

    assert r.status_code == 200, r.text
    rates = [g["rate"] for g in r.json()["data"]["growth"]]
    assert rates == [None, "25.00", "0"]


async def test_distribution_heatmap_is_default(app_client: AsyncClient) -> None:
    r = await app_client.get(f"{_BASE}/KRX.005930/metrics/div/distribution")

    assert r.status_code == 200, r.text
    rows = r.json()["data"]["heatmap"]
    assert [row["month"] for row in rows] == [12]
    assert [c["year"] for c in rows[0]["cells"]] == [2021, 2022, 2023]


@pytest.mark.parametrize("bin_width", ["0", "-0.5"])
async def test_distribution_rejects_non_positive_bin_width(
    app_client: AsyncClient,
    bin_width: str,
) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005930/metrics/div/distribution",
        params={"kind": "histogram", "bin_width": bin_width},
    )

    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_distribution_rejects_bin_width_too_narrow_for_range(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005930/metrics/marketcap/distribution",
        params={"kind": "histogram", "bin_width": "0.0001"},
    )

    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "INVALID_BIN_WIDTH"
    assert err["details"]["max_bins"] == 1000


async def test_distribution_resampled_by_month(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005930/metrics/marketcap/distribution",
        params={"kind": "resampled", "period": "1M"},
    )

    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["period"] == "1M"
    assert data["resampled"] == [
        {"date": "2023-01-01", "value": "100"},
        {"date": "2023-06-01", "value": "150"},
    ]


async def test_distribution_rejects_unknown_resample_period(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005930/metrics/marketcap/distribution",
        params={"kind": "resampled", "period": "2W"},
    )

    assert r.status_code == 422


async def test_ranking_neighbourhood_of_the_preferred_class(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005935/metrics/marketcap/ranking",
        params={"radius": 1},
    )

    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["security_id"] == "S005935"
    assert data["current_rank"] == 12
    assert data["rank_date"] == "2023-06-01"
    assert [(e["rank"], e["sec_code"]) for e in data["entries"]] == [
        (11, "KRX.000011"),
        (12, "KRX.005935"),
    ]
    assert data["entries"][1]["value"] == "30"


async def test_ranking_neighbourhood_rejects_negative_radius(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005930/metrics/marketcap/ranking",
        params={"radius": -1},
    )

    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_selection_on_preferred_page_is_focused(app_client: AsyncClient) -> None:
    r = await app_client.get(f"{_BASE}/KRX.005935/selection")

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["mode"] == "focused"
    assert data["focused_security_id"] == "S005935"


async def test_transition_to_common_carries_focus(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005935/selection/transition",
        params={"target": "S005930", "metric": "per"},
    )

    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["selection"]["source"] == "click"
    assert data["path"] == "/security/KRX.005930/per"
    assert data["target"] == "/security/KRX.005930/per?focus=stock"


async def test_transition_to_aggregate_drops_focus(app_client: AsyncClient) -> None:
    r = await app_client.get(
        f"{_BASE}/KRX.005935/selection/transition",
        params={"target": "aggregate"},
    )

    data = r.json()["data"]
    assert data["selection"]["mode"] == "aggregate"
    assert data["focus"] is False
    assert data["target"] == "/security/KRX.005930/marketcap"


async def test_unexpected_failure_is_internal_error(app: FastAPI, app_client: AsyncClient) -> None:
    app.dependency_overrides[get_analytics_controller] = lambda: AnalyticsController()

    r = await app_client.get(f"{_BASE}/KRX.005930/selection")

    assert r.status_code == 500
    err = r.json()["error"]
    assert err["code"] == "INTERNAL_ERROR"
    assert err["details"] == {"reason": "RuntimeError"}
