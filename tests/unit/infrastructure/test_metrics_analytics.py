# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Unit tests for analytics Prometheus collectors."""

from __future__ import annotations

import pytest
from prometheus_client import REGISTRY

from valuescope_api.infrastructure.observability.metrics_analytics import (
    _get_or_create_counter,
    _get_or_create_histogram,
    get_analytics_fetch_failures_total,
    inc_fetch_failure,
    observe_usecase,
)


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_observe_usecase_records_success_and_points() -> None:
    count = "valuescope_analytics_usecase_latency_seconds_count"
    before = _sample(count, {"use_case": "unit_ok", "outcome": "success"})
    points_before = _sample("valuescope_analytics_points_total", {"use_case": "unit_ok"})

    with observe_usecase("unit_ok") as obs:
        obs.points = 3

    assert _sample(count, {"use_case": "unit_ok", "outcome": "success"}) == before + 1
    assert _sample("valuescope_analytics_points_total", {"use_case": "unit_ok"}) == points_before + 3


def test_observe_usecase_marks_errors_and_reraises() -> None:
    count = "valuescope_analytics_usecase_latency_seconds_count"
    before = _sample(count, {"use_case": "unit_err", "outcome": "error"})

    with pytest.raises(ValueError), observe_usecase("unit_err"):
        raise ValueError("nope")

    assert _sample(count, {"use_case": "unit_err", "outcome": "error"}) == before + 1


def test_inc_fetch_failure() -> None:
    labels = {"metric": "unit_metric"}
    before = _sample("valuescope_analytics_fetch_failures_total", labels)

    inc_fetch_failure("unit_metric")

    assert _sample("valuescope_analytics_fetch_failures_total", labels) == before + 1


def test_get_or_create_reuses_registered_collectors() -> None:
    assert (
        _get_or_create_counter("valuescope_analytics_fetch_failures_total", "dup", ("metric",))
        is get_analytics_fetch_failures_total()
    )
    first = _get_or_create_histogram("valuescope_unit_histogram_seconds", "unit", buckets=(0.1, 1.0))
    second = _get_or_create_histogram("valuescope_unit_histogram_seconds", "unit")
    assert first is second
