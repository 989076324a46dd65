# src/valuescope_api/infrastructure/observability/metrics_analytics.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Valuation analytics observability helpers and Prometheus metrics.

This module centralizes the Prometheus metrics emitted by the analytics use
cases and the readiness check.

Exports
-------
Core collectors (names are part of the public contract and must remain stable):

* ``valuescope_analytics_usecase_latency_seconds`` (Histogram)
* ``valuescope_analytics_fetch_failures_total`` (Counter)
* ``valuescope_analytics_points_total`` (Counter)
* ``valuescope_readyz_db_latency_seconds`` (Histogram)

Helpers:

* :func:`observe_usecase` - context manager timing one use-case execution.
* ``get_*`` accessors returning the underlying collectors.

Design
------
All collectors are created against the *current* default registry
(:data:`prometheus_client.REGISTRY`). If a collector with the same name
already exists there, the existing instance is reused instead of registering
a duplicate, which keeps module re-imports and registry swaps in tests safe.
"""

from __future__ import annotations

from collections.abc import Generator, Sequence
from contextlib import contextmanager, suppress
from dataclasses import dataclass, field
from time import perf_counter

import prometheus_client as prom
from prometheus_client import Counter, Histogram
from prometheus_client.registry import CollectorRegistry


def _get_or_create_histogram(
    name: str,
    doc: str,
    labelnames: Sequence[str] | None = None,
    buckets: Sequence[float] | None = None,
) -> Histogram:
    """Return a histogram bound to the current default registry.

    Args:
        name: Metric name.
        doc: Human-readable metric description.
        labelnames: Optional iterable of label names.
        buckets: Optional bucket boundaries; library defaults otherwise.

    Returns:
        A :class:`Histogram` bound to the current :data:`prom.REGISTRY`.
    """
    registry: CollectorRegistry = prom.REGISTRY
    mapping = getattr(registry, "_names_to_collectors", {})  # internal but stable
    existing = mapping.get(name)
    if isinstance(existing, Histogram):
        return existing

    labels = tuple(labelnames) if labelnames is not None else ()
    try:
        if buckets is not None:
            return Histogram(name, doc, labels, registry=registry, buckets=tuple(buckets))
        return Histogram(name, doc, labels, registry=registry)
    except ValueError as exc:
        if "Duplicated timeseries" in str(exc):
            again = getattr(registry, "_names_to_collectors", {}).get(name)
            if isinstance(again, Histogram):
                return again
        raise


def _get_or_create_counter(
    name: str,
    doc: str,
    labelnames: Sequence[str] | None = None,
) -> Counter:
    """Return a counter bound to the current default registry.

    Mirrors :func:`_get_or_create_histogram` for :class:`Counter` collectors.
    """
    registry: CollectorRegistry = prom.REGISTRY
    mapping = getattr(registry, "_names_to_collectors", {})
    # Counters register under both the base name and the ``_total`` sample name.
    existing = mapping.get(name) or mapping.get(name.removesuffix("_total"))
    if isinstance(existing, Counter):
        return existing

    labels = tuple(labelnames) if labelnames is not None else ()
    try:
        return Counter(name, doc, labels, registry=registry)
    except ValueError as exc:
        if "Duplicated timeseries" in str(exc):
            mapping = getattr(registry, "_names_to_collectors", {})
            again = mapping.get(name) or mapping.get(name.removesuffix("_total"))
            if isinstance(again, Counter):
                return again
        raise


# ---------------------------------------------------------------------------
# Core metrics
# ---------------------------------------------------------------------------

analytics_usecase_latency_seconds: Histogram = _get_or_create_histogram(
    "valuescope_analytics_usecase_latency_seconds",
    "Latency of valuation analytics use cases (seconds).",
    labelnames=("use_case", "outcome"),
)

analytics_fetch_failures_total: Counter = _get_or_create_counter(
    "valuescope_analytics_fetch_failures_total",
    "Per-security history fetches that failed and were dropped from an aggregate.",
    labelnames=("metric",),
)

analytics_points_total: Counter = _get_or_create_counter(
    "valuescope_analytics_points_total",
    "Aggregated points produced by analytics use cases.",
    labelnames=("use_case",),
)

readyz_db_latency_seconds: Histogram = _get_or_create_histogram(
    "valuescope_readyz_db_latency_seconds",
    "Latency of the readiness database check (seconds).",
)


# ---------------------------------------------------------------------------
# Observation context manager
# ---------------------------------------------------------------------------


@dataclass
class UseCaseObservation:
    """State captured while observing a use-case execution.

    Attributes:
        use_case: Use-case label (e.g. ``"company_history"``).
        start: Monotonic start time in seconds.
        outcome: ``"success"`` or ``"error"``.
        points: Number of points produced, recorded on exit when > 0.
    """

    use_case: str
    start: float = field(default_factory=perf_counter)
    outcome: str = "success"
    points: int = 0


@contextmanager
def observe_usecase(use_case: str) -> Generator[UseCaseObservation, None, None]:
    """Observe one analytics use-case execution.

    Records a latency sample labelled with the outcome and, when the caller
    sets :attr:`UseCaseObservation.points`, increments the points counter.

    Args:
        use_case: Use-case label.

    Yields:
        A mutable :class:`UseCaseObservation`.
    """
    obs = UseCaseObservation(use_case=use_case)
    try:
        yield obs
    except Exception:
        obs.outcome = "error"
        raise
    finally:
        elapsed = perf_counter() - obs.start
        with suppress(Exception):
            analytics_usecase_latency_seconds.labels(
                use_case=obs.use_case,
                outcome=obs.outcome,
            ).observe(elapsed)
            if obs.points > 0:
                analytics_points_total.labels(use_case=obs.use_case).inc(obs.points)


def inc_fetch_failure(metric: str) -> None:
    """Count one dropped per-security fetch for ``metric``."""
    with suppress(Exception):
        analytics_fetch_failures_total.labels(metric=metric).inc()


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def get_analytics_usecase_latency_seconds() -> Histogram:
    """Return the analytics use-case latency histogram."""
    return analytics_usecase_latency_seconds


def get_analytics_fetch_failures_total() -> Counter:
    """Return the dropped-fetch counter."""
    return analytics_fetch_failures_total


def get_analytics_points_total() -> Counter:
    """Return the produced-points counter."""
    return analytics_points_total


def get_readyz_db_latency_seconds() -> Histogram:
    """Return the readiness DB check latency histogram."""
    return readyz_db_latency_seconds


__all__ = [
    "UseCaseObservation",
    "analytics_fetch_failures_total",
    "analytics_points_total",
    "analytics_usecase_latency_seconds",
    "get_analytics_fetch_failures_total",
    "get_analytics_points_total",
    "get_analytics_usecase_latency_seconds",
    "get_readyz_db_latency_seconds",
    "inc_fetch_failure",
    "observe_usecase",
    "readyz_db_latency_seconds",
]
