# src/valuescope_api/domain/enums/valuation_metric.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Valuation metric enumeration.

Purpose:
    Define the stable set of per-security valuation metrics the analytics
    engine works on. Values double as URL path segments and storage keys.

Layer:
    domain

Notes:
    - ``DIV`` is the dividend yield in percent; ``DPS`` is dividend per share.
    - ``CLOSE`` is the daily close price; ``MARKETCAP`` is market value in KRW.
"""

from __future__ import annotations

from enum import Enum


class ValuationMetric(str, Enum):
    """Per-security valuation metrics tracked over time."""

    MARKETCAP = "marketcap"
    CLOSE = "close"
    PER = "per"
    PBR = "pbr"
    BPS = "bps"
    EPS = "eps"
    DPS = "dps"
    DIV = "div"

    @property
    def is_additive(self) -> bool:
        """Return True when summing across share classes is meaningful.

        Market value adds up across a company's share classes; ratios and
        per-share figures do not. Security pages never analyse their total;
        the company history carries it only as a convenience column.
        """
        return self is ValuationMetric.MARKETCAP


__all__ = ["ValuationMetric"]
