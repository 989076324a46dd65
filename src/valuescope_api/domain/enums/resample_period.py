# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Resampling periods for metric series."""

from __future__ import annotations

from enum import Enum


class ResamplePeriod(str, Enum):
    """Bucket size used to resample a daily series.

    Weekly buckets follow ISO weeks (Monday start), so the first days of
    January can belong to the previous ISO year.
    """

    DAY = "1D"
    WEEK = "1W"
    MONTH = "1M"
    YEAR = "1Y"


__all__ = ["ResamplePeriod"]
