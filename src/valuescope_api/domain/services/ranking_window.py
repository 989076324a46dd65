# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Rank window arithmetic for ranking neighbourhoods."""

from __future__ import annotations

DEFAULT_CONTEXT_RADIUS = 5
DEFAULT_TOP_LIMIT = 10


def neighbour_window(rank: int, radius: int) -> tuple[int, int]:
    """Return the inclusive rank range ``radius`` places around ``rank``.

    The range never starts above the top of the board, so a security ranked
    2nd with a radius of 5 gets ranks 1 to 7.

    Raises:
        ValueError: If ``rank`` is below 1 or ``radius`` is negative.
    """
    if rank < 1:
        raise ValueError(f"rank must be >= 1 (got {rank})")
    if radius < 0:
        raise ValueError(f"radius must be >= 0 (got {radius})")
    return max(1, rank - radius), rank + radius


__all__ = ["DEFAULT_CONTEXT_RADIUS", "DEFAULT_TOP_LIMIT", "neighbour_window"]
