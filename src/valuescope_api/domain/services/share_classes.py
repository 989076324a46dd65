# src/valuescope_api/domain/services/share_classes.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Share-class ordering helpers.

Purpose:
    Deterministic ordering of a company's share classes (common first, then
    preferred classes by type label, then the rest) and lookup of the
    representative class used for company-level navigation.

Layer:
    domain
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from valuescope_api.domain.entities.share_class import ShareClass
from valuescope_api.domain.enums.share_class_type import ShareClassType
from valuescope_api.domain.exceptions.analytics import InvalidSecurityCodeError

_TYPE_RANK: dict[ShareClassType, int] = {
    ShareClassType.COMMON: 0,
    ShareClassType.PREFERRED: 1,
    ShareClassType.OTHER: 2,
}


def order_share_classes(share_classes: Iterable[ShareClass]) -> tuple[ShareClass, ...]:
    """Return share classes ordered common, preferred (by label), other; ties by ticker."""
    return tuple(
        sorted(
            share_classes,
            key=lambda sc: (_TYPE_RANK[sc.type], sc.type_label or "", sc.ticker, sc.security_id),
        ),
    )


def split_sec_code(sec_code: str) -> tuple[str, str]:
    """Split ``"EXCHANGE.TICKER"`` into an upper-cased exchange and a ticker.

    Raises:
        InvalidSecurityCodeError: If either part is missing.
    """
    exchange, sep, ticker = sec_code.strip().partition(".")
    if not sep or not exchange.strip() or not ticker.strip():
        raise InvalidSecurityCodeError(
            "Security code must look like EXCHANGE.TICKER (e.g. KRX.005930).",
            details={"sec_code": sec_code},
        )
    return exchange.strip().upper(), ticker.strip()


def find_share_class(share_classes: Iterable[ShareClass], security_id: str) -> ShareClass | None:
    """Return the share class with ``security_id``, if it belongs to the set."""
    for share_class in share_classes:
        if share_class.security_id == security_id:
            return share_class
    return None


def representative_share_class(share_classes: Sequence[ShareClass]) -> ShareClass | None:
    """Return the class that stands for the company as a whole.

    This is the first common class after ordering; companies without a
    common class fall back to the first class in order.
    """
    ordered = order_share_classes(share_classes)
    return ordered[0] if ordered else None


__all__ = [
    "find_share_class",
    "order_share_classes",
    "representative_share_class",
    "split_sec_code",
]
