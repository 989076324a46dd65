# src/valuescope_api/domain/entities/share_class.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Share class reference entities.

Purpose:
    Describe a company's listed securities (share classes) with the minimal
    metadata the analytics and navigation layers need.

Layer:
    domain
"""

from __future__ import annotations

from dataclasses import dataclass

from valuescope_api.domain.entities.valuation_series import AGGREGATE_ENTITY_ID
from valuescope_api.domain.enums.share_class_type import ShareClassType


@dataclass(frozen=True)
class ShareClass:
    """One listed security of a company.

    Attributes:
        security_id: Stable security identifier.
        company_id: Issuing company identifier.
        type: Share class classification.
        ticker: Exchange ticker, e.g. ``"005930"``.
        exchange: Exchange code, e.g. ``"KRX"``.
        name: Display name (Korean name preferred when available).
        type_label: Raw type label from reference data, e.g. ``"1우선주"``.
    """

    security_id: str
    company_id: str
    type: ShareClassType
    ticker: str
    exchange: str
    name: str = ""
    type_label: str | None = None

    def __post_init__(self) -> None:
        if not self.security_id.strip():
            raise ValueError("security_id must be a non-empty string")
        if self.security_id == AGGREGATE_ENTITY_ID:
            raise ValueError(
                f"security_id {AGGREGATE_ENTITY_ID!r} is reserved for the company total",
            )
        if not self.ticker.strip() or not self.exchange.strip():
            raise ValueError("ticker and exchange must be non-empty strings")

    @property
    def is_common(self) -> bool:
        return self.type is ShareClassType.COMMON

    @property
    def sec_code(self) -> str:
        """Return the ``EXCHANGE.TICKER`` code used in navigation paths."""
        return f"{self.exchange}.{self.ticker}"


__all__ = ["ShareClass"]
