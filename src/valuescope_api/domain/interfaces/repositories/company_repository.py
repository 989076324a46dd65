# src/valuescope_api/domain/interfaces/repositories/company_repository.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Domain-facing interface for company/security reference data.

This module defines:

* SecurityRef: minimal reference to one listed security and its issuer.
* CompanyRepository: protocol describing the reference-data lookups the
  analytics use cases need.

Notes:
    * This interface is persistence-agnostic. The SQLAlchemy adapter in
      ``adapters/repositories/company_repository.py`` satisfies it.
    * Raw share-class type labels are translated to
      :class:`~valuescope_api.domain.enums.share_class_type.ShareClassType`
      by implementations, never by callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from valuescope_api.domain.entities.share_class import ShareClass


@dataclass(frozen=True)
class SecurityRef:
    """Minimal reference to a listed security.

    Attributes:
        security_id: Internal security identifier.
        company_id: Issuing company identifier.
        exchange: Exchange code (e.g. ``"KRX"``).
        ticker: Exchange ticker (e.g. ``"005930"``).
    """

    security_id: str
    company_id: str
    exchange: str
    ticker: str


class CompanyRepository(Protocol):
    """Domain-level contract for company reference-data repositories."""

    async def get_security_by_code(self, exchange: str, ticker: str) -> SecurityRef | None:
        """Resolve an ``EXCHANGE.TICKER`` pair to a listed security.

        Args:
            exchange: Exchange code, case-insensitive.
            ticker: Exchange ticker.

        Returns:
            The matching :class:`SecurityRef`, or ``None`` when unknown.
        """
        raise NotImplementedError

    async def list_share_classes(self, company_id: str) -> list[ShareClass]:
        """Return every currently listed share class of a company.

        Args:
            company_id: Issuing company identifier.

        Returns:
            Share classes of the company; empty when the company is unknown.
        """
        raise NotImplementedError
