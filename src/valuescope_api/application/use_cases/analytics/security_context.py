# src/valuescope_api/application/use_cases/analytics/security_context.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Shared resolution of a security code to its company context.

Every security-scoped analytics use case starts the same way: parse the
``EXCHANGE.TICKER`` code, look the listing up, and load the issuing
company's share classes in display order.
"""

from __future__ import annotations

from dataclasses import dataclass

from valuescope_api.domain.entities.share_class import ShareClass
from valuescope_api.domain.exceptions.analytics import SecurityNotFound
from valuescope_api.domain.interfaces.repositories.company_repository import (
    CompanyRepository,
    SecurityRef,
)
from valuescope_api.domain.services.share_classes import order_share_classes, split_sec_code


@dataclass(frozen=True)
class SecurityContext:
    """A resolved security plus its company's ordered share classes."""

    security: SecurityRef
    share_classes: tuple[ShareClass, ...]

    @property
    def security_id(self) -> str:
        return self.security.security_id

    @property
    def company_id(self) -> str:
        return self.security.company_id


async def resolve_security_context(companies: CompanyRepository, sec_code: str) -> SecurityContext:
    """Resolve ``sec_code`` and load its company's share classes.

    Raises:
        InvalidSecurityCodeError: If ``sec_code`` is malformed.
        SecurityNotFound: If no listing matches ``sec_code``.
    """
    exchange, ticker = split_sec_code(sec_code)
    security = await companies.get_security_by_code(exchange, ticker)
    if security is None:
        raise SecurityNotFound(
            f"Security {sec_code!r} not found.",
            details={"exchange": exchange, "ticker": ticker},
        )
    share_classes = order_share_classes(await companies.list_share_classes(security.company_id))
    return SecurityContext(security=security, share_classes=share_classes)
