# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""
Valuation Analytics Domain Exceptions

Purpose:
    Exceptions raised by the analytics engine and its application layer.
    Data problems (malformed points, missing securities in a series) are not
    errors and never surface here; these cover programmer errors and
    lookups that cannot be resolved. Mapped to HTTP by adapters.

Layer: domain/exceptions
"""
from __future__ import annotations

from .base import DomainError


class InvalidPeriodWindowError(DomainError):
    """A period window definition is malformed (negative months, blank or duplicate label)."""

    code = "INVALID_PERIOD_WINDOW"


class InvalidBinWidthError(DomainError):
    """Histogram bin width is not positive, or too narrow for the series range."""

    code = "INVALID_BIN_WIDTH"


class SecurityNotFound(DomainError):
    """No listed security matches the requested code."""

    code = "SECURITY_NOT_FOUND"


class CompanyNotFound(DomainError):
    """No company matches the requested identifier, or it has no share classes."""

    code = "COMPANY_NOT_FOUND"


class InvalidSecurityCodeError(DomainError):
    """Security code is not of the form ``EXCHANGE.TICKER``."""

    code = "INVALID_SECURITY_CODE"
