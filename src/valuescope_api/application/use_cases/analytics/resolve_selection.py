# src/valuescope_api/application/use_cases/analytics/resolve_selection.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Use cases: Selection state on page load and after a user selection.

Layer:
    application

Notes:
    - Both use cases are read-only and keep no state between calls; the
      caller holds the latest :class:`SelectionState`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from valuescope_api.application.use_cases.analytics.security_context import (
    SecurityContext,
    resolve_security_context,
)
from valuescope_api.domain.entities.selection import SelectionState, SelectionTransition
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.interfaces.repositories.company_repository import CompanyRepository
from valuescope_api.domain.services.selection_state_machine import resolve_initial, transition

logger = logging.getLogger(__name__)

DEFAULT_NAVIGATION_BASE_PATH = "security"


@dataclass(frozen=True)
class ResolveSelectionRequest:
    """Navigation context of a security page."""

    sec_code: str
    focus: bool = False


@dataclass(frozen=True)
class ResolvedSelection:
    context: SecurityContext
    state: SelectionState


class ResolveSelectionUseCase:
    """Derive the initial selection state from a page's navigation context."""

    def __init__(self, companies: CompanyRepository) -> None:
        self._companies = companies

    async def execute(self, req: ResolveSelectionRequest) -> ResolvedSelection:
        logger.info(
            "analytics.selection.start",
            extra={"extra": {"sec_code": req.sec_code, "focus": req.focus}},
        )
        context = await resolve_security_context(self._companies, req.sec_code)
        state = resolve_initial(context.share_classes, context.security_id, req.focus)
        logger.info(
            "analytics.selection.success",
            extra={
                "extra": {
                    "sec_code": req.sec_code,
                    "aggregate": state.is_aggregate,
                    "focused_id": state.focused_id,
                },
            },
        )
        return ResolvedSelection(context=context, state=state)


@dataclass(frozen=True)
class TransitionSelectionRequest:
    """A user selection on a security page.

    Attributes:
        sec_code: ``EXCHANGE.TICKER`` of the page the user is on.
        target: Clicked security id, or ``"aggregate"`` for the summary control.
        metric: Metric of the current page, kept on navigation.
    """

    sec_code: str
    target: str
    metric: ValuationMetric


@dataclass(frozen=True)
class SelectionOutcome:
    context: SecurityContext
    transition: SelectionTransition


class TransitionSelectionUseCase:
    """Apply a user selection and compute the navigation it requires."""

    def __init__(
        self,
        companies: CompanyRepository,
        *,
        base_path: str = DEFAULT_NAVIGATION_BASE_PATH,
    ) -> None:
        self._companies = companies
        self._base_path = base_path

    async def execute(self, req: TransitionSelectionRequest) -> SelectionOutcome:
        logger.info(
            "analytics.selection_transition.start",
            extra={
                "extra": {
                    "sec_code": req.sec_code,
                    "target": req.target,
                    "metric": req.metric.value,
                },
            },
        )
        context = await resolve_security_context(self._companies, req.sec_code)
        result = transition(
            context.share_classes,
            req.target,
            base_path=self._base_path,
            metric=req.metric,
        )
        logger.info(
            "analytics.selection_transition.success",
            extra={
                "extra": {
                    "sec_code": req.sec_code,
                    "target": req.target,
                    "navigate_to": result.intent.target if result.intent else None,
                },
            },
        )
        return SelectionOutcome(context=context, transition=result)
