# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Dependency wiring for the analytics controller.

Purpose:
    Provide the FastAPI dependency that builds an :class:`AnalyticsController`
    from the SQLAlchemy repositories and the analytics settings. Tests
    override :func:`get_analytics_controller` with a fake controller.

Layer:
    dependencies
"""

from __future__ import annotations

from valuescope_api.adapters.controllers.analytics_controller import AnalyticsController
from valuescope_api.adapters.repositories.company_repository import SqlAlchemyCompanyRepository
from valuescope_api.adapters.repositories.ranking_repository import SqlAlchemyRankingRepository
from valuescope_api.adapters.repositories.security_series_repository import (
    SqlAlchemySecuritySeriesRepository,
)
from valuescope_api.application.use_cases.analytics.get_company_aggregated_history import (
    GetCompanyAggregatedHistoryUseCase,
)
from valuescope_api.application.use_cases.analytics.get_distribution import GetDistributionUseCase
from valuescope_api.application.use_cases.analytics.get_period_analysis import (
    GetPeriodAnalysisUseCase,
)
from valuescope_api.application.use_cases.analytics.get_rankings import (
    GetRankingContextUseCase,
    GetTopRankedUseCase,
)
from valuescope_api.application.use_cases.analytics.resolve_selection import (
    ResolveSelectionUseCase,
    TransitionSelectionUseCase,
)
from valuescope_api.config.settings import get_settings
from valuescope_api.infrastructure.database.session import get_sessionmaker


def get_analytics_controller() -> AnalyticsController:
    """Return an analytics controller wired to the database.

    Repositories are cheap wrappers around the global session factory, so a
    fresh controller per request costs nothing beyond object construction.
    """
    settings = get_settings()
    factory = get_sessionmaker()

    companies = SqlAlchemyCompanyRepository(factory)
    series = SqlAlchemySecuritySeriesRepository(factory)
    ranking = SqlAlchemyRankingRepository(factory)
    concurrency = settings.analytics_fetch_concurrency

    return AnalyticsController(
        history=GetCompanyAggregatedHistoryUseCase(companies, series, max_concurrency=concurrency),
        analysis=GetPeriodAnalysisUseCase(companies, series, ranking, max_concurrency=concurrency),
        distribution=GetDistributionUseCase(
            companies,
            series,
            max_concurrency=concurrency,
            default_bins=settings.histogram_default_bins,
            max_bins=settings.histogram_max_bins,
        ),
        selection=ResolveSelectionUseCase(companies),
        transition=TransitionSelectionUseCase(
            companies,
            base_path=settings.navigation_base_path,
        ),
        ranking_context=GetRankingContextUseCase(companies, ranking),
        top_ranked=GetTopRankedUseCase(ranking),
    )
