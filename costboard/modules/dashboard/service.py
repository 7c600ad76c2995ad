"""
Dashboard Domain Service
Composes the analytics components into the executive and admin view-models.
"""

from decimal import Decimal
from typing import Any, Mapping, Optional, Union

import structlog

from costboard.modules.inventory.domain.query import ResourceQueryEngine
from costboard.modules.optimization.domain.ranker import RecommendationRanker
from costboard.modules.reporting.domain.aggregator import CostAggregator
from costboard.modules.reporting.domain.executive import build_executive_kpis
from costboard.modules.reporting.domain.summary import SummaryBuilder
from costboard.modules.reporting.domain.trends import TrendSummarizer
from costboard.schemas.costs import Platform
from costboard.schemas.dashboard import AdminView, DashboardSnapshot, ExecutiveView
from costboard.schemas.recommendations import RankBy
from costboard.schemas.resources import ResourceQuery
from costboard.shared.core.config import Settings, get_settings
from costboard.shared.core.exceptions import InvalidParameterError
from costboard.shared.core.validation import coerce_optional_enum

logger = structlog.get_logger()


class DashboardService:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def monthly_trend(self, snapshot: DashboardSnapshot) -> Decimal:
        """Period-over-period change of the snapshot's trend, 0 when it is too short to compare."""
        if len(snapshot.trend) < 2:
            logger.info("trend_too_short_for_comparison", points=len(snapshot.trend))
            return Decimal("0")
        return TrendSummarizer.period_over_period_change(snapshot.trend, settings=self.settings)

    def executive_view(self, snapshot: DashboardSnapshot, platform: Any = None) -> ExecutiveView:
        """
        Builds the executive view.

        `platform` narrows the cost and platform chart series only; the
        summary and KPIs always cover the whole snapshot.
        """
        summary = SummaryBuilder.build_summary(
            snapshot.cost_records, self.monthly_trend(snapshot), settings=self.settings
        )
        trend_stats = (
            TrendSummarizer.summarize(snapshot.trend, settings=self.settings)
            if snapshot.trend else None
        )
        chart_records = CostAggregator.filter_by_platform(snapshot.cost_records, platform)

        view = ExecutiveView(
            summary=summary,
            trend=trend_stats,
            kpis=build_executive_kpis(summary, snapshot.recommendations, settings=self.settings),
            recommendations=tuple(
                RecommendationRanker.rank(snapshot.recommendations, sort_by=RankBy.SAVINGS)
            ),
            cost_series=tuple(CostAggregator.cost_series(chart_records)),
            platform_series=tuple(CostAggregator.platform_series(chart_records))
        )
        logger.info(
            "executive_view_built",
            recommendations=len(view.recommendations),
            chart_points=len(view.cost_series)
        )
        return view

    def admin_view(
        self,
        snapshot: DashboardSnapshot,
        query: Optional[Union[ResourceQuery, Mapping[str, Any]]] = None,
        platform: Any = None,
        recommendation_type: Any = None
    ) -> AdminView:
        """
        Builds the admin view.

        `platform` narrows the per-type cost groups and the resource page.
        A query that already names a different platform is rejected. The
        summary always covers the whole snapshot.
        """
        summary = SummaryBuilder.build_summary(
            snapshot.cost_records, self.monthly_trend(snapshot), settings=self.settings
        )
        chart_records = CostAggregator.filter_by_platform(snapshot.cost_records, platform)
        groups = CostAggregator.aggregate_by_platform_and_type(chart_records)

        view = AdminView(
            summary=summary,
            cost_groups=tuple(groups.values()),
            recommendations=tuple(
                RecommendationRanker.rank(snapshot.recommendations, filter_type=recommendation_type)
            ),
            total_potential_savings=RecommendationRanker.total_potential_savings(snapshot.recommendations),
            resources=ResourceQueryEngine.query(snapshot.resources, self._scope_query(query, platform))
        )
        logger.info(
            "admin_view_built",
            cost_groups=len(view.cost_groups),
            resources_matched=view.resources.total_matched
        )
        return view

    @staticmethod
    def _scope_query(
        query: Optional[Union[ResourceQuery, Mapping[str, Any]]],
        platform: Any
    ) -> ResourceQuery:
        """Applies the view's platform selection to the inventory query."""
        selected = coerce_optional_enum(Platform, platform, "platform")
        if query is None:
            query = ResourceQuery()
        elif not isinstance(query, ResourceQuery):
            query = ResourceQuery(**query)
        if selected is None:
            return query

        if query.platform is None:
            return query.model_copy(update={"platform": selected})
        if query.platform != selected:
            raise InvalidParameterError(
                "platform",
                selected.value,
                message=(
                    f"Platform '{selected.value}' conflicts with the query's "
                    f"platform '{query.platform.value}'."
                )
            )
        return query
