from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

import structlog

from costboard.modules.reporting.domain.aggregator import CostAggregator
from costboard.schemas.costs import CostRecord, CostSummary, Platform, PlatformCosts
from costboard.shared.core.config import Settings, get_settings
from costboard.shared.core.exceptions import InsufficientDataError
from costboard.shared.core.validation import coerce_amount

logger = structlog.get_logger()


class SummaryBuilder:
    """Builds the cost summary card from a snapshot of cost records."""

    @staticmethod
    def build_summary(
        records: Sequence[CostRecord],
        trend_percent: Any,
        settings: Optional[Settings] = None
    ) -> CostSummary:
        """
        Combines platform totals, the top cost drivers and the supplied
        period-over-period trend into a single CostSummary.

        Top drivers are ordered by cost descending; equal costs keep their
        input order.
        """
        if not records:
            raise InsufficientDataError(
                "A cost summary needs at least one cost record.",
                details={"records": 0}
            )

        settings = settings or get_settings()
        trend = coerce_amount(trend_percent, "trend_percent", minimum=None)

        totals = CostAggregator.totals_by_platform(records)
        breakdown = PlatformCosts(aws=totals[Platform.AWS], azure=totals[Platform.AZURE])

        # sorted() is stable, reverse=True keeps first-seen order for ties
        drivers = sorted(records, key=lambda r: r.cost, reverse=True)[:settings.TOP_COST_DRIVERS]

        summary = CostSummary(
            total_cost=sum(totals.values(), Decimal("0")),
            monthly_trend=trend,
            top_cost_drivers=tuple(drivers),
            platform_breakdown=breakdown
        )

        logger.info(
            "cost_summary_built",
            records=len(records),
            top_drivers=len(drivers),
            total_cost=str(summary.total_cost)
        )
        return summary

    @staticmethod
    def platform_shares(summary: CostSummary, settings: Optional[Settings] = None) -> Dict[Platform, Decimal]:
        """Each platform's percentage of the summary's total cost."""
        return {
            platform: CostAggregator.percentage_of_total(
                summary.platform_breakdown.get(platform), summary.total_cost, settings=settings
            )
            for platform in Platform
        }
