"""
Trend Summarizer

Reduces a series of daily cost points into the headline statistics shown
next to the trend chart, and derives the period-over-period change that
feeds the cost summary.
"""

from decimal import Decimal
from typing import Optional, Sequence

import structlog

from costboard.modules.reporting.domain.aggregator import CostAggregator
from costboard.schemas.trends import TrendPoint, TrendStatistics
from costboard.shared.core.config import Settings, get_settings
from costboard.shared.core.exceptions import EmptyInputError, InsufficientDataError
from costboard.shared.core.validation import coerce_positive_int

logger = structlog.get_logger()


class TrendSummarizer:
    """Pure reductions over an ordered sequence of TrendPoints."""

    @staticmethod
    def summarize(points: Sequence[TrendPoint], settings: Optional[Settings] = None) -> TrendStatistics:
        """
        Average, extremes and projected monthly spend of the daily totals.
        No date validation is performed; gaps in the series are the data
        source's concern.
        """
        if not points:
            raise EmptyInputError("Cannot summarize a trend with no points.", details={"points": 0})

        settings = settings or get_settings()
        totals = [p.total for p in points]
        average = sum(totals, Decimal("0")) / len(totals)

        stats = TrendStatistics(
            average=average,
            max=max(totals),
            min=min(totals),
            projected_monthly=average * settings.PROJECTION_DAYS,
            points=len(totals)
        )
        logger.debug("trend_summarized", points=len(totals))
        return stats

    @staticmethod
    def period_over_period_change(
        points: Sequence[TrendPoint],
        window_days: Optional[int] = None,
        settings: Optional[Settings] = None
    ) -> Decimal:
        """
        Signed percentage change of the latest window versus the window before it.

        The window shrinks to half the series when fewer than 2 * window_days
        points are available. A zero previous window yields 0.
        """
        settings = settings or get_settings()
        if window_days is None:
            window_days = settings.TREND_WINDOW_DAYS
        window_days = coerce_positive_int(window_days, "window_days")

        ordered = sorted(points, key=lambda p: p.date)
        window = min(window_days, len(ordered) // 2)
        if window < 1:
            raise InsufficientDataError(
                "At least two trend points are required to compare periods.",
                details={"points": len(ordered), "window_days": window_days}
            )

        current = sum((p.total for p in ordered[-window:]), Decimal("0"))
        previous = sum((p.total for p in ordered[-2 * window:-window]), Decimal("0"))

        change = current - previous
        logger.info(
            "period_trend_computed",
            window=window,
            current=str(current),
            previous=str(previous)
        )
        # percentage_of_total is zero-safe for an empty previous window
        return CostAggregator.percentage_of_total(change, previous, settings=settings)
