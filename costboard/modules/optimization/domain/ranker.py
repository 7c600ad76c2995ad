"""
Recommendation Ranker

Filters optimization recommendations by category and orders them for
display. The headline savings figure is deliberately computed over the
unfiltered list so it always reflects every opportunity.
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Sequence

import structlog

from costboard.schemas.recommendations import OptimizationRecommendation, RankBy, RecommendationType
from costboard.shared.core.validation import coerce_enum, coerce_optional_enum

logger = structlog.get_logger()

HIGH_PRIORITY = 1


class RecommendationRanker:

    @staticmethod
    def rank(
        recs: Sequence[OptimizationRecommendation],
        filter_type: Any = None,
        sort_by: Any = RankBy.PRIORITY
    ) -> List[OptimizationRecommendation]:
        """
        Returns a new list; the input sequence is never reordered.
        Priority sorts ascending (1 first), savings sorts descending.
        Ties keep their input order in both modes.
        """
        selected_type = coerce_optional_enum(RecommendationType, filter_type, "filter_type")
        mode = coerce_enum(RankBy, sort_by, "sort_by")

        filtered = [r for r in recs if selected_type is None or r.type == selected_type]

        if mode == RankBy.PRIORITY:
            ranked = sorted(filtered, key=lambda r: r.priority)
        else:
            ranked = sorted(filtered, key=lambda r: r.potential_savings, reverse=True)

        logger.debug(
            "recommendations_ranked",
            total=len(recs),
            matched=len(ranked),
            sort_by=mode.value,
            filter_type=selected_type.value if selected_type else "all"
        )
        return ranked

    @staticmethod
    def total_potential_savings(recs: Iterable[OptimizationRecommendation]) -> Decimal:
        """Sum of potential savings across all recommendations, before any filter."""
        return sum((r.potential_savings for r in recs), Decimal("0"))

    @staticmethod
    def high_priority(recs: Iterable[OptimizationRecommendation]) -> List[OptimizationRecommendation]:
        return [r for r in recs if r.priority == HIGH_PRIORITY]

    @staticmethod
    def savings_by_type(recs: Iterable[OptimizationRecommendation]) -> Dict[RecommendationType, Decimal]:
        totals = {rec_type: Decimal("0") for rec_type in RecommendationType}
        for r in recs:
            totals[r.type] += r.potential_savings
        return totals
