"""
Executive KPIs

Headline numbers for the executive view: how much could be saved, how
urgent it is and how spend splits across providers.
"""

from decimal import Decimal
from typing import Optional, Sequence

import structlog

from costboard.modules.optimization.domain.ranker import RecommendationRanker
from costboard.modules.reporting.domain.aggregator import CostAggregator
from costboard.modules.reporting.domain.summary import SummaryBuilder
from costboard.schemas.costs import CostSummary, Platform
from costboard.schemas.dashboard import ExecutiveKPIs
from costboard.schemas.recommendations import OptimizationRecommendation
from costboard.shared.core.config import Settings

logger = structlog.get_logger()

MAX_SCORE = Decimal("100")


def build_executive_kpis(
    summary: CostSummary,
    recommendations: Sequence[OptimizationRecommendation],
    settings: Optional[Settings] = None
) -> ExecutiveKPIs:
    total_savings = RecommendationRanker.total_potential_savings(recommendations)
    savings_pct = CostAggregator.percentage_of_total(total_savings, summary.total_cost, settings=settings)
    shares = SummaryBuilder.platform_shares(summary, settings=settings)

    kpis = ExecutiveKPIs(
        total_savings_opportunity=total_savings,
        high_priority_count=len(RecommendationRanker.high_priority(recommendations)),
        savings_percentage=savings_pct,
        # Score bottoms out at zero when savings exceed current spend
        optimization_score=max(Decimal("0"), MAX_SCORE - savings_pct),
        aws_share=shares[Platform.AWS],
        azure_share=shares[Platform.AZURE]
    )
    logger.debug("executive_kpis_built", recommendations=len(recommendations))
    return kpis
