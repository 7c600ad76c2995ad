"""
Dashboard view-models.

A DashboardSnapshot is what the data source hands over per refresh; the
view classes are what the rendering layer receives back. Values stay
semantic (numbers, enums, ids); formatting belongs to the renderer.
"""

from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, Field

from costboard.schemas.costs import (
    RECORD_CONFIG,
    CostGroup,
    CostPoint,
    CostRecord,
    CostSummary,
    PlatformCost,
)
from costboard.schemas.recommendations import OptimizationRecommendation
from costboard.schemas.resources import CloudResource, ResourcePage
from costboard.schemas.trends import TrendPoint, TrendStatistics


class DashboardSnapshot(BaseModel):
    model_config = RECORD_CONFIG

    cost_records: Tuple[CostRecord, ...] = ()
    resources: Tuple[CloudResource, ...] = ()
    recommendations: Tuple[OptimizationRecommendation, ...] = ()
    trend: Tuple[TrendPoint, ...] = ()


class ExecutiveKPIs(BaseModel):
    model_config = RECORD_CONFIG

    total_savings_opportunity: Decimal
    high_priority_count: int
    savings_percentage: Decimal = Field(..., description="Savings opportunity as a share of total cost")
    optimization_score: Decimal
    aws_share: Decimal
    azure_share: Decimal


class ExecutiveView(BaseModel):
    model_config = RECORD_CONFIG

    summary: CostSummary
    trend: Optional[TrendStatistics] = None
    kpis: ExecutiveKPIs
    recommendations: Tuple[OptimizationRecommendation, ...]
    cost_series: Tuple[CostPoint, ...] = ()
    platform_series: Tuple[PlatformCost, ...] = ()


class AdminView(BaseModel):
    model_config = RECORD_CONFIG

    summary: CostSummary
    cost_groups: Tuple[CostGroup, ...]
    recommendations: Tuple[OptimizationRecommendation, ...]
    total_potential_savings: Decimal
    resources: ResourcePage
