from .domain.aggregator import CostAggregator
from .domain.trends import TrendSummarizer
from .domain.summary import SummaryBuilder
from .domain.executive import build_executive_kpis

__all__ = ["CostAggregator", "TrendSummarizer", "SummaryBuilder", "build_executive_kpis"]
