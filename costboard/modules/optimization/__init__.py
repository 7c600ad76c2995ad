"""
Optimization Module

Ranks and summarizes cost optimization recommendations:
- RecommendationRanker: category filter, priority/savings ordering, savings totals
"""

from .domain.ranker import RecommendationRanker

__all__ = ["RecommendationRanker"]
