from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import structlog

from costboard.schemas.costs import CostGroup, CostPoint, CostRecord, Platform, PlatformCost
from costboard.shared.core.config import Settings, get_settings
from costboard.shared.core.validation import coerce_amount, coerce_optional_enum

logger = structlog.get_logger()

ZERO = Decimal("0")

# Group ordering follows the enum declaration (aws, azure), never input order
PLATFORM_ORDER = {platform: index for index, platform in enumerate(Platform)}

GroupKey = Tuple[Platform, str]


def _group_sort_key(key: GroupKey) -> Tuple[int, str, str]:
    platform, resource_type = key
    return PLATFORM_ORDER[platform], resource_type.casefold(), resource_type


class CostAggregator:
    """Centralizes in-memory cost aggregation for the dashboard views."""

    @staticmethod
    def aggregate_by_platform_and_type(records: Iterable[CostRecord]) -> Dict[GroupKey, CostGroup]:
        """
        Groups records by (platform, resource type).
        The returned mapping is ordered by platform then resource type, so
        identical multisets of records always produce the same iteration order.
        """
        costs: Dict[GroupKey, Decimal] = {}
        counts: Dict[GroupKey, int] = {}

        for r in records:
            key = (r.platform, r.resource_type)
            costs[key] = costs.get(key, ZERO) + r.cost
            counts[key] = counts.get(key, 0) + 1

        grouped = {
            key: CostGroup(
                platform=key[0],
                resource_type=key[1],
                cost=costs[key],
                count=counts[key]
            )
            for key in sorted(costs, key=_group_sort_key)
        }

        logger.debug("cost_groups_aggregated", groups=len(grouped))
        return grouped

    @staticmethod
    def totals_by_platform(records: Iterable[CostRecord]) -> Dict[Platform, Decimal]:
        """Sum of cost per platform. Platforms without records report zero."""
        totals = {platform: ZERO for platform in Platform}
        for r in records:
            totals[r.platform] += r.cost
        return totals

    @staticmethod
    def percentage_of_total(
        value: Any,
        total: Any,
        precision: Optional[int] = None,
        settings: Optional[Settings] = None
    ) -> Decimal:
        """
        Share of `value` in `total` as a percentage, rounded half-up.
        A zero total yields 0 rather than a division error.
        """
        if precision is None:
            precision = (settings or get_settings()).PERCENTAGE_PRECISION
        quantum = Decimal(1).scaleb(-precision)

        value = coerce_amount(value, "value", minimum=None)
        total = coerce_amount(total, "total", minimum=None)
        if total == 0:
            return ZERO.quantize(quantum)

        with localcontext() as ctx:
            # Enough digits for the integer part of the share plus `precision` places
            ctx.prec = max(ctx.prec, value.adjusted() - total.adjusted() + precision + 5)
            share = value / total * 100
            return share.quantize(quantum, rounding=ROUND_HALF_UP)

    @staticmethod
    def filter_by_platform(records: Sequence[CostRecord], platform: Any = None) -> List[CostRecord]:
        """Keeps records for one platform; None or "all" keeps everything."""
        selected = coerce_optional_enum(Platform, platform, "platform")
        if selected is None:
            return list(records)
        return [r for r in records if r.platform == selected]

    @staticmethod
    def cost_series(records: Iterable[CostRecord]) -> List[CostPoint]:
        """One chart point per record, in input order."""
        return [
            CostPoint(name=r.resource_name, value=r.cost, platform=r.platform)
            for r in records
        ]

    @staticmethod
    def platform_series(records: Iterable[CostRecord]) -> List[PlatformCost]:
        totals = CostAggregator.totals_by_platform(records)
        return [PlatformCost(platform=platform, cost=cost) for platform, cost in totals.items()]
