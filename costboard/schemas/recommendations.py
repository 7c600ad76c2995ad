"""
Optimization recommendation schemas.
"""

from decimal import Decimal
from enum import Enum
from typing import FrozenSet

from pydantic import BaseModel, Field, field_validator

from costboard.schemas.costs import RECORD_CONFIG
from costboard.shared.core.exceptions import InvalidParameterError
from costboard.shared.core.validation import coerce_amount, coerce_enum


class RecommendationType(str, Enum):
    RIGHTSIZING = "rightsizing"
    SCHEDULING = "scheduling"
    RESERVED_INSTANCES = "reserved-instances"
    STORAGE_OPTIMIZATION = "storage-optimization"


class Effort(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RankBy(str, Enum):
    PRIORITY = "priority"
    SAVINGS = "savings"


class OptimizationRecommendation(BaseModel):
    """
    Actionable suggestion to cut spend.
    Priority 1 is the most urgent; potential savings are monthly.
    """
    model_config = RECORD_CONFIG

    id: str
    type: RecommendationType
    title: str
    description: str = ""
    potential_savings: Decimal
    effort: Effort
    resources: FrozenSet[str] = Field(default_factory=frozenset)
    priority: int

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value):
        return coerce_enum(RecommendationType, value, "type")

    @field_validator("effort", mode="before")
    @classmethod
    def _effort(cls, value):
        return coerce_enum(Effort, value, "effort")

    @field_validator("potential_savings", mode="before")
    @classmethod
    def _savings(cls, value):
        return coerce_amount(value, "potential_savings")

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, value):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidParameterError(
                "priority", value, message=f"'priority' must be a positive integer, got {value!r}."
            )
        return value
