"""
Cloud Cost Schemas - Record Types and derived cost view-models
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from costboard.shared.core.exceptions import InvalidParameterError
from costboard.shared.core.validation import coerce_amount, coerce_enum


class Platform(str, Enum):
    AWS = "aws"
    AZURE = "azure"


# Accepts snake_case and the camelCase keys the fixture layer emits
RECORD_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


class DateRange(BaseModel):
    model_config = RECORD_CONFIG

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.start > self.end:
            raise InvalidParameterError(
                "period", f"{self.start.isoformat()}..{self.end.isoformat()}",
                message="Period start must not be after its end."
            )
        return self


class CostRecord(BaseModel):
    """Immutable cost fact for one resource over one billing period."""
    model_config = RECORD_CONFIG

    id: str
    platform: Platform
    resource_type: str
    resource_name: str
    cost: Decimal = Field(..., description="Non-negative cost amount")
    currency: str = "USD"
    period: DateRange
    tags: Dict[str, str] = Field(default_factory=dict)

    @field_validator("platform", mode="before")
    @classmethod
    def _platform(cls, value):
        return coerce_enum(Platform, value, "platform")

    @field_validator("cost", mode="before")
    @classmethod
    def _cost(cls, value):
        return coerce_amount(value, "cost")


class PlatformCosts(BaseModel):
    """Per-platform totals. `total` is derived, so aws + azure == total always holds."""
    model_config = RECORD_CONFIG

    aws: Decimal = Decimal("0")
    azure: Decimal = Decimal("0")

    @model_validator(mode="before")
    @classmethod
    def _drop_supplied_total(cls, data):
        if isinstance(data, dict) and "total" in data:
            data = dict(data)
            supplied = coerce_amount(data.pop("total"), "total", minimum=None)
            expected = coerce_amount(data.get("aws", 0), "aws") + coerce_amount(data.get("azure", 0), "azure")
            if supplied != expected:
                raise InvalidParameterError(
                    "total", supplied,
                    message=f"Platform total {supplied} does not equal aws + azure ({expected})."
                )
        return data

    @field_validator("aws", "azure", mode="before")
    @classmethod
    def _amounts(cls, value, info):
        return coerce_amount(value, info.field_name)

    @computed_field
    @property
    def total(self) -> Decimal:
        return self.aws + self.azure

    def get(self, platform: Platform) -> Decimal:
        return getattr(self, Platform(platform).value)


class CostSummary(BaseModel):
    model_config = RECORD_CONFIG

    total_cost: Decimal
    monthly_trend: Decimal = Field(..., description="Signed percentage versus the prior period")
    top_cost_drivers: Tuple[CostRecord, ...]
    platform_breakdown: PlatformCosts


class CostGroup(BaseModel):
    """One (platform, resource type) bucket of the aggregation."""
    model_config = RECORD_CONFIG

    platform: Platform
    resource_type: str
    cost: Decimal
    count: int


class CostPoint(BaseModel):
    """Chart point for a single cost record."""
    model_config = RECORD_CONFIG

    name: str
    value: Decimal
    platform: Platform


class PlatformCost(BaseModel):
    model_config = RECORD_CONFIG

    platform: Platform
    cost: Decimal
