"""
Daily cost trend schemas.
"""

from datetime import date as Date
from decimal import Decimal

from pydantic import BaseModel, computed_field, field_validator, model_validator

from costboard.schemas.costs import RECORD_CONFIG
from costboard.shared.core.exceptions import InvalidParameterError
from costboard.shared.core.validation import coerce_amount


class TrendPoint(BaseModel):
    """One calendar day of spend. `total` is always aws + azure."""
    model_config = RECORD_CONFIG

    date: Date
    aws: Decimal
    azure: Decimal

    @model_validator(mode="before")
    @classmethod
    def _drop_supplied_total(cls, data):
        # Data sources often ship a precomputed total; accept it only when consistent
        if isinstance(data, dict) and "total" in data:
            data = dict(data)
            supplied = coerce_amount(data.pop("total"), "total", minimum=None)
            aws = coerce_amount(data.get("aws", 0), "aws")
            azure = coerce_amount(data.get("azure", 0), "azure")
            if supplied != aws + azure:
                raise InvalidParameterError(
                    "total", supplied,
                    message=f"Trend total {supplied} does not equal aws + azure ({aws + azure})."
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


class TrendStatistics(BaseModel):
    model_config = RECORD_CONFIG

    average: Decimal
    max: Decimal
    min: Decimal
    projected_monthly: Decimal
    points: int
