"""
Resource inventory schemas: tracked resources plus the query/page
contract of the inventory table.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from costboard.schemas.costs import RECORD_CONFIG, Platform
from costboard.shared.core.config import get_settings
from costboard.shared.core.exceptions import InvalidParameterError
from costboard.shared.core.validation import (
    coerce_amount,
    coerce_enum,
    coerce_optional_enum,
    coerce_positive_int,
)


class ResourceStatus(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"
    TERMINATED = "terminated"


class SortField(str, Enum):
    NAME = "name"
    TYPE = "type"
    PLATFORM = "platform"
    COST = "cost"
    UTILIZATION = "utilization"
    STATUS = "status"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class CloudResource(BaseModel):
    """Tracked inventory item with its monthly cost and utilization (0-100)."""
    model_config = RECORD_CONFIG

    id: str
    name: str
    type: str
    platform: Platform
    region: str
    status: ResourceStatus
    utilization: Decimal
    cost: Decimal
    last_updated: datetime

    @field_validator("platform", mode="before")
    @classmethod
    def _platform(cls, value):
        return coerce_enum(Platform, value, "platform")

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return coerce_enum(ResourceStatus, value, "status")

    @field_validator("utilization", mode="before")
    @classmethod
    def _utilization(cls, value):
        return coerce_amount(value, "utilization", maximum=Decimal("100"))

    @field_validator("cost", mode="before")
    @classmethod
    def _cost(cls, value):
        return coerce_amount(value, "cost")


class ResourceQuery(BaseModel):
    """
    Filter, sort and pagination options for one inventory request.
    Every option is validated on construction; None or "all" disables
    the platform/status filters.
    """
    model_config = RECORD_CONFIG

    search: str = ""
    platform: Optional[Platform] = None
    status: Optional[ResourceStatus] = None
    sort_field: SortField = SortField.COST
    sort_dir: SortDirection = SortDirection.DESC
    page: int = 1
    page_size: int = Field(default_factory=lambda: get_settings().DEFAULT_PAGE_SIZE)

    @model_validator(mode="before")
    @classmethod
    def _known_options(cls, data):
        if isinstance(data, dict):
            known = set(cls.model_fields) | {f.alias for f in cls.model_fields.values() if f.alias}
            unknown = sorted(str(k) for k in data if k not in known)
            if unknown:
                raise InvalidParameterError("query", unknown, sorted(cls.model_fields))
        return data

    @field_validator("search", mode="before")
    @classmethod
    def _search(cls, value):
        if value is None:
            return ""
        if not isinstance(value, str):
            raise InvalidParameterError("search", value, message=f"'search' must be text, got {value!r}.")
        return value

    @field_validator("platform", mode="before")
    @classmethod
    def _platform(cls, value):
        return coerce_optional_enum(Platform, value, "platform")

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return coerce_optional_enum(ResourceStatus, value, "status")

    @field_validator("sort_field", mode="before")
    @classmethod
    def _sort_field(cls, value):
        return coerce_enum(SortField, value, "sort_field")

    @field_validator("sort_dir", mode="before")
    @classmethod
    def _sort_dir(cls, value):
        return coerce_enum(SortDirection, value, "sort_dir")

    @field_validator("page", "page_size", mode="before")
    @classmethod
    def _positive(cls, value, info):
        return coerce_positive_int(value, info.field_name)


class ResourcePage(BaseModel):
    model_config = RECORD_CONFIG

    items: Tuple[CloudResource, ...]
    total_matched: int
    total_pages: int
    page: int
    page_size: int
