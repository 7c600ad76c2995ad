from dataclasses import dataclass
from typing import Any, Callable, Dict

from costboard.schemas.resources import CloudResource, SortField
from costboard.shared.core.validation import coerce_enum

SortKey = Callable[[CloudResource], Any]


@dataclass(frozen=True)
class SortStrategy:
    """Named comparison rule for one sortable inventory column."""
    field: SortField
    numeric: bool
    key: SortKey


class ResourceSortRegistry:
    """
    Closed set of comparator strategies, one per SortField.
    Numeric columns compare as Decimals, everything else as case-folded text.
    """
    _strategies: Dict[SortField, SortStrategy] = {}

    @classmethod
    def register(cls, field: SortField, numeric: bool = False):
        """Decorator to register the value extractor for a column."""
        def wrapper(extract: Callable[[CloudResource], Any]):
            if numeric:
                key = extract
            else:
                def key(resource: CloudResource, _extract=extract) -> str:
                    return str(_extract(resource)).casefold()
            cls._strategies[field] = SortStrategy(field=field, numeric=numeric, key=key)
            return extract
        return wrapper

    @classmethod
    def get(cls, field: Any) -> SortStrategy:
        return cls._strategies[coerce_enum(SortField, field, "sort_field")]


@ResourceSortRegistry.register(SortField.NAME)
def _name(resource: CloudResource) -> str:
    return resource.name


@ResourceSortRegistry.register(SortField.TYPE)
def _type(resource: CloudResource) -> str:
    return resource.type


@ResourceSortRegistry.register(SortField.PLATFORM)
def _platform(resource: CloudResource) -> str:
    return resource.platform.value


@ResourceSortRegistry.register(SortField.STATUS)
def _status(resource: CloudResource) -> str:
    return resource.status.value


@ResourceSortRegistry.register(SortField.COST, numeric=True)
def _cost(resource: CloudResource):
    return resource.cost


@ResourceSortRegistry.register(SortField.UTILIZATION, numeric=True)
def _utilization(resource: CloudResource):
    return resource.utilization
