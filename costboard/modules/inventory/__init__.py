from .domain.query import ResourceQueryEngine
from .domain.sorting import ResourceSortRegistry

__all__ = ["ResourceQueryEngine", "ResourceSortRegistry"]
