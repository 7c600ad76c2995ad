"""
Resource Query Engine

Backs the inventory table: filter -> sort -> paginate, always in that
order, each stage working on the previous stage's output.
"""

import math
from typing import Any, List, Mapping, Optional, Sequence, Union

import structlog

from costboard.modules.inventory.domain.sorting import ResourceSortRegistry
from costboard.schemas.resources import CloudResource, ResourcePage, ResourceQuery, SortDirection

logger = structlog.get_logger()


class ResourceQueryEngine:

    @staticmethod
    def matches(resource: CloudResource, query: ResourceQuery) -> bool:
        """Search hits name or type (case-insensitive); platform/status must match when set."""
        if query.search:
            needle = query.search.casefold()
            if needle not in resource.name.casefold() and needle not in resource.type.casefold():
                return False
        if query.platform is not None and resource.platform != query.platform:
            return False
        if query.status is not None and resource.status != query.status:
            return False
        return True

    @staticmethod
    def filter(resources: Sequence[CloudResource], query: ResourceQuery) -> List[CloudResource]:
        return [r for r in resources if ResourceQueryEngine.matches(r, query)]

    @staticmethod
    def sort(resources: Sequence[CloudResource], query: ResourceQuery) -> List[CloudResource]:
        """Stable sort: equal keys keep their relative input order in both directions."""
        strategy = ResourceSortRegistry.get(query.sort_field)
        return sorted(
            resources,
            key=strategy.key,
            reverse=query.sort_dir == SortDirection.DESC
        )

    @staticmethod
    def query(
        resources: Sequence[CloudResource],
        params: Optional[Union[ResourceQuery, Mapping[str, Any]]] = None
    ) -> ResourcePage:
        """
        Runs one inventory request.

        `params` may be a ResourceQuery or a plain mapping of its options;
        invalid options raise before any resource is inspected. A page past
        the end returns no items rather than an error.
        """
        if params is None:
            query = ResourceQuery()
        elif isinstance(params, ResourceQuery):
            query = params
        else:
            query = ResourceQuery(**params)

        matched = ResourceQueryEngine.filter(resources, query)
        ordered = ResourceQueryEngine.sort(matched, query)

        total_matched = len(ordered)
        total_pages = max(1, math.ceil(total_matched / query.page_size))
        start = (query.page - 1) * query.page_size
        items = ordered[start:start + query.page_size]

        logger.info(
            "resource_query_executed",
            resources=len(resources),
            matched=total_matched,
            page=query.page,
            page_size=query.page_size,
            returned=len(items),
            sort_field=query.sort_field.value,
            sort_dir=query.sort_dir.value
        )

        return ResourcePage(
            items=tuple(items),
            total_matched=total_matched,
            total_pages=total_pages,
            page=query.page,
            page_size=query.page_size
        )
