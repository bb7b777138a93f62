"""
Casedesk Django ORM adapter - QueryFilter push-down
===================================================
Applies a compiled QueryFilter to a QuerySet.

Impossible -> queryset.none(): Django never compiles SQL for an empty
queryset, so evaluating or counting it issues zero queries.

Filter columns are logical names ("createdBy", "userId"). field_map
translates them to ORM lookups ("created_by_id", "user_id").
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from django.db.models import QuerySet

from core.permissions.config import PermissionEngineConfig
from core.permissions.listing import Page, Pagination, empty_page
from core.permissions.query_filters import QueryFilter
from core.permissions.registry import default_policy_tables
from core.permissions.service import PermissionService

logger = logging.getLogger("casedesk.adapters")


def apply_query_filter(
    queryset: QuerySet,
    query_filter: QueryFilter,
    field_map: Optional[Mapping[str, str]] = None,
) -> QuerySet:
    if query_filter.impossible:
        return queryset.none()

    if query_filter.is_unrestricted:
        return queryset.all()

    field_map = field_map or {}
    lookups = {
        field_map.get(column, column): value
        for column, value in query_filter.conditions.items()
    }
    return queryset.filter(**lookups)


def paginate_queryset(
    queryset: QuerySet,
    query_filter: QueryFilter,
    limit: Optional[int] = None,
    offset: int = 0,
    field_map: Optional[Mapping[str, str]] = None,
    config: Optional[PermissionEngineConfig] = None,
) -> Page:
    """
    Filtered, paginated page of model instances.

    limit is clamped to the engine config page bounds. Impossible filters
    short-circuit before the queryset is touched.
    """
    limit = (config or PermissionEngineConfig()).clamp_page_size(limit)
    offset = max(offset, 0)

    if query_filter.impossible:
        logger.warning(
            f"Permission filter indicates no access to "
            f"{queryset.model.__name__}, returning empty result"
        )
        return empty_page(limit, offset)

    scoped = apply_query_filter(queryset, query_filter, field_map)
    total = scoped.count()
    rows = list(scoped[offset:offset + limit])
    return Page(data=rows, pagination=Pagination.compute(limit, offset, total))


def service_from_settings() -> PermissionService:
    """PermissionService over the default tables, configured from Django settings."""
    from django.conf import settings

    return PermissionService(
        default_policy_tables(),
        PermissionEngineConfig.from_settings(settings),
    )
