"""
Casedesk Django ORM adapter.
Thin framework glue between compiled QueryFilters and QuerySets.
"""

from adapters.django_orm.queryset import (
    apply_query_filter,
    paginate_queryset,
    service_from_settings,
)

__all__ = [
    "apply_query_filter",
    "paginate_queryset",
    "service_from_settings",
]
