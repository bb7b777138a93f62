"""
Casedesk Permissions - Scoped Listing Contract
==============================================
How list-returning collaborators honor a QueryFilter.

An impossible filter is an unconditional empty result: the fetch callable
is never invoked, so no query reaches the store. Any other filter is merged
into the caller's params before fetching.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Tuple

from core.permissions.config import PermissionEngineConfig
from core.permissions.query_filters import QueryFilter

logger = logging.getLogger("casedesk.permissions")

# fetch(params, limit, offset) -> (rows, total)
FetchPage = Callable[[Mapping[str, Any], int, int], Tuple[List[Any], int]]


@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def compute(cls, limit: int, offset: int, total: int) -> "Pagination":
        return cls(
            limit=limit,
            offset=offset,
            total=total,
            total_pages=math.ceil(total / limit) if limit > 0 else 0,
            has_next=offset + limit < total,
            has_prev=offset > 0,
        )

    def to_dict(self) -> dict:
        return {
            "limit": self.limit,
            "offset": self.offset,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


@dataclass(frozen=True)
class Page:
    data: List[Any] = field(default_factory=list)
    pagination: Optional[Pagination] = None

    def to_dict(self) -> dict:
        return {
            "data": list(self.data),
            "pagination": None if self.pagination is None else self.pagination.to_dict(),
        }


def empty_page(limit: int, offset: int = 0) -> Page:
    return Page(
        data=[],
        pagination=Pagination(
            limit=limit,
            offset=offset,
            total=0,
            total_pages=0,
            has_next=False,
            has_prev=False,
        ),
    )


def fetch_scoped_page(
    query_filter: QueryFilter,
    fetch: FetchPage,
    params: Mapping[str, Any] | None = None,
    limit: int | None = None,
    offset: int = 0,
    config: PermissionEngineConfig | None = None,
) -> Page:
    """
    Run fetch under a permission filter.

    limit is clamped to the engine config page bounds.
    Impossible -> empty page, fetch never called.
    """
    limit = (config or PermissionEngineConfig()).clamp_page_size(limit)
    offset = max(offset, 0)

    if query_filter.impossible:
        logger.warning("Permission filter indicates no access, returning empty result")
        return empty_page(limit, offset)

    rows, total = fetch(query_filter.merge_into(params), limit, offset)
    return Page(data=list(rows), pagination=Pagination.compute(limit, offset, total))
