"""
Casedesk Permissions - Query Filter Compilation
===============================================
Pushes a restriction decision down to the data layer before any query
runs, so rows are never fetched only to be discarded.

A QueryFilter has exactly one of three shapes:
    {}                     -> no constraint
    {"impossible": True}   -> no row can match; the data layer MUST return
                              an empty result WITHOUT querying the store
    {field: actor_id}      -> single flat-column equality

Filters operate on flat columns. For a nested ownership path such as
"createdBy.id" only the first segment ("createdBy") is pushed down;
callers needing exact nested matching post-filter with
ResourceFilterer.filter_resources().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from core.permissions.authorizer import is_active_actor
from core.permissions.config import PermissionEngineConfig
from core.permissions.constants import RestrictionLevel
from core.permissions.evaluator import PermissionEvaluator
from core.permissions.models import Actor
from core.permissions.registry import PolicyTables

logger = logging.getLogger("casedesk.permissions")

IMPOSSIBLE_KEY = "impossible"


# ══════════════════════════════════════════════════════════════
# QUERY FILTER
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class QueryFilter:
    conditions: Mapping[str, Any] = field(default_factory=dict)
    impossible: bool = False

    def __post_init__(self):
        if self.impossible and self.conditions:
            raise ValueError("impossible filter cannot carry conditions.")

        if len(self.conditions) > 1:
            raise ValueError(
                "QueryFilter expresses single-field ownership only, got "
                f"{sorted(self.conditions)}."
            )

        if IMPOSSIBLE_KEY in self.conditions:
            raise ValueError(f"'{IMPOSSIBLE_KEY}' is reserved.")

        object.__setattr__(self, "conditions", MappingProxyType(dict(self.conditions)))

    @classmethod
    def unrestricted(cls) -> "QueryFilter":
        return cls()

    @classmethod
    def nothing(cls) -> "QueryFilter":
        return cls(impossible=True)

    @classmethod
    def equals(cls, column: str, value: Any) -> "QueryFilter":
        return cls(conditions={column: value})

    @property
    def is_unrestricted(self) -> bool:
        return not self.impossible and not self.conditions

    def as_dict(self) -> dict:
        if self.impossible:
            return {IMPOSSIBLE_KEY: True}
        return dict(self.conditions)

    def merge_into(self, params: Mapping[str, Any] | None) -> dict:
        """
        Merge into collaborator query params. Filter keys win over
        caller-supplied keys with the same name.
        """
        merged = dict(params or {})
        merged.update(self.as_dict())
        return merged


# ══════════════════════════════════════════════════════════════
# COMPILER
# ══════════════════════════════════════════════════════════════

class QueryFilterCompiler:
    def __init__(
        self,
        tables: PolicyTables,
        evaluator: PermissionEvaluator,
        config: PermissionEngineConfig,
    ):
        self._tables = tables
        self._evaluator = evaluator
        self._config = config

    def _own_column(self, resource_type: str) -> Optional[str]:
        override = self._tables.own_filter_overrides.get(resource_type)
        if override is not None:
            return override
        rule = self._tables.ownership.get(resource_type)
        return None if rule is None else rule.owner_column

    def _assignee_column(self, resource_type: str) -> Optional[str]:
        rule = self._tables.ownership.get(resource_type)
        return None if rule is None else rule.assignee_column

    def generate_query_filters(
        self,
        actor: Optional[Actor],
        resource_type: str,
        action: str,
    ) -> QueryFilter:
        try:
            if not is_active_actor(actor):
                return QueryFilter.nothing()

            if actor.role == self._tables.super_admin_role:
                return QueryFilter.unrestricted()

            permission = self._evaluator.check_permission(
                actor.role, resource_type, action
            )
            if not permission.allowed:
                return QueryFilter.nothing()

            restriction = permission.restriction

            if restriction is RestrictionLevel.ALL:
                return QueryFilter.unrestricted()

            if restriction is RestrictionLevel.OWN:
                column = self._own_column(resource_type)
                if column is not None:
                    return QueryFilter.equals(column, actor.id)
                if resource_type in self._tables.ownership:
                    return QueryFilter.nothing()
                if self._config.permit_own_without_owner_field:
                    logger.warning(
                        f"OWN filter on '{resource_type}' unrestricted: "
                        "no ownership rule declared"
                    )
                    return QueryFilter.unrestricted()
                return QueryFilter.nothing()

            if restriction is RestrictionLevel.ASSIGNED:
                column = self._assignee_column(resource_type)
                if column is not None:
                    return QueryFilter.equals(column, actor.id)
                return QueryFilter.nothing()

            return QueryFilter.nothing()
        except Exception as exc:
            logger.error(
                f"Filter generation failed for {action!r} on {resource_type!r}: {exc}",
                exc_info=True,
            )
            return QueryFilter.nothing()
