"""
Casedesk Permissions - Service
==============================
Composition root. Wires one set of immutable policy tables and one
engine config into every component and exposes their operations.

Pure and lock-free: safe to share across request threads.
"""

from __future__ import annotations

from threading import Lock
from typing import Any, Iterable, List, Mapping, Optional

from core.permissions.authorizer import (
    Authorizer,
    ResourceAuthorizer,
    ResourceFilterer,
)
from core.permissions.config import PermissionEngineConfig
from core.permissions.constants import RestrictionLevel
from core.permissions.evaluator import PermissionEvaluator
from core.permissions.hierarchy import RoleHierarchy
from core.permissions.models import Actor, AuthorizationDecision, PermissionCheck
from core.permissions.query_filters import QueryFilter, QueryFilterCompiler
from core.permissions.registry import PolicyTables, default_policy_tables
from core.permissions.resolver import OwnershipResolver


class PermissionService:
    """
    Usage:
        service = PermissionService(default_policy_tables())

        decision = service.authorize(actor, Resource.CASES, Action.READ, case)
        if not decision.allowed:
            ...

        query_filter = service.generate_query_filters(actor, Resource.CASES)
    """

    def __init__(
        self,
        tables: PolicyTables,
        config: PermissionEngineConfig | None = None,
    ):
        self.tables = tables
        self.config = config or PermissionEngineConfig()

        self.evaluator = PermissionEvaluator(tables)
        self.resolver = OwnershipResolver(tables)
        self.resource_authorizer = ResourceAuthorizer(self.resolver, self.config)
        self.filterer = ResourceFilterer(self.evaluator, self.resource_authorizer)
        self.authorizer = Authorizer(self.evaluator, self.resource_authorizer)
        self.compiler = QueryFilterCompiler(tables, self.evaluator, self.config)
        self.hierarchy = RoleHierarchy(tables)

    # ── Matrix ────────────────────────────────────────────────

    def check_permission(self, role: str, resource_type: str, action: str) -> PermissionCheck:
        return self.evaluator.check_permission(role, resource_type, action)

    def get_role_permissions(self, role: str) -> Mapping[str, Mapping[str, RestrictionLevel]]:
        return self.evaluator.get_role_permissions(role)

    # ── Instances ─────────────────────────────────────────────

    def can_access_resource(
        self,
        actor: Actor,
        instance: Any,
        resource_type: str,
        restriction: RestrictionLevel,
    ) -> bool:
        return self.resource_authorizer.can_access_resource(
            actor, instance, resource_type, restriction
        )

    def authorize(
        self,
        actor: Optional[Actor],
        resource_type: str,
        action: str,
        target: Any = None,
    ) -> AuthorizationDecision:
        return self.authorizer.authorize(actor, resource_type, action, target)

    def filter_resources(
        self,
        actor: Optional[Actor],
        instances: Iterable[Any],
        resource_type: str,
        action: str | None = None,
    ) -> List[Any]:
        return self.filterer.filter_resources(
            actor, instances, resource_type, action or self.config.default_action
        )

    # ── Push-down ─────────────────────────────────────────────

    def generate_query_filters(
        self,
        actor: Optional[Actor],
        resource_type: str,
        action: str | None = None,
    ) -> QueryFilter:
        return self.compiler.generate_query_filters(
            actor, resource_type, action or self.config.default_action
        )

    # ── Hierarchy ─────────────────────────────────────────────

    def can_manage_user(self, manager: Optional[Actor], target: Optional[Actor]) -> bool:
        return self.hierarchy.can_manage_user(manager, target)

    def get_assignable_roles(self, actor: Optional[Actor]) -> List[str]:
        return self.hierarchy.get_assignable_roles(actor)

    def has_minimum_role(self, actor: Optional[Actor], required_role: str) -> bool:
        return self.hierarchy.has_minimum_role(actor, required_role)


_default_service: PermissionService | None = None
_default_lock = Lock()


def get_permission_service() -> PermissionService:
    """Process-wide service over the default tables and config."""
    global _default_service
    with _default_lock:
        if _default_service is None:
            _default_service = PermissionService(default_policy_tables())
        return _default_service
