"""
Casedesk Permissions - Role Hierarchy Helpers
=============================================
Manage-relationships built on role rank. Strict ordering throughout:
peers never manage peers, and nobody manages themselves.
"""

from __future__ import annotations

from typing import List, Optional

from core.permissions.models import Actor
from core.permissions.registry import PolicyTables


class RoleHierarchy:
    def __init__(self, tables: PolicyTables):
        self._tables = tables

    def rank(self, role: str) -> int:
        return self._tables.rank(role)

    def can_manage_user(self, manager: Optional[Actor], target: Optional[Actor]) -> bool:
        """True if manager strictly outranks target and is not target."""
        if manager is None or target is None:
            return False

        if manager.id == target.id:
            return False

        return self.rank(manager.role) > self.rank(target.role)

    def get_assignable_roles(self, actor: Optional[Actor]) -> List[str]:
        """Roles strictly below the actor's rank, lowest first."""
        if actor is None:
            return []

        level = self.rank(actor.role)
        return [
            role
            for role in self._tables.roles_by_rank()
            if self._tables.hierarchy[role] < level
        ]

    def has_minimum_role(self, actor: Optional[Actor], required_role: str) -> bool:
        """
        Gate on rank: active actor at or above required_role.

        An unknown required role denies everyone (rank 0 would
        otherwise admit every actor).
        """
        if actor is None or not actor.is_active:
            return False

        if required_role not in self._tables.hierarchy:
            return False

        return self.rank(actor.role) >= self.rank(required_role)
