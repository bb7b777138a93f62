"""
Casedesk Permissions - Deterministic Permission Evaluator
=========================================================
Answers: is (role, resource_type, action) allowed, and at what
restriction level?

Closed world: any entry missing from the matrix is NONE.
Total: never raises; every failure degrades to deny.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from core.permissions.constants import RestrictionLevel
from core.permissions.models import PermissionCheck
from core.permissions.registry import PolicyTables

logger = logging.getLogger("casedesk.permissions")


class PermissionEvaluator:
    def __init__(self, tables: PolicyTables):
        self._tables = tables

    @staticmethod
    def _allow(restriction: RestrictionLevel, reason: str) -> PermissionCheck:
        return PermissionCheck(allowed=True, restriction=restriction, reason=reason)

    @staticmethod
    def _deny(reason: str) -> PermissionCheck:
        return PermissionCheck(
            allowed=False,
            restriction=RestrictionLevel.NONE,
            reason=reason,
        )

    def check_permission(
        self,
        role: str,
        resource_type: str,
        action: str,
    ) -> PermissionCheck:
        """
        Evaluate a matrix entry.

        super admin -> (True, ALL) without consulting the matrix.
        Missing role / resource / action, or NONE -> (False, NONE).
        """
        try:
            if role == self._tables.super_admin_role:
                return self._allow(RestrictionLevel.ALL, "Super admin access")

            resources = self._tables.permissions.get(role)
            if resources is None:
                return self._deny(f"Role '{role}' not found")

            actions = resources.get(resource_type)
            if actions is None:
                return self._deny(f"No permissions for resource '{resource_type}'")

            restriction = actions.get(action)
            if restriction is None or restriction is RestrictionLevel.NONE:
                return self._deny(
                    f"No permission for action '{action}' on resource "
                    f"'{resource_type}'"
                )

            return self._allow(
                restriction,
                f"Permission granted with '{restriction.value}' restriction",
            )
        except Exception as exc:
            logger.error(
                f"Permission check failed for role={role!r} "
                f"resource={resource_type!r} action={action!r}: {exc}",
                exc_info=True,
            )
            return self._deny("Permission check failed")

    def get_role_permissions(self, role: str) -> Mapping[str, Mapping[str, RestrictionLevel]]:
        """Read-only resource -> action -> restriction view for a role."""
        return self._tables.permissions.get(role, MappingProxyType({}))
