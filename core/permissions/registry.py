"""
Casedesk Permissions - Policy Tables
====================================
Validated, immutable container for the permission matrix, the ownership
schema and the role hierarchy.

Built once at startup and shared by reference into every component.
Nested mappings are copied and wrapped in MappingProxyType, so no caller
can mutate policy after construction.

Validation failures are hard failures (PolicyConfigurationError):
a process must never start with a policy it cannot evaluate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Lock
from types import MappingProxyType
from typing import Any, Mapping, Optional

from core.permissions.constants import ROLE_SUPER_ADMIN, RestrictionLevel
from core.permissions.exceptions import (
    InvalidFieldPathError,
    PolicyConfigurationError,
)
from core.permissions.models import OwnershipRule

logger = logging.getLogger("casedesk.permissions")

PermissionMatrix = Mapping[str, Mapping[str, Mapping[str, RestrictionLevel]]]


@dataclass(frozen=True)
class PolicyTables:
    """
    The three static tables plus the filter column overrides.

    Fields:
        permissions:          role -> resource -> action -> RestrictionLevel
        ownership:            resource -> OwnershipRule
        hierarchy:            role -> rank (higher outranks lower)
        own_filter_overrides: resource -> flat column used for OWN filters
        super_admin_role:     role that bypasses the matrix
    """

    permissions: PermissionMatrix
    ownership: Mapping[str, OwnershipRule]
    hierarchy: Mapping[str, int]
    own_filter_overrides: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    super_admin_role: str = ROLE_SUPER_ADMIN

    def lookup(
        self, role: str, resource_type: str, action: str
    ) -> Optional[RestrictionLevel]:
        """Raw matrix lookup. None when any level of the chain is missing."""
        resources = self.permissions.get(role)
        if resources is None:
            return None
        actions = resources.get(resource_type)
        if actions is None:
            return None
        return actions.get(action)

    def rank(self, role: str) -> int:
        """Rank of a role; 0 for roles outside the hierarchy."""
        return self.hierarchy.get(role, 0)

    def roles_by_rank(self) -> tuple[str, ...]:
        """All roles, lowest rank first."""
        return tuple(sorted(self.hierarchy, key=lambda role: self.hierarchy[role]))


# ══════════════════════════════════════════════════════════════
# CONSTRUCTION
# ══════════════════════════════════════════════════════════════

def _coerce_restriction(value: Any, where: str) -> RestrictionLevel:
    if isinstance(value, RestrictionLevel):
        return value
    try:
        return RestrictionLevel(value)
    except ValueError:
        raise PolicyConfigurationError(
            f"restriction {value!r} at {where} not valid. "
            f"Must be one of: {sorted(level.value for level in RestrictionLevel)}"
        ) from None


def _freeze_matrix(role_permissions: Mapping) -> PermissionMatrix:
    frozen = {}
    for role, resources in role_permissions.items():
        if not role or not isinstance(role, str):
            raise PolicyConfigurationError("role keys must be non-empty strings.")

        frozen_resources = {}
        for resource_type, actions in resources.items():
            frozen_actions = {
                action: _coerce_restriction(
                    value, f"{role}.{resource_type}.{action}"
                )
                for action, value in actions.items()
            }
            frozen_resources[resource_type] = MappingProxyType(frozen_actions)
        frozen[role] = MappingProxyType(frozen_resources)
    return MappingProxyType(frozen)


def _freeze_ownership(ownership_fields: Mapping) -> Mapping[str, OwnershipRule]:
    frozen = {}
    for resource_type, spec in ownership_fields.items():
        if isinstance(spec, OwnershipRule):
            frozen[resource_type] = spec
            continue

        unknown = set(spec) - {"owner_field", "assignee_field"}
        if unknown:
            raise PolicyConfigurationError(
                f"ownership for '{resource_type}' has unknown keys: "
                f"{sorted(unknown)}"
            )
        try:
            frozen[resource_type] = OwnershipRule(
                owner_field=spec.get("owner_field"),
                assignee_field=spec.get("assignee_field"),
            )
        except InvalidFieldPathError as exc:
            raise PolicyConfigurationError(
                f"ownership for '{resource_type}': {exc}"
            ) from exc
    return MappingProxyType(frozen)


def _freeze_hierarchy(roles_hierarchy: Mapping, super_admin_role: str) -> Mapping[str, int]:
    hierarchy = {}
    for role, rank in roles_hierarchy.items():
        if isinstance(rank, bool) or not isinstance(rank, int):
            raise PolicyConfigurationError(
                f"rank for role '{role}' must be an int, got {rank!r}."
            )
        hierarchy[role] = rank

    others = [rank for role, rank in hierarchy.items() if role != super_admin_role]
    top = max(others, default=0)
    if super_admin_role not in hierarchy:
        hierarchy[super_admin_role] = top + 1
    elif hierarchy[super_admin_role] <= top:
        raise PolicyConfigurationError(
            f"super admin role '{super_admin_role}' must hold the strictly "
            f"highest rank (has {hierarchy[super_admin_role]}, top is {top})."
        )
    return MappingProxyType(hierarchy)


def build_policy_tables(
    role_permissions: Mapping,
    ownership_fields: Mapping,
    roles_hierarchy: Mapping,
    own_filter_overrides: Mapping | None = None,
    super_admin_role: str = ROLE_SUPER_ADMIN,
) -> PolicyTables:
    """
    Validate raw policy data and freeze it into PolicyTables.

    Restriction values may be RestrictionLevel members or their string
    values ("own"). Ownership entries may be OwnershipRule instances or
    {"owner_field", "assignee_field"} dicts.
    """
    permissions = _freeze_matrix(role_permissions)
    ownership = _freeze_ownership(ownership_fields)
    hierarchy = _freeze_hierarchy(roles_hierarchy, super_admin_role)

    unranked = sorted(set(permissions) - set(hierarchy))
    if unranked:
        raise PolicyConfigurationError(
            f"roles missing from hierarchy: {unranked}"
        )

    overrides = dict(own_filter_overrides or {})
    for resource_type, column in overrides.items():
        if not column or not isinstance(column, str) or "." in column:
            raise PolicyConfigurationError(
                f"own filter override for '{resource_type}' must be a flat "
                f"column name, got {column!r}."
            )

    tables = PolicyTables(
        permissions=permissions,
        ownership=ownership,
        hierarchy=hierarchy,
        own_filter_overrides=MappingProxyType(overrides),
        super_admin_role=super_admin_role,
    )
    logger.info(
        f"Policy tables built: {len(permissions)} roles, "
        f"{len(ownership)} ownership rules, super admin '{super_admin_role}'"
    )
    return tables


# ══════════════════════════════════════════════════════════════
# DEFAULT TABLES (process-wide)
# ══════════════════════════════════════════════════════════════

_default_tables: PolicyTables | None = None
_default_lock = Lock()


def default_policy_tables() -> PolicyTables:
    """Tables built from core.permissions.matrix, constructed once."""
    global _default_tables
    with _default_lock:
        if _default_tables is None:
            from core.permissions.matrix import (
                OWN_FILTER_OVERRIDES,
                OWNERSHIP_FIELDS,
                ROLE_PERMISSIONS,
                ROLES_HIERARCHY,
            )

            _default_tables = build_policy_tables(
                role_permissions=ROLE_PERMISSIONS,
                ownership_fields=OWNERSHIP_FIELDS,
                roles_hierarchy=ROLES_HIERARCHY,
                own_filter_overrides=OWN_FILTER_OVERRIDES,
            )
        return _default_tables
