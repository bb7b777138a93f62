"""
Casedesk Permissions - Default Policy Data
==========================================
Role -> Resource -> Action -> RestrictionLevel, the ownership schema
and the role hierarchy shipped with the case/feedback backend.

Raw data only. registry.build_policy_tables() validates and freezes it;
nothing reads these dicts directly at request time.
"""

from __future__ import annotations

from core.permissions.constants import (
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_STAFF,
    ROLE_SUPER_ADMIN,
    ROLE_USER,
    Action,
    Resource,
    RestrictionLevel,
)

ALL = RestrictionLevel.ALL
OWN = RestrictionLevel.OWN
ASSIGNED = RestrictionLevel.ASSIGNED


# ══════════════════════════════════════════════════════════════
# ROLE HIERARCHY
# ══════════════════════════════════════════════════════════════

ROLES_HIERARCHY = {
    ROLE_USER: 1,
    ROLE_STAFF: 2,
    ROLE_MANAGER: 3,
    ROLE_ADMIN: 4,
    ROLE_SUPER_ADMIN: 5,
}


# ══════════════════════════════════════════════════════════════
# PERMISSION MATRIX
# ══════════════════════════════════════════════════════════════

ROLE_PERMISSIONS = {
    ROLE_USER: {
        Resource.FEEDBACK: {
            Action.CREATE: ALL,
            Action.READ: OWN,
            Action.UPDATE: OWN,
        },
        Resource.USERS: {
            Action.READ: OWN,
            Action.UPDATE: OWN,
        },
        Resource.CATEGORIES: {
            Action.READ: ALL,
        },
        Resource.NOTIFICATIONS: {
            Action.READ: OWN,
            Action.CREATE: ALL,
        },
        Resource.COMMENTS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: OWN,
            Action.DELETE: OWN,
        },
        Resource.CASES: {
            Action.CREATE: ALL,
            Action.READ: OWN,
            Action.UPDATE: OWN,
        },
        Resource.CASE_HISTORY: {
            Action.READ: OWN,
        },
        Resource.CASE_COMMENTS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: OWN,
            Action.DELETE: OWN,
        },
    },

    ROLE_STAFF: {
        Resource.FEEDBACK: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ASSIGNED,
        },
        Resource.USERS: {
            Action.READ: ALL,
            Action.UPDATE: OWN,
        },
        Resource.CATEGORIES: {
            Action.READ: ALL,
        },
        Resource.NOTIFICATIONS: {
            Action.READ: OWN,
            Action.UPDATE: OWN,
            Action.CREATE: ALL,
        },
        Resource.COMMENTS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: OWN,
        },
        Resource.CASES: {
            Action.CREATE: ALL,
            Action.READ: ASSIGNED,
            Action.UPDATE: ASSIGNED,
        },
        Resource.CASE_HISTORY: {
            Action.READ: ASSIGNED,
        },
        Resource.CASE_COMMENTS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: OWN,
        },
    },

    ROLE_MANAGER: {
        Resource.FEEDBACK: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.ASSIGN: ALL,
        },
        Resource.USERS: {
            Action.READ: ALL,
            Action.UPDATE: OWN,
        },
        Resource.CATEGORIES: {
            Action.READ: ALL,
            Action.CREATE: ALL,
            Action.UPDATE: ALL,
        },
        Resource.NOTIFICATIONS: {
            Action.READ: OWN,
            Action.CREATE: ALL,
            Action.UPDATE: OWN,
            Action.DELETE: OWN,
        },
        Resource.COMMENTS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: OWN,
        },
        Resource.CASES: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.ASSIGN: ALL,
        },
        Resource.CASE_HISTORY: {
            Action.READ: ALL,
        },
        Resource.CASE_COMMENTS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: OWN,
        },
    },

    ROLE_ADMIN: {
        Resource.FEEDBACK: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
            Action.ASSIGN: ALL,
        },
        Resource.USERS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
            Action.MANAGE_USERS: ALL,
        },
        Resource.CATEGORIES: {
            Action.READ: ALL,
            Action.CREATE: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
        },
        Resource.NOTIFICATIONS: {
            Action.READ: ALL,
            Action.CREATE: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
        },
        Resource.COMMENTS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: OWN,
            Action.DELETE: OWN,
        },
        Resource.CASES: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
            Action.ASSIGN: ALL,
        },
        Resource.CASE_HISTORY: {
            Action.READ: ALL,
            Action.DELETE: ALL,
        },
        Resource.CASE_COMMENTS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
        },
    },

    # super_admin bypasses the matrix; the entries document its reach.
    ROLE_SUPER_ADMIN: {
        Resource.FEEDBACK: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
            Action.ASSIGN: ALL,
            Action.EXPORT: ALL,
            Action.IMPORT: ALL,
        },
        Resource.USERS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
            Action.MANAGE_USERS: ALL,
        },
        Resource.CATEGORIES: {
            Action.READ: ALL,
            Action.CREATE: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
        },
        Resource.CASE_STATUSES: {
            Action.READ: ALL,
            Action.CREATE: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
        },
        Resource.NOTIFICATIONS: {
            Action.READ: ALL,
            Action.CREATE: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
        },
        Resource.COMMENTS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
        },
        Resource.SYSTEM: {
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.MANAGE_SETTINGS: ALL,
        },
        Resource.CASES: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
            Action.ASSIGN: ALL,
            Action.EXPORT: ALL,
            Action.IMPORT: ALL,
        },
        Resource.CASE_HISTORY: {
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
        },
        Resource.CASE_COMMENTS: {
            Action.CREATE: ALL,
            Action.READ: ALL,
            Action.UPDATE: ALL,
            Action.DELETE: ALL,
        },
    },
}


# ══════════════════════════════════════════════════════════════
# OWNERSHIP SCHEMA
# ══════════════════════════════════════════════════════════════

# resource_type -> {"owner_field", "assignee_field"}
OWNERSHIP_FIELDS = {
    Resource.FEEDBACK: {
        "owner_field": "createdBy",
        "assignee_field": "assignedTo",
    },
    Resource.USERS: {
        "owner_field": "id",
    },
    Resource.NOTIFICATIONS: {
        "owner_field": "userId",  # recipient
        "assignee_field": "triggerUserId",
    },
    Resource.COMMENTS: {
        "owner_field": "createdBy.id",
    },
    Resource.CATEGORIES: {},  # system-wide
    Resource.CASE_STATUSES: {},  # system-wide
    Resource.CASES: {
        "owner_field": "createdBy",
        "assignee_field": "assignedTo",
    },
    Resource.CASE_HISTORY: {
        "owner_field": "createdBy",
    },
    Resource.CASE_COMMENTS: {
        "owner_field": "createdBy",
    },
}


# ══════════════════════════════════════════════════════════════
# OWN FILTER OVERRIDES
# ══════════════════════════════════════════════════════════════

# Flat filter column for OWN where it differs from the owner field.
OWN_FILTER_OVERRIDES = {
    Resource.USERS: "id",
    Resource.NOTIFICATIONS: "userId",
}
