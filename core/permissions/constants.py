"""
Casedesk Permissions - Vocabulary Constants
===========================================
Role, resource and action identifiers plus the closed enums used by
every decision the engine produces.

Identifiers are opaque strings. The engine never branches on them except
for the super admin role and the own-filter overrides declared in the
policy tables.
"""

from __future__ import annotations

from enum import Enum


# ══════════════════════════════════════════════════════════════
# RESTRICTION LEVELS
# ══════════════════════════════════════════════════════════════

class RestrictionLevel(Enum):
    """
    Degree of access a role holds for an action on a resource type.

    ALL is maximally permissive, NONE maximally restrictive.
    OWN and ASSIGNED are incomparable siblings.
    """
    NONE = "none"
    OWN = "own"
    ASSIGNED = "assigned"
    ALL = "all"


# ══════════════════════════════════════════════════════════════
# DECISION CODES
# ══════════════════════════════════════════════════════════════

class DecisionCode(Enum):
    """Machine-readable outcome of an authorization or guard check."""
    AUTHORIZED = "AUTHORIZED"
    UNAUTHORIZED = "UNAUTHORIZED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    RESOURCE_ACCESS_DENIED = "RESOURCE_ACCESS_DENIED"
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"

    # Guard-only codes
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    INSUFFICIENT_ROLE = "INSUFFICIENT_ROLE"


# ══════════════════════════════════════════════════════════════
# ROLES
# ══════════════════════════════════════════════════════════════

ROLE_USER = "user"
ROLE_STAFF = "staff"
ROLE_MANAGER = "manager"
ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "super_admin"

VALID_ROLES = frozenset({
    ROLE_USER,
    ROLE_STAFF,
    ROLE_MANAGER,
    ROLE_ADMIN,
    ROLE_SUPER_ADMIN,
})


# ══════════════════════════════════════════════════════════════
# RESOURCES
# ══════════════════════════════════════════════════════════════

class Resource:
    """
    Resource type identifiers.

    Convention: snake_case plural, matching the collaborator's table names.
    """

    FEEDBACK = "feedback"
    CASES = "cases"
    CASE_HISTORY = "case_history"
    CASE_COMMENTS = "case_comments"
    USERS = "users"
    CATEGORIES = "categories"
    CASE_STATUSES = "case_statuses"
    COMMENTS = "comments"
    FEEDBACK_HISTORY = "feedback_history"
    NOTIFICATIONS = "notifications"
    ANALYTICS = "analytics"
    SYSTEM = "system"


# ══════════════════════════════════════════════════════════════
# ACTIONS
# ══════════════════════════════════════════════════════════════

class Action:
    """Operation identifiers. CRUD plus the special actions."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"

    ASSIGN = "assign"
    EXPORT = "export"
    IMPORT = "import"
    MANAGE_SETTINGS = "manage_settings"
    VIEW_ANALYTICS = "view_analytics"
    MANAGE_USERS = "manage_users"
