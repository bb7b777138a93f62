"""
Casedesk Permissions - Public API
=================================
"""

from core.permissions.authorizer import (
    Authorizer,
    ResourceAuthorizer,
    ResourceFilterer,
)
from core.permissions.config import PermissionEngineConfig
from core.permissions.constants import (
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_STAFF,
    ROLE_SUPER_ADMIN,
    ROLE_USER,
    Action,
    DecisionCode,
    Resource,
    RestrictionLevel,
)
from core.permissions.evaluator import PermissionEvaluator
from core.permissions.exceptions import (
    InvalidFieldPathError,
    PermissionEngineError,
    PolicyConfigurationError,
)
from core.permissions.guards import GuardResult, PermissionGuard
from core.permissions.hierarchy import RoleHierarchy
from core.permissions.listing import Page, Pagination, empty_page, fetch_scoped_page
from core.permissions.models import (
    Actor,
    AuthorizationDecision,
    OwnershipRule,
    PermissionCheck,
)
from core.permissions.query_filters import QueryFilter, QueryFilterCompiler
from core.permissions.registry import (
    PolicyTables,
    build_policy_tables,
    default_policy_tables,
)
from core.permissions.resolver import (
    OwnershipResolver,
    compile_field_path,
    resolve_field,
)
from core.permissions.service import PermissionService, get_permission_service

__all__ = [
    "ROLE_USER",
    "ROLE_STAFF",
    "ROLE_MANAGER",
    "ROLE_ADMIN",
    "ROLE_SUPER_ADMIN",
    "Action",
    "Resource",
    "RestrictionLevel",
    "DecisionCode",
    "Actor",
    "OwnershipRule",
    "PermissionCheck",
    "AuthorizationDecision",
    "PermissionEngineConfig",
    "PermissionEngineError",
    "PolicyConfigurationError",
    "InvalidFieldPathError",
    "PolicyTables",
    "build_policy_tables",
    "default_policy_tables",
    "OwnershipResolver",
    "resolve_field",
    "compile_field_path",
    "PermissionEvaluator",
    "ResourceAuthorizer",
    "ResourceFilterer",
    "Authorizer",
    "QueryFilter",
    "QueryFilterCompiler",
    "RoleHierarchy",
    "PermissionService",
    "get_permission_service",
    "PermissionGuard",
    "GuardResult",
    "Page",
    "Pagination",
    "empty_page",
    "fetch_scoped_page",
]
