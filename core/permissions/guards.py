"""
Casedesk Permissions - Request Guards
=====================================
Framework-neutral checks run before a handler executes:
  1. Authentication present
  2. Target resource loaded (optional)
  3. Authorization decision
  4. Query filter compiled for the handler

The HTTP layer maps GuardResult.status_code onto its own response type.
Fail-safe: on any error -> DENY (never permissive on error).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from core.permissions.constants import DecisionCode
from core.permissions.models import Actor, AuthorizationDecision
from core.permissions.query_filters import QueryFilter
from core.permissions.service import PermissionService

logger = logging.getLogger("casedesk.permissions")

STATUS_OK = 200
STATUS_UNAUTHORIZED = 401
STATUS_FORBIDDEN = 403
STATUS_NOT_FOUND = 404
STATUS_SERVER_ERROR = 500

_STATUS_BY_CODE = {
    DecisionCode.AUTHORIZED: STATUS_OK,
    DecisionCode.UNAUTHORIZED: STATUS_UNAUTHORIZED,
    DecisionCode.RESOURCE_NOT_FOUND: STATUS_NOT_FOUND,
    DecisionCode.AUTHORIZATION_ERROR: STATUS_SERVER_ERROR,
}


def status_for(code: DecisionCode) -> int:
    return _STATUS_BY_CODE.get(code, STATUS_FORBIDDEN)


@dataclass(frozen=True)
class GuardResult:
    allowed: bool
    code: DecisionCode
    message: str
    status_code: int
    decision: Optional[AuthorizationDecision] = None
    query_filter: Optional[QueryFilter] = None
    target: Any = None

    def to_error_payload(self) -> dict:
        return {
            "success": False,
            "message": self.message,
            "error": self.code.value,
        }


def _reject(code: DecisionCode, message: str) -> GuardResult:
    return GuardResult(
        allowed=False,
        code=code,
        message=message,
        status_code=status_for(code),
    )


class PermissionGuard:
    def __init__(self, service: PermissionService):
        self._service = service

    def require_permission(
        self,
        actor: Optional[Actor],
        resource_type: str,
        action: str,
        load_resource: Optional[Callable[[], Any]] = None,
        require_resource: bool = True,
    ) -> GuardResult:
        """
        Gate a request on (resource_type, action), optionally against
        the instance returned by load_resource().

        load_resource raising -> 404 when require_resource, otherwise the
        check proceeds at collection level.
        """
        if actor is None:
            return _reject(DecisionCode.UNAUTHORIZED, "Authentication required")

        target = None
        if load_resource is not None:
            try:
                target = load_resource()
            except Exception as exc:
                if require_resource:
                    logger.debug(f"Guard target lookup failed for '{resource_type}': {exc}")
                    return _reject(DecisionCode.RESOURCE_NOT_FOUND, "Resource not found")
                target = None

        decision = self._service.authorize(actor, resource_type, action, target)
        if not decision.allowed:
            return GuardResult(
                allowed=False,
                code=decision.code,
                message=decision.reason,
                status_code=status_for(decision.code),
                decision=decision,
            )

        return GuardResult(
            allowed=True,
            code=DecisionCode.AUTHORIZED,
            message=decision.reason,
            status_code=STATUS_OK,
            decision=decision,
            query_filter=self._service.generate_query_filters(
                actor, resource_type, action
            ),
            target=target,
        )

    def require_role(self, actor: Optional[Actor], required_role: str) -> GuardResult:
        """Minimum-rank gate, independent of the permission matrix."""
        if actor is None or not actor.is_active:
            return _reject(DecisionCode.UNAUTHORIZED, "Authentication required")

        if not self._service.has_minimum_role(actor, required_role):
            return _reject(
                DecisionCode.INSUFFICIENT_ROLE,
                f"Role '{required_role}' or higher required",
            )

        return GuardResult(
            allowed=True,
            code=DecisionCode.AUTHORIZED,
            message=f"Role '{actor.role}' satisfies '{required_role}'",
            status_code=STATUS_OK,
        )
