"""
Casedesk Permissions - Resource Authorization
=============================================
Combines the evaluator with ownership resolution to decide access to
concrete resource instances.

ResourceAuthorizer  -> one instance, given a restriction level
ResourceFilterer    -> in-memory collection (post-fetch filtering)
Authorizer          -> ordered decision path used by request handlers

Fail-safe: on any error -> DENY (never permissive on error).
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from core.permissions.config import PermissionEngineConfig
from core.permissions.constants import DecisionCode, RestrictionLevel
from core.permissions.evaluator import PermissionEvaluator
from core.permissions.models import Actor, AuthorizationDecision
from core.permissions.resolver import ASSIGNEE, OWNER, OwnershipResolver

logger = logging.getLogger("casedesk.permissions")


def is_active_actor(actor: Optional[Actor]) -> bool:
    return actor is not None and actor.is_active is True


# ══════════════════════════════════════════════════════════════
# RESOURCE AUTHORIZER
# ══════════════════════════════════════════════════════════════

class ResourceAuthorizer:
    """Decides access to one instance under a known restriction level."""

    def __init__(
        self,
        resolver: OwnershipResolver,
        config: PermissionEngineConfig,
    ):
        self._resolver = resolver
        self._config = config

    def _matches(self, actor: Actor, instance: Any, resource_type: str, kind: str) -> bool:
        value = self._resolver.resolve(instance, resource_type, kind)
        if value is None:
            return False
        # True == 1 in Python; identities must also agree on type
        return type(value) is type(actor.id) and value == actor.id

    def can_access_resource(
        self,
        actor: Actor,
        instance: Any,
        resource_type: str,
        restriction: RestrictionLevel,
    ) -> bool:
        try:
            if restriction is RestrictionLevel.ALL:
                return True

            if restriction is RestrictionLevel.NONE:
                return False

            if restriction is RestrictionLevel.OWN:
                if not self._resolver.has_accessor(resource_type, OWNER):
                    # declared without an owner field: nobody owns it
                    if self._resolver.has_rule(resource_type):
                        return False
                    if self._config.permit_own_without_owner_field:
                        logger.warning(
                            f"OWN access on '{resource_type}' permitted: "
                            "no ownership rule declared"
                        )
                        return True
                    return False
                return self._matches(actor, instance, resource_type, OWNER)

            if restriction is RestrictionLevel.ASSIGNED:
                if not self._resolver.has_accessor(resource_type, ASSIGNEE):
                    return False
                return self._matches(actor, instance, resource_type, ASSIGNEE)

            return False
        except Exception as exc:
            logger.error(
                f"Resource access check failed on '{resource_type}' "
                f"for actor {getattr(actor, 'id', None)!r}: {exc}",
                exc_info=True,
            )
            return False


# ══════════════════════════════════════════════════════════════
# RESOURCE FILTERER
# ══════════════════════════════════════════════════════════════

class ResourceFilterer:
    """
    Post-fetch filtering for when row-level restriction cannot be
    pushed down to storage (e.g. nested ownership paths).

    Stable: output preserves the input's relative order.
    """

    def __init__(
        self,
        evaluator: PermissionEvaluator,
        authorizer: ResourceAuthorizer,
    ):
        self._evaluator = evaluator
        self._authorizer = authorizer

    def filter_resources(
        self,
        actor: Optional[Actor],
        instances: Iterable[Any],
        resource_type: str,
        action: str,
    ) -> List[Any]:
        try:
            if not is_active_actor(actor) or instances is None:
                return []

            permission = self._evaluator.check_permission(
                actor.role, resource_type, action
            )
            if not permission.allowed:
                return []

            if permission.restriction is RestrictionLevel.ALL:
                return instances if isinstance(instances, list) else list(instances)

            return [
                instance
                for instance in instances
                if self._authorizer.can_access_resource(
                    actor, instance, resource_type, permission.restriction
                )
            ]
        except Exception as exc:
            logger.error(
                f"Resource filtering failed on '{resource_type}': {exc}",
                exc_info=True,
            )
            return []


# ══════════════════════════════════════════════════════════════
# AUTHORIZER (façade)
# ══════════════════════════════════════════════════════════════

class Authorizer:
    """
    Ordered decision path:
      1. Missing / inactive actor   -> UNAUTHORIZED
      2. Matrix denies              -> INSUFFICIENT_PERMISSIONS
      3. No target instance         -> AUTHORIZED (restriction carried)
      4. Target fails ownership     -> RESOURCE_ACCESS_DENIED
         otherwise                  -> AUTHORIZED
    """

    def __init__(
        self,
        evaluator: PermissionEvaluator,
        authorizer: ResourceAuthorizer,
    ):
        self._evaluator = evaluator
        self._authorizer = authorizer

    @staticmethod
    def _deny(code: DecisionCode, reason: str) -> AuthorizationDecision:
        return AuthorizationDecision(allowed=False, code=code, reason=reason)

    def authorize(
        self,
        actor: Optional[Actor],
        resource_type: str,
        action: str,
        target: Any = None,
    ) -> AuthorizationDecision:
        try:
            if not is_active_actor(actor):
                return self._deny(
                    DecisionCode.UNAUTHORIZED,
                    "User not authenticated or inactive",
                )

            permission = self._evaluator.check_permission(
                actor.role, resource_type, action
            )
            if not permission.allowed:
                logger.debug(
                    f"Denied {actor.role}:{actor.id} {action} on "
                    f"'{resource_type}': {permission.reason}"
                )
                return self._deny(
                    DecisionCode.INSUFFICIENT_PERMISSIONS,
                    permission.reason,
                )

            if target is None:
                return AuthorizationDecision(
                    allowed=True,
                    code=DecisionCode.AUTHORIZED,
                    reason=permission.reason,
                    restriction=permission.restriction,
                )

            if not self._authorizer.can_access_resource(
                actor, target, resource_type, permission.restriction
            ):
                logger.debug(
                    f"Denied {actor.role}:{actor.id} {action} on '{resource_type}' "
                    f"instance: {permission.restriction.value} restriction not met"
                )
                return self._deny(
                    DecisionCode.RESOURCE_ACCESS_DENIED,
                    f"Access denied: {permission.restriction.value} "
                    "restriction not met",
                )

            return AuthorizationDecision(
                allowed=True,
                code=DecisionCode.AUTHORIZED,
                reason="Access granted to specific resource",
                restriction=permission.restriction,
            )
        except Exception as exc:
            logger.error(
                f"Authorization failed for {action!r} on {resource_type!r}: {exc}",
                exc_info=True,
            )
            return self._deny(
                DecisionCode.AUTHORIZATION_ERROR,
                "Authorization check failed",
            )
