"""
Casedesk Permissions - Immutable Decision Models
================================================
Actor identity, ownership rules and the decision structures
returned by the evaluator and the authorizer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from core.permissions.constants import DecisionCode, RestrictionLevel
from core.permissions.resolver import split_field_path


# ══════════════════════════════════════════════════════════════
# ACTOR
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Actor:
    """
    Authenticated principal, produced by the authentication layer
    from a verified session or token.
    """

    id: int
    role: str
    is_active: bool = True

    def __post_init__(self):
        if not self.role or not isinstance(self.role, str):
            raise ValueError("role must be a non-empty string.")

        if not isinstance(self.is_active, bool):
            raise ValueError("is_active must be a bool.")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Actor":
        """
        Build an Actor from an auth payload ({id, role, isActive}).

        isActive is passed through as-is: a non-bool value such as "false"
        raises ValueError instead of being read as truthy.
        """
        if "isActive" in data:
            is_active = data["isActive"]
        else:
            is_active = data.get("is_active", True)
        return cls(id=data["id"], role=data["role"], is_active=is_active)


# ══════════════════════════════════════════════════════════════
# OWNERSHIP RULE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OwnershipRule:
    """
    Where a resource instance names its owning and assigned actor.

    Both fields are optional dotted paths, e.g. "createdBy.id".
    System-wide resources (categories, statuses) declare neither.
    """

    owner_field: Optional[str] = None
    assignee_field: Optional[str] = None

    def __post_init__(self):
        # Raises InvalidFieldPathError on malformed paths.
        if self.owner_field is not None:
            split_field_path(self.owner_field)
        if self.assignee_field is not None:
            split_field_path(self.assignee_field)

    @property
    def owner_column(self) -> Optional[str]:
        """First path segment, the only part usable as a flat filter column."""
        if self.owner_field is None:
            return None
        return split_field_path(self.owner_field)[0]

    @property
    def assignee_column(self) -> Optional[str]:
        if self.assignee_field is None:
            return None
        return split_field_path(self.assignee_field)[0]


# ══════════════════════════════════════════════════════════════
# PERMISSION CHECK (matrix lookup outcome)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PermissionCheck:
    allowed: bool
    restriction: RestrictionLevel
    reason: str = ""


# ══════════════════════════════════════════════════════════════
# AUTHORIZATION DECISION
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AuthorizationDecision:
    """
    Outcome of Authorizer.authorize().

    Fields:
        allowed:      True if the request may proceed.
        code:         Machine-readable DecisionCode.
        reason:       Human-readable diagnostic. Never used for control flow.
        restriction:  Restriction level the caller must still apply.
                      Present only on allowed decisions.
    """

    allowed: bool
    code: DecisionCode
    reason: str
    restriction: Optional[RestrictionLevel] = None

    def to_dict(self) -> dict:
        payload = {
            "allowed": self.allowed,
            "reason": self.reason,
            "code": self.code.value,
        }
        if self.restriction is not None:
            payload["restriction"] = self.restriction.value
        return payload
