"""
Casedesk Permissions - Engine Configuration
===========================================
Behavioral switches for the permission engine.

Policy itself (matrix, ownership, hierarchy) is NOT configuration here;
it is compiled-in data validated by core.permissions.registry.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from core.permissions.constants import Action
from core.permissions.exceptions import PolicyConfigurationError

SETTINGS_KEY = "CASEDESK_PERMISSIONS"


@dataclass(frozen=True)
class PermissionEngineConfig:
    """
    Fields:
        permit_own_without_owner_field:
            OWN on a resource type whose schema declares no owner field
            grants access (True) or denies it (False).
        default_action:     Action used by list helpers when none is given.
        default_page_size:  Page size for scoped listings.
        max_page_size:      Upper bound applied to requested page sizes.
    """

    permit_own_without_owner_field: bool = True
    default_action: str = Action.READ
    default_page_size: int = 20
    max_page_size: int = 100

    def __post_init__(self) -> None:
        if not isinstance(self.permit_own_without_owner_field, bool):
            raise PolicyConfigurationError(
                "permit_own_without_owner_field must be a bool."
            )

        if not self.default_action or not isinstance(self.default_action, str):
            raise PolicyConfigurationError(
                "default_action must be a non-empty string."
            )

        if self.default_page_size < 1 or self.max_page_size < 1:
            raise PolicyConfigurationError("page sizes must be positive.")

        if self.default_page_size > self.max_page_size:
            raise PolicyConfigurationError(
                f"default_page_size ({self.default_page_size}) exceeds "
                f"max_page_size ({self.max_page_size})."
            )

    def clamp_page_size(self, limit: int | None) -> int:
        if limit is None or limit < 1:
            return self.default_page_size
        return min(limit, self.max_page_size)

    @classmethod
    def from_settings(cls, settings: Any) -> "PermissionEngineConfig":
        """
        Read overrides from settings.CASEDESK_PERMISSIONS (a dict).

        Works with django.conf.settings or any object exposing the
        attribute. Missing attribute -> defaults.
        """
        overrides = getattr(settings, SETTINGS_KEY, None) or {}
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise PolicyConfigurationError(
                f"{SETTINGS_KEY} has unknown keys: {sorted(unknown)}"
            )
        return cls(**overrides)
