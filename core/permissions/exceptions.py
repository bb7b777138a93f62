"""
Casedesk Permissions - Exceptions
=================================
Structured errors for permission engine operations.

These are engine-internal errors, NOT authorization denials.
Denials flow through PermissionCheck / AuthorizationDecision.
Only PolicyConfigurationError escapes, and only while the policy
tables are being built at startup.
"""

from __future__ import annotations


class PermissionEngineError(Exception):
    """Base error for permission engine operations."""
    pass


class PolicyConfigurationError(PermissionEngineError):
    """Static policy tables failed validation."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Invalid policy configuration: {message}")


class InvalidFieldPathError(PermissionEngineError):
    """A dotted ownership field path is malformed."""

    def __init__(self, path):
        self.path = path
        super().__init__(
            f"Field path {path!r} is not a valid dotted path. "
            "Expected non-empty segments separated by '.'."
        )
