"""
Casedesk Permissions - Ownership Field Resolution
=================================================
Resolves dotted field paths ("createdBy.id") on resource instances.

Instances are owned by the calling collaborator: mappings (decoded JSON,
DB rows) or plain objects (ORM models, dataclasses). Resolution reads,
never mutates.

Paths are parsed once. OwnershipResolver compiles one accessor per
(resource_type, owner kind) when it is built, so request-time resolution
is a straight walk over pre-split segments.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple

from core.permissions.exceptions import InvalidFieldPathError

if TYPE_CHECKING:
    from core.permissions.registry import PolicyTables

OWNER = "owner"
ASSIGNEE = "assignee"

FieldAccessor = Callable[[Any], Any]


def split_field_path(path: str) -> Tuple[str, ...]:
    """Split a dotted path into segments. Raises InvalidFieldPathError."""
    if not isinstance(path, str) or not path:
        raise InvalidFieldPathError(path)

    segments = tuple(path.split("."))
    if any(not segment for segment in segments):
        raise InvalidFieldPathError(path)
    return segments


def _walk(instance: Any, segments: Tuple[str, ...]) -> Any:
    current = instance
    for segment in segments:
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(segment)
        else:
            current = getattr(current, segment, None)
    return current


def resolve_field(instance: Any, path: str) -> Any:
    """
    Resolve a dotted path on an instance.

    Any missing or None intermediate short-circuits to None.
    """
    return _walk(instance, split_field_path(path))


def compile_field_path(path: str) -> FieldAccessor:
    """Pre-split a path and return an accessor bound to it."""
    segments = split_field_path(path)

    def accessor(instance: Any) -> Any:
        return _walk(instance, segments)

    accessor.__qualname__ = f"field_accessor[{path}]"
    return accessor


class OwnershipResolver:
    """Per-resource owner/assignee accessors compiled from the ownership schema."""

    def __init__(self, tables: "PolicyTables"):
        self._accessors: Dict[Tuple[str, str], FieldAccessor] = {}
        self._declared = frozenset(tables.ownership)

        for resource_type, rule in tables.ownership.items():
            if rule.owner_field is not None:
                self._accessors[(resource_type, OWNER)] = compile_field_path(
                    rule.owner_field
                )
            if rule.assignee_field is not None:
                self._accessors[(resource_type, ASSIGNEE)] = compile_field_path(
                    rule.assignee_field
                )

    def has_rule(self, resource_type: str) -> bool:
        """True when the ownership schema declares the resource type at all."""
        return resource_type in self._declared

    def has_accessor(self, resource_type: str, kind: str) -> bool:
        return (resource_type, kind) in self._accessors

    def resolve(self, instance: Any, resource_type: str, kind: str) -> Optional[Any]:
        """Resolve the owner or assignee identity. None if undeclared or absent."""
        accessor = self._accessors.get((resource_type, kind))
        if accessor is None:
            return None
        return accessor(instance)

    def resolve_owner(self, instance: Any, resource_type: str) -> Optional[Any]:
        return self.resolve(instance, resource_type, OWNER)

    def resolve_assignee(self, instance: Any, resource_type: str) -> Optional[Any]:
        return self.resolve(instance, resource_type, ASSIGNEE)
