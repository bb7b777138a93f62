from __future__ import annotations

import pytest

from core.permissions import (
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_STAFF,
    ROLE_SUPER_ADMIN,
    ROLE_USER,
    Action,
    PermissionEvaluator,
    Resource,
    RestrictionLevel,
    build_policy_tables,
    default_policy_tables,
)


def _evaluator() -> PermissionEvaluator:
    return PermissionEvaluator(default_policy_tables())


ALL_RESOURCES = [
    value for name, value in vars(Resource).items() if not name.startswith("_")
]
ALL_ACTIONS = [
    value for name, value in vars(Action).items() if not name.startswith("_")
]


def test_super_admin_allowed_everywhere_with_all_restriction():
    evaluator = _evaluator()

    for resource_type in ALL_RESOURCES + ["unknown_resource"]:
        for action in ALL_ACTIONS + ["unknown_action"]:
            check = evaluator.check_permission(ROLE_SUPER_ADMIN, resource_type, action)
            assert check.allowed is True
            assert check.restriction is RestrictionLevel.ALL


def test_missing_entries_deny_for_every_role():
    evaluator = _evaluator()
    tables = default_policy_tables()

    for role in (ROLE_USER, ROLE_STAFF, ROLE_MANAGER, ROLE_ADMIN):
        for resource_type in ALL_RESOURCES:
            for action in ALL_ACTIONS:
                if tables.lookup(role, resource_type, action) is not None:
                    continue
                check = evaluator.check_permission(role, resource_type, action)
                assert check.allowed is False
                assert check.restriction is RestrictionLevel.NONE


def test_explicit_entries_carry_restriction_level():
    evaluator = _evaluator()

    check = evaluator.check_permission(ROLE_STAFF, Resource.CASES, Action.READ)
    assert check.allowed is True
    assert check.restriction is RestrictionLevel.ASSIGNED

    check = evaluator.check_permission(ROLE_USER, Resource.FEEDBACK, Action.READ)
    assert check.restriction is RestrictionLevel.OWN

    check = evaluator.check_permission(ROLE_MANAGER, Resource.CASES, Action.ASSIGN)
    assert check.restriction is RestrictionLevel.ALL


def test_partial_grant_denies_only_missing_action():
    evaluator = _evaluator()

    assert evaluator.check_permission(ROLE_USER, Resource.NOTIFICATIONS, Action.READ).allowed
    check = evaluator.check_permission(ROLE_USER, Resource.NOTIFICATIONS, Action.DELETE)

    assert check.allowed is False
    assert "delete" in check.reason


@pytest.mark.parametrize(
    "role, resource_type, action, fragment",
    [
        ("ghost", Resource.CASES, Action.READ, "Role 'ghost' not found"),
        (ROLE_USER, Resource.SYSTEM, Action.READ, "No permissions for resource"),
        (ROLE_USER, Resource.CASES, "teleport", "No permission for action"),
    ],
)
def test_unknown_inputs_degrade_to_deny(role, resource_type, action, fragment):
    check = _evaluator().check_permission(role, resource_type, action)

    assert check.allowed is False
    assert check.restriction is RestrictionLevel.NONE
    assert fragment in check.reason


def test_explicit_none_entry_denies():
    tables = build_policy_tables(
        role_permissions={"clerk": {"ledgers": {"read": "none", "create": "all"}}},
        ownership_fields={},
        roles_hierarchy={"clerk": 1},
    )
    evaluator = PermissionEvaluator(tables)

    assert evaluator.check_permission("clerk", "ledgers", "read").allowed is False
    assert evaluator.check_permission("clerk", "ledgers", "create").allowed is True


def test_unhashable_role_is_denied_not_raised():
    check = _evaluator().check_permission(["user"], Resource.CASES, Action.READ)

    assert check.allowed is False
    assert check.reason == "Permission check failed"


def test_get_role_permissions_is_read_only():
    evaluator = _evaluator()

    permissions = evaluator.get_role_permissions(ROLE_USER)
    assert permissions[Resource.CATEGORIES][Action.READ] is RestrictionLevel.ALL

    with pytest.raises(TypeError):
        permissions[Resource.SYSTEM] = {}

    assert dict(evaluator.get_role_permissions("ghost")) == {}
