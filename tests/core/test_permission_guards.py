from __future__ import annotations

from core.permissions import (
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_STAFF,
    ROLE_USER,
    Action,
    Actor,
    DecisionCode,
    PermissionGuard,
    PermissionService,
    Resource,
    RestrictionLevel,
    default_policy_tables,
)


def _guard() -> PermissionGuard:
    return PermissionGuard(PermissionService(default_policy_tables()))


class LookupRecorder:
    def __init__(self, result=None, error: Exception | None = None):
        self.calls = 0
        self._result = result
        self._error = error

    def __call__(self):
        self.calls += 1
        if self._error is not None:
            raise self._error
        return self._result


def test_missing_actor_is_401():
    result = _guard().require_permission(None, Resource.CASES, Action.READ)

    assert result.allowed is False
    assert result.status_code == 401
    assert result.code is DecisionCode.UNAUTHORIZED
    assert result.to_error_payload() == {
        "success": False,
        "message": "Authentication required",
        "error": "UNAUTHORIZED",
    }


def test_missing_actor_never_loads_resource():
    loader = LookupRecorder(result={"createdBy": 1})

    _guard().require_permission(None, Resource.CASES, Action.READ, load_resource=loader)

    assert loader.calls == 0


def test_inactive_actor_is_401():
    actor = Actor(id=1, role=ROLE_ADMIN, is_active=False)

    result = _guard().require_permission(actor, Resource.CASES, Action.READ)

    assert result.status_code == 401


def test_matrix_denial_is_403():
    result = _guard().require_permission(Actor(id=1, role=ROLE_USER), Resource.SYSTEM, Action.READ)

    assert result.status_code == 403
    assert result.code is DecisionCode.INSUFFICIENT_PERMISSIONS
    assert result.decision is not None
    assert result.query_filter is None


def test_failed_lookup_is_404_when_required():
    loader = LookupRecorder(error=LookupError("case 12 not found"))

    result = _guard().require_permission(
        Actor(id=1, role=ROLE_USER), Resource.CASES, Action.READ, load_resource=loader
    )

    assert result.status_code == 404
    assert result.code is DecisionCode.RESOURCE_NOT_FOUND


def test_failed_lookup_falls_back_to_collection_check_when_optional():
    loader = LookupRecorder(error=LookupError("gone"))

    result = _guard().require_permission(
        Actor(id=1, role=ROLE_USER),
        Resource.CASES,
        Action.READ,
        load_resource=loader,
        require_resource=False,
    )

    assert result.allowed is True
    assert result.target is None
    assert result.decision.restriction is RestrictionLevel.OWN


def test_instance_denial_is_403():
    loader = LookupRecorder(result={"createdBy": 2})

    result = _guard().require_permission(
        Actor(id=1, role=ROLE_USER), Resource.CASES, Action.UPDATE, load_resource=loader
    )

    assert result.status_code == 403
    assert result.code is DecisionCode.RESOURCE_ACCESS_DENIED


def test_allowed_request_carries_target_and_query_filter():
    case = {"createdBy": 1}
    loader = LookupRecorder(result=case)

    result = _guard().require_permission(
        Actor(id=1, role=ROLE_USER), Resource.CASES, Action.READ, load_resource=loader
    )

    assert result.allowed is True
    assert result.status_code == 200
    assert result.target is case
    assert result.query_filter.as_dict() == {"createdBy": 1}


def test_authorization_error_is_500():
    service = PermissionService(default_policy_tables())

    class _BrokenAuthorizer:
        def can_access_resource(self, actor, instance, resource_type, restriction):
            raise RuntimeError("boom")

    service.authorizer._authorizer = _BrokenAuthorizer()
    guard = PermissionGuard(service)

    result = guard.require_permission(
        Actor(id=1, role=ROLE_USER),
        Resource.CASES,
        Action.READ,
        load_resource=LookupRecorder(result={"createdBy": 1}),
    )

    assert result.status_code == 500
    assert result.code is DecisionCode.AUTHORIZATION_ERROR


def test_require_role():
    guard = _guard()

    assert guard.require_role(Actor(id=1, role=ROLE_MANAGER), ROLE_STAFF).status_code == 200

    denied = guard.require_role(Actor(id=1, role=ROLE_STAFF), ROLE_MANAGER)
    assert denied.status_code == 403
    assert denied.code is DecisionCode.INSUFFICIENT_ROLE
    assert denied.message == "Role 'manager' or higher required"

    assert guard.require_role(None, ROLE_USER).status_code == 401
    assert guard.require_role(Actor(id=1, role=ROLE_ADMIN, is_active=False), ROLE_USER).status_code == 401
