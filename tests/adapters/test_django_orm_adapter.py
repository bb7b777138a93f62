from __future__ import annotations

import pytest

from adapters.django_orm import apply_query_filter, paginate_queryset, service_from_settings
from core.permissions import (
    ROLE_MANAGER,
    ROLE_STAFF,
    ROLE_USER,
    Action,
    Actor,
    PermissionEngineConfig,
    QueryFilter,
    Resource,
)
from tests.django_fixtures.models import CaseRecord, NotificationRecord

pytestmark = pytest.mark.django_db


FIELD_MAP = {
    "createdBy": "created_by",
    "assignedTo": "assigned_to",
    "userId": "user_id",
}


def _seed_cases() -> None:
    CaseRecord.objects.bulk_create(
        [
            CaseRecord(title="printer jam", created_by=5, assigned_to=8),
            CaseRecord(title="vpn down", created_by=6, assigned_to=8),
            CaseRecord(title="new laptop", created_by=5, assigned_to=9),
            CaseRecord(title="badge reset", created_by=7, assigned_to=None),
        ]
    )


def _seed_notifications() -> None:
    NotificationRecord.objects.bulk_create(
        [
            NotificationRecord(user_id=3, trigger_user_id=5, message="case assigned"),
            NotificationRecord(user_id=4, trigger_user_id=5, message="case closed"),
        ]
    )


def test_impossible_filter_issues_zero_queries(django_assert_num_queries):
    _seed_notifications()
    service = service_from_settings()
    actor = Actor(id=3, role=ROLE_USER)

    query_filter = service.generate_query_filters(actor, Resource.NOTIFICATIONS, Action.DELETE)
    assert query_filter.impossible

    with django_assert_num_queries(0):
        page = paginate_queryset(
            NotificationRecord.objects.all(), query_filter, limit=10, field_map=FIELD_MAP
        )
        scoped = apply_query_filter(NotificationRecord.objects.all(), query_filter)
        assert list(scoped) == []
        assert scoped.count() == 0

    assert page.data == []
    assert page.pagination.total == 0


def test_own_filter_pushes_down_owner_column():
    _seed_cases()
    service = service_from_settings()

    query_filter = service.generate_query_filters(Actor(id=5, role=ROLE_USER), Resource.CASES)
    scoped = apply_query_filter(CaseRecord.objects.all(), query_filter, FIELD_MAP)

    assert list(scoped.values_list("title", flat=True)) == ["printer jam", "new laptop"]


def test_assigned_filter_pushes_down_assignee_column():
    _seed_cases()
    service = service_from_settings()

    query_filter = service.generate_query_filters(Actor(id=8, role=ROLE_STAFF), Resource.CASES)
    page = paginate_queryset(CaseRecord.objects.all(), query_filter, limit=1, field_map=FIELD_MAP)

    assert [case.title for case in page.data] == ["printer jam"]
    assert page.pagination.total == 2
    assert page.pagination.has_next is True


def test_own_notifications_filter_by_recipient():
    _seed_notifications()
    service = service_from_settings()

    query_filter = service.generate_query_filters(Actor(id=4, role=ROLE_USER), Resource.NOTIFICATIONS)
    scoped = apply_query_filter(NotificationRecord.objects.all(), query_filter, FIELD_MAP)

    assert list(scoped.values_list("message", flat=True)) == ["case closed"]


def test_unrestricted_filter_returns_everything():
    _seed_cases()
    service = service_from_settings()

    query_filter = service.generate_query_filters(Actor(id=1, role=ROLE_MANAGER), Resource.CASES)
    page = paginate_queryset(CaseRecord.objects.all(), query_filter, limit=10)

    assert query_filter == QueryFilter.unrestricted()
    assert page.pagination.total == 4
    assert len(page.data) == 4


def test_unmapped_column_used_verbatim():
    _seed_cases()

    scoped = apply_query_filter(CaseRecord.objects.all(), QueryFilter.equals("created_by", 7))

    assert scoped.count() == 1


def test_service_reads_engine_config_from_settings(settings):
    settings.CASEDESK_PERMISSIONS = {"permit_own_without_owner_field": False}

    service = service_from_settings()

    assert service.config.permit_own_without_owner_field is False


def test_page_size_clamped_to_config_bounds():
    _seed_cases()
    config = PermissionEngineConfig(default_page_size=2, max_page_size=3)

    default_page = paginate_queryset(CaseRecord.objects.all(), QueryFilter.unrestricted(), config=config)
    capped_page = paginate_queryset(
        CaseRecord.objects.all(), QueryFilter.unrestricted(), limit=50, config=config
    )

    assert default_page.pagination.limit == 2
    assert len(default_page.data) == 2
    assert capped_page.pagination.limit == 3
    assert capped_page.pagination.total_pages == 2
