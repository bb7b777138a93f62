"""
Casedesk Test Fixtures - App Configuration
==========================================
Minimal models standing in for the case and notification tables.
"""

from django.apps import AppConfig


class DjangoFixturesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "tests.django_fixtures"
    label = "casedesk_fixtures"
    verbose_name = "Casedesk Test Fixtures"
