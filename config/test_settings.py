"""
Casedesk – Django Test Settings
===============================
Adds the fixture models used by the ORM adapter tests.
"""

from config.settings import *  # noqa: F401,F403
from config.settings import INSTALLED_APPS

INSTALLED_APPS = INSTALLED_APPS + [
    "tests.django_fixtures",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}
