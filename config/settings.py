"""
Casedesk – Django Settings (Infrastructure Only)
================================================
Django serves as the framework container for the ORM adapter.
The permission engine is the authority; Django does not dictate its
structure, and the engine imports nothing from Django.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("CASEDESK_SECRET_KEY", "casedesk-dev-key-replace-before-deployment")

DEBUG = os.environ.get("CASEDESK_DEBUG", "1") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
]

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Permission engine ─────────────────────────────────────────
# Read by core.permissions.config.PermissionEngineConfig.from_settings().
CASEDESK_PERMISSIONS = {
    "permit_own_without_owner_field": True,
    "default_page_size": 20,
    "max_page_size": 100,
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {"class": "logging.StreamHandler"},
    },
    "loggers": {
        "casedesk": {
            "handlers": ["console"],
            "level": os.environ.get("CASEDESK_LOG_LEVEL", "INFO"),
        },
    },
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
