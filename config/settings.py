"""
Gestor - Django Settings (Infrastructure Only)
================================================
Django provides the settings container and the ORM behind the
durable persistence mirror. The engines do not depend on Django
being configured.
"""

import os
from decimal import Decimal
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("GESTOR_SECRET_KEY", "gestor-dev-key-replace-before-deployment")

DEBUG = os.environ.get("GESTOR_DEBUG", "1") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # ── Gestor modules ────────────────────────────────────
    "core.persistence",
    "core.bootstrap",
]

# ── Database ──────────────────────────────────────────────────
# SQLite file next to the project unless GESTOR_DB_PATH says otherwise.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("GESTOR_DB_PATH", str(BASE_DIR / "gestor.sqlite3")),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "pt-br"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "gestor": {
            "handlers": ["console"],
            "level": os.environ.get("GESTOR_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}

# ── Shop defaults ─────────────────────────────────────────────
GESTOR_DEFAULT_MARKETPLACE_FEES = {
    "shopee": Decimal("12"),
    "mercadolivre": Decimal("16"),
    "amazon": Decimal("15"),
}
GESTOR_DEFAULT_SHIPPING_COST = Decimal("0")
GESTOR_LOW_STOCK_THRESHOLD = 5

# Slot → storage key overrides; unset slots keep the dashboard names.
GESTOR_STORAGE_KEYS = {}
