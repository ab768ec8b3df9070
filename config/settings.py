"""
Ticketing – Django Settings (Infrastructure Only)
==================================================
Django serves as the HTTP container for the ticketing platform.
The platform architecture is the authority — Django does not dictate
structure. No database-backed apps: journal and projections live in
process memory.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "DJANGO_SECRET_KEY", "ticketing-dev-key-replace-before-deployment"
)

DEBUG = os.environ.get("DJANGO_DEBUG", "1") == "1"

ALLOWED_HOSTS = [
    host for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "").split(",") if host
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
# Unused by the platform; Django requires a default alias.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Ticketing platform ────────────────────────────────────────
# Read by adapters.django_api.wiring via TicketingConfig.from_mapping().
TICKETING = {
    "ADMIN_IDENTITY": os.environ.get("TICKETING_ADMIN_IDENTITY", "platform-admin"),
    "MIN_TICKET_PRICE": os.environ.get("TICKETING_MIN_TICKET_PRICE", 1_000_000),
    "PLATFORM_FEE_PERCENT": os.environ.get("TICKETING_PLATFORM_FEE_PERCENT", 5),
    "BLOCK_INTERVAL_SECONDS": os.environ.get("TICKETING_BLOCK_INTERVAL_SECONDS", 600),
    "GENESIS_BALANCE": os.environ.get("TICKETING_GENESIS_BALANCE", 0),
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "ticketing": {
            "handlers": ["console"],
            "level": os.environ.get("TICKETING_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
