"""
Storefront – Django Settings (Infrastructure Only)
===================================================
Django serves as the framework container for the checkout HTTP
adapter. Pricing logic lives in engines/ and does not depend on it.

Storefront values are read from environment variables so deployments
can change currency or default fees without code changes.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "storefront-dev-key-replace-before-deployment")

DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"

ALLOWED_HOSTS = [
    h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if h.strip()
]

# ── Installed Apps ────────────────────────────────────────────
# The adapter needs no models; the offers/orders tables are owned by
# the hosted database, not by Django.
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
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Storefront ────────────────────────────────────────────────
STOREFRONT_NAME = os.getenv("STOREFRONT_NAME", "Mazaq")
STOREFRONT_CURRENCY = os.getenv("STOREFRONT_CURRENCY", "EGP")
STOREFRONT_DEFAULT_DELIVERY_FEE = float(os.getenv("STOREFRONT_DEFAULT_DELIVERY_FEE", "0"))
STOREFRONT_LOG_LEVEL = os.getenv("STOREFRONT_LOG_LEVEL", "INFO")

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "loggers": {
        "storefront": {
            "handlers": ["console"],
            "level": STOREFRONT_LOG_LEVEL,
            "propagate": True,
        },
    },
}
