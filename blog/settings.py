from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-only-not-secret")
DEBUG = os.environ.get("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    "posts",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DATABASE_PATH", str(BASE_DIR / "catalog.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

TIME_ZONE = os.environ.get("TIME_ZONE", "UTC")
USE_TZ = True

# Post folder
POSTS_ROOT = Path(os.environ.get("POSTS_ROOT", BASE_DIR / "_posts"))
POSTS_IGNORE = {"README.md"}
POSTS_REQUIRED_FIELDS = ("layout", "title", "date", "categories")
POSTS_EXCERPT_SEPARATOR = "\n\n"
POSTS_DEFAULT_LAYOUT = "post"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "{levelname} {name}: {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "posts": {
            "handlers": ["console"],
            "level": os.environ.get("POSTS_LOG_LEVEL", "WARNING"),
        },
    },
}
