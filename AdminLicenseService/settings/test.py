"""
Test settings for AdminLicenseService.
"""

import os
import urllib.parse

from .base import *  # noqa: F403, F401

DEBUG = False

# Use PostgreSQL in CI (from DATABASE_URL), SQLite in-memory for local tests
DATABASE_URL = os.environ.get("DATABASE_URL")
if DATABASE_URL and DATABASE_URL.startswith("postgresql"):
    parsed = urllib.parse.urlparse(DATABASE_URL)
    db_name = parsed.path.lstrip("/")
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": db_name,
            "USER": parsed.username or "postgres",
            "PASSWORD": parsed.password or "",
            "HOST": parsed.hostname or "localhost",
            "PORT": parsed.port or 5432,
            "TEST": {"NAME": db_name + "_test"},
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

TIME_ZONE = "UTC"

LICENSING = {
    **LICENSING,  # noqa: F405
    "JWT_SECRET": "test-jwt-secret-with-enough-length-for-hs256",
    "JWT_ALGORITHM": "HS256",
}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Disable logging during tests
LOGGING_CONFIG = None
