"""
Base Django settings for AdminLicenseService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-5v#n0c!k2q8r@w1d^admin-license-dev-only-key"
)

DEBUG = False

ALLOWED_HOSTS = []

# Application definition
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "core.apps.CoreConfig",
    "accounts",
    "licenses",
    "notifications",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "core.middleware.observability.ObservabilityMiddleware",
]

ROOT_URLCONF = "AdminLicenseService.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "AdminLicenseService.wsgi.application"
ASGI_APPLICATION = "AdminLicenseService.asgi.application"

# Database
# https://docs.djangoproject.com/en/5.0/ref/settings/#databases
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("DB_NAME", "admin_license_service"),
        "USER": os.environ.get("DB_USER", "postgres"),
        "PASSWORD": os.environ.get("DB_PASSWORD", "postgres"),
        "HOST": os.environ.get("DB_HOST", "localhost"),
        "PORT": os.environ.get("DB_PORT", "5432"),
        "OPTIONS": {
            "connect_timeout": 10,
        },
    }
}

# Internationalization
LANGUAGE_CODE = "en-us"
# Date-only expiry inputs are resolved to 23:59:59 in this zone
TIME_ZONE = os.environ.get("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Licensing
LICENSING = {
    "JWT_SECRET": os.environ.get("JWT_SECRET", ""),
    "JWT_ALGORITHM": os.environ.get("JWT_ALGORITHM", "HS256"),
    "KEY_GENERATION_ATTEMPTS": int(os.environ.get("LICENSE_KEY_GENERATION_ATTEMPTS", "10")),
    "EXPIRING_WINDOW_DAYS": int(os.environ.get("LICENSE_EXPIRING_WINDOW_DAYS", "7")),
    "STORE_BACKEND": os.environ.get("LICENSE_STORE_BACKEND", "orm"),
}

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "api.authentication.JWTAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "Admin License Service API",
    "DESCRIPTION": (
        "License key issuance and validation for admin accounts. "
        "Provides license endpoints for admins and management "
        "endpoints for the superadmin."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api/v1",
    "TAGS": [
        {"name": "License API", "description": "License activation, validation and issuance"},
        {"name": "Superadmin API", "description": "Admin and license management"},
        {"name": "Health", "description": "Health check endpoints"},
    ],
}

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "development"))
