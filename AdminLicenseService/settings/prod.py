"""
Production settings for AdminLicenseService.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = [host for host in os.environ.get("ALLOWED_HOSTS", "").split(",") if host]

# Security settings
SECURE_SSL_REDIRECT = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

if "SECRET_KEY" not in os.environ:
    raise RuntimeError("SECRET_KEY must be set in production")

# Logging in production
LOGGING["handlers"]["file"] = {  # noqa: F405
    "class": "logging.handlers.RotatingFileHandler",
    "filename": os.environ.get("LOG_FILE", "/var/log/admin_license_service/app.log"),
    "maxBytes": 1024 * 1024 * 10,  # 10 MB
    "backupCount": 10,
    "formatter": "json",
}
LOGGING["root"]["handlers"].append("file")  # noqa: F405
