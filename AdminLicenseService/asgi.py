"""
ASGI config for AdminLicenseService project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "AdminLicenseService.settings.dev")

application = get_asgi_application()
