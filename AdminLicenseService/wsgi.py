"""
WSGI config for AdminLicenseService project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "AdminLicenseService.settings.dev")

application = get_wsgi_application()
