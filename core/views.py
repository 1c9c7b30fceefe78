"""
Core views for health checks.
"""

import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "healthy", "service": "admin-license-service"})


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        """Check database connectivity."""
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
        except DatabaseError as e:
            logger.warning("Database health check failed: %s", e)
            return JsonResponse(
                {"status": "unhealthy", "database": "disconnected", "error": str(e)},
                status=503,
            )
        return JsonResponse(
            {"status": "healthy", "database": "connected", "vendor": connection.vendor}
        )
