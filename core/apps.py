"""
App configuration for the core app.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    """Wires event handlers and tracing once the app registry is ready."""

    name = "core"
    verbose_name = "Core"

    def ready(self):
        """Called when Django starts."""
        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        register_event_handlers()
        setup_opentelemetry()
        logger.debug("Core app ready")
