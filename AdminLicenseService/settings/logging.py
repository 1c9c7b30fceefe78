"""
Logging configuration for structured JSON logs.
"""

import sys

from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id
from pythonjsonlogger.json import JsonFormatter

APP_LOGGERS = ("core", "accounts", "licenses", "notifications", "api")


class TraceJsonFormatter(JsonFormatter):
    """JSON formatter that adds the current trace context."""

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_record["trace_id"] = format_trace_id(span_context.trace_id)
            log_record["span_id"] = format_span_id(span_context.span_id)


def get_logging_config(environment: str = "development") -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production, test)

    Returns:
        Django logging configuration dictionary
    """
    log_level = "DEBUG" if environment == "development" else "INFO"

    app_loggers = {
        name: {"handlers": ["console"], "level": log_level, "propagate": False}
        for name in APP_LOGGERS
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": TraceJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d",
            },
            "verbose": {
                "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": log_level,
        },
        "loggers": {
            "django": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "django.request": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            "django.db.backends": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            **app_loggers,
        },
    }
