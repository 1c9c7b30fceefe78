"""
Core module shared by the account and license apps.

This module contains:
- Error kinds, value objects and the caller context
- The event bus, unit of work and raw SQL helpers
- Operation results and authorization guards
- Request observability and health checks
"""
