"""
Notifications module - write-only notification records.

Lifecycle events are turned into notification rows for the
superadmin and admin dashboards.
"""
