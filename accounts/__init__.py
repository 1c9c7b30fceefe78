"""
Accounts module - Admin account management.

This module handles:
- Admin entity and domain logic
- Admin persistence (ORM and raw SQL adapters)
- Creating admins together with their license
- Admin activation toggling
"""
