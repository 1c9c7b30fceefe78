"""
Licenses module - License key and License management.

This module handles:
- License entity and key format
- Key generation and allocation
- License lifecycle (generate, activate, toggle, expiry, renew)
- License validation and expiry reporting
"""
