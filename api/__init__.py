"""
HTTP API for the admin license service.

Authentication, error mapping and versioned endpoints.
"""
