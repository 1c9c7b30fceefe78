from accounts.infrastructure.models import Admin  # noqa: F401
