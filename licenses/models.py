from licenses.infrastructure.models import License  # noqa: F401
