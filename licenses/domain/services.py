"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
from typing import Callable

from core.domain.exceptions import LicenseKeyConflictError, LicenseKeyExhaustedError
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


def allocate_license(
    repository: LicenseRepository,
    build: Callable[[str], License],
    generate_key: Callable[[], str],
    max_attempts: int,
) -> License:
    """
    Persist a new license under a key nobody else holds.

    The existence check is only a pre-check; the store's unique
    constraint is authoritative and a conflict on create counts as
    one spent attempt.

    Args:
        repository: License store
        build: Builds the unsaved entity for a candidate key
        generate_key: Returns a candidate key
        max_attempts: Retry budget

    Returns:
        Saved License entity

    Raises:
        LicenseKeyExhaustedError: If every candidate collided
    """
    for attempt in range(1, max_attempts + 1):
        candidate = generate_key()
        if repository.exists_by_key(candidate):
            logger.warning("License key collision on attempt %d", attempt)
            continue
        try:
            return repository.create(build(candidate))
        except LicenseKeyConflictError:
            logger.warning("License key conflict on insert, attempt %d", attempt)
    raise LicenseKeyExhaustedError()
