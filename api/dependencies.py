"""
Composition root for the API layer.

Builds the configuration, the store adapters and the lifecycle service
that views call. Nothing below this module reads Django settings.
"""
from typing import Tuple

from accounts.infrastructure.repositories.django_admin_repository import DjangoAdminRepository
from accounts.infrastructure.repositories.sql_admin_repository import SqlAdminRepository
from accounts.ports.admin_repository import AdminRepository
from core.config import STORE_BACKEND_SQL, LicensingConfig
from core.infrastructure.database import DjangoUnitOfWork
from core.infrastructure.events import event_bus
from licenses.application.services.lifecycle_service import LicenseLifecycleService
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)
from licenses.infrastructure.repositories.sql_license_repository import SqlLicenseRepository
from licenses.ports.license_repository import LicenseRepository


def get_licensing_config() -> LicensingConfig:
    """Build the licensing configuration from current settings."""
    return LicensingConfig.from_settings()


def build_repositories(config: LicensingConfig) -> Tuple[LicenseRepository, AdminRepository]:
    """
    Select the store adapter pair named by the configuration.

    Args:
        config: Licensing configuration

    Returns:
        (license repository, admin repository)
    """
    if config.store_backend == STORE_BACKEND_SQL:
        return SqlLicenseRepository(), SqlAdminRepository()
    return DjangoLicenseRepository(), DjangoAdminRepository()


def get_lifecycle_service(config: LicensingConfig = None) -> LicenseLifecycleService:
    """
    Build the lifecycle service wired to Django's database and event bus.

    Args:
        config: Licensing configuration (read from settings when omitted)

    Returns:
        LicenseLifecycleService
    """
    config = config or get_licensing_config()
    license_repository, admin_repository = build_repositories(config)
    return LicenseLifecycleService(
        license_repository=license_repository,
        admin_repository=admin_repository,
        unit_of_work=DjangoUnitOfWork(),
        event_bus=event_bus,
        config=config,
    )
