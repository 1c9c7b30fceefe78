"""
Pytest configuration and shared fixtures.
"""

import random
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from django.conf import settings
from django.contrib.auth.hashers import make_password

from accounts.domain.admin import Admin
from accounts.infrastructure.repositories.django_admin_repository import DjangoAdminRepository
from accounts.infrastructure.repositories.sql_admin_repository import SqlAdminRepository
from core.config import LicensingConfig
from core.domain.value_objects import CallerContext, UserRole
from fakes import (
    InMemoryAdminRepository,
    InMemoryLicenseRepository,
    InMemoryStore,
    RecordingEventBus,
    SnapshotUnitOfWork,
)
from licenses.application.services.lifecycle_service import LicenseLifecycleService
from licenses.domain.license_key import generate_license_key
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)
from licenses.infrastructure.repositories.sql_license_repository import SqlLicenseRepository

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)
SUPERADMIN_EMAIL = "root@example.com"


@pytest.fixture
def config():
    """Fixture for LicensingConfig."""
    return LicensingConfig(jwt_secret="unit-test-secret")


@pytest.fixture
def store():
    """Fixture for the in-memory tables."""
    return InMemoryStore()


@pytest.fixture
def fake_license_repository(store):
    return InMemoryLicenseRepository(store)


@pytest.fixture
def fake_admin_repository(store):
    return InMemoryAdminRepository(store)


@pytest.fixture
def unit_of_work(store):
    return SnapshotUnitOfWork(store)


@pytest.fixture
def recording_bus(unit_of_work):
    return RecordingEventBus(unit_of_work)


@pytest.fixture
def clock():
    """Fixture for a clock frozen at NOW; tests may move ``clock.now``."""

    class FrozenClock:
        now = NOW

        def __call__(self):
            return self.now

    return FrozenClock()


@pytest.fixture
def key_generator():
    """Fixture for a seeded key generator."""
    rng = random.Random(1234)
    return lambda: generate_license_key(rng)


@pytest.fixture
def make_service(
    fake_license_repository, fake_admin_repository, unit_of_work, recording_bus, config, clock
):
    """Factory fixture for a LicenseLifecycleService over the in-memory stores."""

    def build(key_generator=None, service_config=None):
        rng = random.Random(1234)
        return LicenseLifecycleService(
            license_repository=fake_license_repository,
            admin_repository=fake_admin_repository,
            unit_of_work=unit_of_work,
            event_bus=recording_bus,
            config=service_config or config,
            key_generator=key_generator or (lambda: generate_license_key(rng)),
            password_hasher=lambda raw: f"hashed:{raw}",
            clock=clock,
            tz=timezone.utc,
        )

    return build


@pytest.fixture
def service(make_service):
    """Fixture for a LicenseLifecycleService over the in-memory stores."""
    return make_service()


@pytest.fixture
def superadmin():
    """Fixture for a superadmin caller."""
    return CallerContext(email=SUPERADMIN_EMAIL, role=UserRole.SUPERADMIN, user_id=1)


@pytest.fixture
def registered_admin(fake_admin_repository):
    """Fixture for an admin account in the in-memory store, and its caller."""

    def register(email="a@x.com", name="Alice"):
        admin = fake_admin_repository.create(
            Admin.create(email=email, password_hash="hashed:pw", name=name, now=NOW)
        )
        return admin, CallerContext(email=email, role=UserRole.ADMIN, user_id=admin.id)

    return register


@pytest.fixture(params=["orm", "sql"])
def repositories(request, db):
    """Fixture for each (license, admin) store adapter pair."""
    if request.param == "sql":
        return SqlLicenseRepository(), SqlAdminRepository()
    return DjangoLicenseRepository(), DjangoAdminRepository()


@pytest.fixture
def license_repository(repositories):
    return repositories[0]


@pytest.fixture
def admin_repository(repositories):
    return repositories[1]


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def make_token():
    """Factory fixture for signed bearer tokens."""

    def make(email, role="admin", expires_in=timedelta(hours=1), secret=None, **claims):
        payload = {
            "email": email,
            "role": role,
            "exp": datetime.now(timezone.utc) + expires_in,
            **claims,
        }
        return jwt.encode(
            payload,
            secret or settings.LICENSING["JWT_SECRET"],
            algorithm=settings.LICENSING["JWT_ALGORITHM"],
        )

    return make


@pytest.fixture
def db_superadmin(db):
    """Fixture for a superadmin account saved in database."""
    return DjangoAdminRepository().create(
        Admin.create(
            email=SUPERADMIN_EMAIL,
            password_hash=make_password("root-password"),
            name="Root",
            role=UserRole.SUPERADMIN,
        )
    )


@pytest.fixture
def superadmin_client(api_client, make_token, db_superadmin):
    """Fixture for an API client authenticated as the superadmin."""
    token = make_token(SUPERADMIN_EMAIL, role="superadmin", user_id=db_superadmin.id)
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return api_client
