"""
Database utilities and transaction management.
"""

import contextlib
from typing import Iterator

from django.db import transaction

from core.ports.unit_of_work import UnitOfWork


class DjangoUnitOfWork(UnitOfWork):
    """Unit of work backed by ``django.db.transaction.atomic``."""

    def __init__(self, using: str = None):
        self.using = using

    @contextlib.contextmanager
    def atomic(self) -> Iterator[None]:
        """
        Transaction scope for the configured database alias.

        Usage:
            with uow.atomic():
                # Database operations
                pass
        """
        with transaction.atomic(using=self.using):
            yield
