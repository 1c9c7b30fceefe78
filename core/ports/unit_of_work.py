"""
Unit of work port (interface).

Scopes a sequence of store calls to one atomic transaction.
"""
from abc import ABC, abstractmethod
from typing import ContextManager


class UnitOfWork(ABC):
    """
    Abstract transaction boundary.

    Every store call made inside ``atomic()`` commits or rolls back
    together. Nested calls join the outer transaction.
    """

    @abstractmethod
    def atomic(self) -> ContextManager[None]:
        """
        Open a transaction scope.

        Returns:
            Context manager that commits on normal exit and rolls
            back when an exception escapes
        """
